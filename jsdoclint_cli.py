#!/usr/bin/env python3
"""
jsdoclint CLI Entry Point

Usage:
    jsdoclint src/app.js
    jsdoclint src/*.js --no-require-return -f compact
    jsdoclint lib/util.js -c .jsdoclintrc.json --stats
"""

import sys
from jsdoclint.driver import main

if __name__ == "__main__":
    sys.exit(main())
