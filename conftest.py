"""Root conftest.py: puts the project root on sys.path for every test.

Tests import ``jsdoclint`` directly; ``pip install -e .`` works too, but is not
required to run pytest from a checkout. The JavaScript and config fixtures live
under ``tests/fixtures``.
"""
import sys
from pathlib import Path

PROJECT_ROOT = str(Path(__file__).resolve().parent)
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)
