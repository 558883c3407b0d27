"""
jsdoclint

Validates JSDoc comments on JavaScript functions against the functions they
document.
"""

__version__ = "0.1.0"

from jsdoclint.driver import (
    lint_file,
    lint_program,
    lint_string,
    LintContext,
    LintError,
    LintResult,
    LintStage,
    LintStatistics,
)
from jsdoclint.config import LintConfig, ValidJSDocOptions, load_config
from jsdoclint.reporting.diagnostics import Diagnostic, Severity

__all__ = [
    "lint_file",
    "lint_program",
    "lint_string",
    "LintContext",
    "LintError",
    "LintResult",
    "LintStage",
    "LintStatistics",
    "LintConfig",
    "ValidJSDocOptions",
    "load_config",
    "Diagnostic",
    "Severity",
]
