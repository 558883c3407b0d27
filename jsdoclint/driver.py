"""
jsdoclint Driver - Main Lint Orchestrator

This module provides the main entry point for linting JavaScript files.
It runs the complete pipeline from source text to a formatted report.

Lint Pipeline:
    1. Reading → Source text
    2. Parsing (Lexer + Parser) → AST with comments
    3. Linting (valid-jsdoc over a depth-first traversal) → Diagnostics
    4. Reporting → stylish / compact / json output

Usage:
    # Command-line interface
    $ jsdoclint src/*.js --no-require-return --prefer returns=return

    # Python API
    from jsdoclint.driver import lint_string
    diagnostics = lint_string(source, {"requireReturn": False})
"""

import argparse
import logging
import sys
import time
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

from jsdoclint.ast.nodes import FUNCTION_TYPES, Program
from jsdoclint.config import LintConfig, ValidJSDocOptions, load_config, resolve_options
from jsdoclint.errors import ConfigError, JSSyntaxError
from jsdoclint.parser.js_parser import parse as parser_parse
from jsdoclint.reporting.diagnostics import Diagnostic, DiagnosticCollector, Severity
from jsdoclint.reporting.formatters import FORMATS, format_results
from jsdoclint.rules.context import RuleContext
from jsdoclint.rules.valid_jsdoc import RULE_ID, ValidJSDoc
from jsdoclint.traversal import Traverser, iter_nodes

EXIT_OK = 0
EXIT_LINT_ERRORS = 1
EXIT_CONFIG_ERROR = 2


# ============================================================================
# Enumerations
# ============================================================================

class LintStage(Enum):
    """Lint pipeline stages."""
    READING = "reading"
    PARSING = "parsing"
    LINTING = "linting"


# ============================================================================
# Data Classes
# ============================================================================

@dataclass
class LintContext:
    """Context for one file's lint run."""
    source_file: Optional[Path] = None
    source: Optional[str] = None
    config: LintConfig = field(default_factory=LintConfig)
    verbose: bool = False
    debug: bool = False

    # Statistics
    start_time: float = field(default_factory=time.time)

    @property
    def display_name(self) -> str:
        return str(self.source_file) if self.source_file else "<input>"


@dataclass
class LintError:
    """A failure that stopped linting a file."""
    stage: LintStage
    message: str
    line: int = 0
    column: int = 0

    def format_message(self) -> str:
        if self.stage is LintStage.PARSING:
            return f"Parsing error: {self.message}"
        return self.message

    def __str__(self) -> str:
        """Format error message."""
        location = f"Line {self.line}, Col {self.column}" if self.line > 0 else "Unknown location"
        return f"[{self.stage.value}] ERROR: {location}: {self.message}"


@dataclass
class LintStatistics:
    """Statistics about one lint run."""
    total_time: float = 0.0
    stage_times: Dict[str, float] = field(default_factory=dict)
    source_lines: int = 0
    ast_nodes: int = 0
    functions: int = 0
    comments: int = 0
    diagnostics: int = 0

    def format_report(self) -> str:
        """Format statistics as a readable report."""
        lines = [
            "=" * 70,
            "Lint Statistics",
            "=" * 70,
            f"Total Time:        {self.total_time:.3f}s",
            f"Source Lines:      {self.source_lines}",
            f"AST Nodes:         {self.ast_nodes}",
            f"Functions:         {self.functions}",
            f"Comments:          {self.comments}",
            f"Diagnostics:       {self.diagnostics}",
            "",
            "Stage Times:",
        ]

        for stage, duration in self.stage_times.items():
            percentage = (duration / self.total_time * 100) if self.total_time > 0 else 0
            lines.append(f"  {stage:20s} {duration:8.3f}s ({percentage:5.1f}%)")

        lines.append("=" * 70)
        return "\n".join(lines)


@dataclass
class LintResult:
    """Result of linting one file."""
    file_path: str = "<input>"
    messages: List[Diagnostic] = field(default_factory=list)
    errors: List[LintError] = field(default_factory=list)
    statistics: Optional[LintStatistics] = None
    ast: Optional[Program] = None

    @property
    def has_errors(self) -> bool:
        """True when the file failed or has an error-severity diagnostic."""
        return bool(self.errors) or self.error_count > 0

    @property
    def error_count(self) -> int:
        return sum(1 for m in self.messages if m.severity is Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for m in self.messages if m.severity is Severity.WARN)

    @property
    def success(self) -> bool:
        return not self.errors

    def format_diagnostics(self) -> str:
        """Format failures and diagnostics for display."""
        lines = []
        if self.errors:
            lines.append(f"\n{len(self.errors)} Error(s):")
            for error in self.errors:
                lines.append(f"  {error}")
        if self.messages:
            lines.append(f"\n{len(self.messages)} Problem(s):")
            for message in self.messages:
                lines.append(f"  {message}")
        return "\n".join(lines) if lines else "No diagnostics"


# ============================================================================
# Linting
# ============================================================================

def lint_program(program: Program, config: Optional[LintConfig] = None) -> List[Diagnostic]:
    """
    Run valid-jsdoc over a parsed program.

    Args:
        program: Program node returned by the parser
        config: Rule options and severity (default: all defaults, error severity)

    Returns:
        Diagnostics ordered by line, then column; ties keep emission order
    """
    config = config or LintConfig()
    if not config.enabled:
        return []

    collector = DiagnosticCollector()
    context = RuleContext(RULE_ID, program, collector, config.options, config.severity)
    rule = ValidJSDoc(context)
    Traverser(rule.listeners()).traverse(program)
    return collector.sorted()


def lint_string(
    source: str,
    options: Optional[Union[ValidJSDocOptions, Mapping[str, Any]]] = None,
) -> List[Diagnostic]:
    """
    Lint JavaScript source code from a string.

    Args:
        source: JavaScript source
        options: ValidJSDocOptions or an ESLint-style options dict

    Returns:
        Sorted diagnostics

    Raises:
        JSSyntaxError: if the source cannot be parsed
        ConfigError: if the options are invalid

    Example:
        >>> diagnostics = lint_string('/** @param {String} x the value */ function f(x) {}')
        >>> [d.message for d in diagnostics]
        ['Missing JSDoc @return for function.', 'Expected JSDoc type name "string" but found "String".']
    """
    program = parser_parse(source)
    return lint_program(program, LintConfig(options=resolve_options(options)))


# ============================================================================
# Lint Pipeline
# ============================================================================

class LintPipeline:
    """Runs the lint stages for one file."""

    def __init__(self, context: LintContext):
        """Initialize lint pipeline."""
        self.context = context
        self.logger = self._setup_logger()
        self.result = LintResult(file_path=context.display_name)
        self.stats = LintStatistics()

    def _setup_logger(self) -> logging.Logger:
        """Set up logging."""
        logger = logging.getLogger("jsdoclint.driver")
        logger.setLevel(logging.DEBUG if self.context.debug else
                        logging.INFO if self.context.verbose else
                        logging.WARNING)

        if not logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            logger.addHandler(handler)

        return logger

    def _stage_wrapper(self, stage: LintStage, func, *args, **kwargs):
        """Wrap stage execution with timing and error handling."""
        self.logger.info(f"Starting stage: {stage.value}")
        stage_start = time.time()

        try:
            result = func(*args, **kwargs)
            stage_time = time.time() - stage_start
            self.stats.stage_times[stage.value] = stage_time
            self.logger.info(f"Completed stage: {stage.value} ({stage_time:.3f}s)")
            return result, None
        except JSSyntaxError as e:
            self.stats.stage_times[stage.value] = time.time() - stage_start
            self.logger.info(f"Failed stage: {stage.value} - {e}")
            return None, LintError(stage=stage, message=e.message, line=e.lineno, column=e.col_offset + 1)
        except Exception as e:
            self.stats.stage_times[stage.value] = time.time() - stage_start
            self.logger.error(f"Failed stage: {stage.value} - {e}")
            self.logger.debug("Stage failure traceback", exc_info=True)
            return None, LintError(stage=stage, message=str(e))

    def run(self) -> LintResult:
        """Execute the pipeline and return the file's result."""
        self.logger.info(f"Linting: {self.context.display_name}")

        source, error = self._stage_wrapper(LintStage.READING, self._reading_stage)
        if error:
            self.result.errors.append(error)
            return self._finalize_result()
        self.stats.source_lines = sum(1 for line in source.split('\n') if line.strip())

        program, error = self._stage_wrapper(LintStage.PARSING, self._parsing_stage, source)
        if error:
            self.result.errors.append(error)
            return self._finalize_result()
        self.result.ast = program

        messages, error = self._stage_wrapper(LintStage.LINTING, self._linting_stage, program)
        if error:
            self.result.errors.append(error)
            return self._finalize_result()
        self.result.messages = messages

        return self._finalize_result()

    def _reading_stage(self) -> str:
        """Stage 1: Reading."""
        if self.context.source is not None:
            return self.context.source
        with open(self.context.source_file, 'r', encoding='utf-8') as f:
            return f.read()

    def _parsing_stage(self, source: str) -> Program:
        """Stage 2: Parsing."""
        program = parser_parse(source)
        self.stats.comments = len(program.comments)
        nodes = list(iter_nodes(program))
        self.stats.ast_nodes = len(nodes)
        self.stats.functions = sum(1 for node in nodes if isinstance(node, FUNCTION_TYPES))
        return program

    def _linting_stage(self, program: Program) -> List[Diagnostic]:
        """Stage 3: Linting."""
        messages = lint_program(program, self.context.config)
        self.logger.debug(f"{len(messages)} diagnostic(s) in {self.context.display_name}")
        return messages

    def _finalize_result(self) -> LintResult:
        """Finalize result with statistics."""
        self.stats.total_time = time.time() - self.context.start_time
        self.stats.diagnostics = len(self.result.messages)
        self.result.statistics = self.stats

        if self.result.errors:
            self.logger.warning(f"✗ {self.context.display_name}: {len(self.result.errors)} error(s)")
        else:
            self.logger.info(
                f"✓ {self.context.display_name}: {len(self.result.messages)} problem(s) "
                f"in {self.stats.total_time:.3f}s"
            )
        return self.result


def lint_file(
    source_file: Union[str, Path],
    config: Optional[LintConfig] = None,
    verbose: bool = False,
    debug: bool = False,
) -> LintResult:
    """
    Lint a JavaScript file.

    Args:
        source_file: Path to the file
        config: Lint configuration (default: defaults with error severity)
        verbose: Enable verbose logging
        debug: Enable debug logging

    Returns:
        LintResult; read and parse failures are recorded in ``errors``
    """
    context = LintContext(
        source_file=Path(source_file),
        config=config or LintConfig(),
        verbose=verbose,
        debug=debug,
    )
    return LintPipeline(context).run()


# ============================================================================
# CLI Interface
# ============================================================================

def create_argument_parser() -> argparse.ArgumentParser:
    """Create command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="jsdoclint",
        description="jsdoclint - Validate JSDoc comments against the functions they document",
    )

    # Positional arguments
    parser.add_argument(
        "files",
        nargs="+",
        help="JavaScript files to lint"
    )

    # Rule options
    rule_group = parser.add_argument_group("Rule Options")
    rule_group.add_argument(
        "-c", "--config",
        type=str,
        default=None,
        help="JSON configuration file"
    )
    rule_group.add_argument(
        "--no-require-return",
        action="store_true",
        help="Only require @return when the function returns a value"
    )
    rule_group.add_argument(
        "--no-require-param-description",
        action="store_true",
        help="Allow @param tags without a description"
    )
    rule_group.add_argument(
        "--prefer",
        action="append",
        default=[],
        metavar="TITLE=PREFERRED",
        help="Report @TITLE and suggest @PREFERRED instead (repeatable)"
    )

    # Output options
    output_group = parser.add_argument_group("Output Options")
    output_group.add_argument(
        "-f", "--format",
        type=str,
        choices=list(FORMATS),
        default="stylish",
        help="Output format (default: stylish)"
    )

    # Diagnostic options
    diag_group = parser.add_argument_group("Diagnostic Options")
    diag_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )
    diag_group.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    diag_group.add_argument(
        "--stats",
        action="store_true",
        help="Show lint statistics"
    )

    return parser


def parse_prefer(pairs: List[str]) -> Dict[str, str]:
    """Parse ``TITLE=PREFERRED`` pairs from the command line."""
    prefer = {}
    for pair in pairs:
        title, sep, preferred = pair.partition("=")
        title, preferred = title.strip().lstrip("@"), preferred.strip().lstrip("@")
        if not sep or not title or not preferred:
            raise ConfigError(f"Invalid --prefer value {pair!r}, expected TITLE=PREFERRED")
        prefer[title] = preferred
    return prefer


def build_config(args: argparse.Namespace) -> LintConfig:
    """Combine the config file (if any) with command-line overrides."""
    config = load_config(args.config) if args.config else LintConfig()
    options = config.options.merged(
        require_return=False if args.no_require_return else None,
        require_param_description=False if args.no_require_param_description else None,
        prefer=parse_prefer(args.prefer) or None,
    )
    return LintConfig(options=options, severity=config.severity)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for CLI.

    Args:
        argv: Command-line arguments (default: sys.argv[1:])

    Returns:
        Exit code: 0 when clean, 1 on lint errors or failures, 2 on bad configuration
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"✗ Configuration error: {e}", file=sys.stderr)
        return EXIT_CONFIG_ERROR

    results = [
        lint_file(path, config=config, verbose=args.verbose, debug=args.debug)
        for path in args.files
    ]

    report = format_results(results, args.format)
    if report.strip():
        print(report)

    if args.stats:
        for result in results:
            print(f"{result.file_path}:", file=sys.stderr)
            print(result.statistics.format_report(), file=sys.stderr)

    return EXIT_LINT_ERRORS if any(result.has_errors for result in results) else EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
