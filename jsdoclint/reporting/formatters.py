"""
Report Formatters
Render lint results for the terminal or for tools.

``stylish`` and ``compact`` are Jinja2 templates under ``templates/``;
``json`` is an ESLint-compatible machine-readable report.
"""

import json
import os
from typing import Any, Dict, Iterable, List

from jinja2 import Environment, FileSystemLoader

from jsdoclint.reporting.diagnostics import Severity

FORMATS = ('stylish', 'compact', 'json')


class ReportFormatter:
    """Renders lint results with Jinja2 templates."""

    def __init__(self):
        """Initialize the formatter with the bundled templates."""
        template_dir = os.path.join(os.path.dirname(__file__), 'templates')
        self.env = Environment(
            loader=FileSystemLoader(template_dir),
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
        )

    def format(self, results: Iterable[Any], fmt: str = 'stylish') -> str:
        """
        Format lint results.

        Args:
            results: LintResult objects (``file_path``, ``messages``, ``errors``)
            fmt: One of ``stylish``, ``compact`` or ``json``

        Returns:
            The rendered report; empty for stylish/compact when clean
        """
        if fmt not in FORMATS:
            raise ValueError(f"Unknown format: {fmt!r} (expected one of {', '.join(FORMATS)})")

        files = [self._file_entry(result) for result in results]
        if fmt == 'json':
            return json.dumps([self._json_entry(entry) for entry in files], indent=2)

        files = [entry for entry in files if entry['rows']]
        errors = sum(entry['error_count'] for entry in files)
        warnings = sum(entry['warning_count'] for entry in files)
        template = self.env.get_template(f'{fmt}.jinja')
        return template.render(
            files=files,
            total=errors + warnings,
            errors=errors,
            warnings=warnings,
        )

    def _file_entry(self, result: Any) -> Dict[str, Any]:
        rows: List[Dict[str, Any]] = []
        for error in result.errors:
            rows.append({
                'line': error.line,
                'column': error.column,
                'severity': Severity.ERROR,
                'message': error.format_message(),
                'rule_id': None,
            })
        for diagnostic in result.messages:
            rows.append({
                'line': diagnostic.line,
                'column': diagnostic.column,
                'severity': diagnostic.severity,
                'message': diagnostic.message,
                'rule_id': diagnostic.rule_id,
            })

        width = max((len(self._location(row)) for row in rows), default=0)
        for row in rows:
            row['location'] = self._location(row).ljust(width)
            row['label'] = row['severity'].label.ljust(7)
            row['column'] = row['column'] or 0

        return {
            'path': str(result.file_path),
            'rows': rows,
            'error_count': sum(1 for row in rows if row['severity'] is Severity.ERROR),
            'warning_count': sum(1 for row in rows if row['severity'] is Severity.WARN),
        }

    @staticmethod
    def _location(row: Dict[str, Any]) -> str:
        return f"{row['line']}:{row['column'] or 0}"

    @staticmethod
    def _json_entry(entry: Dict[str, Any]) -> Dict[str, Any]:
        return {
            'filePath': entry['path'],
            'messages': [
                {
                    'ruleId': row['rule_id'],
                    'severity': int(row['severity']),
                    'message': row['message'],
                    'line': row['line'],
                    'column': row['column'],
                }
                for row in entry['rows']
            ],
            'errorCount': entry['error_count'],
            'warningCount': entry['warning_count'],
        }


_default_formatter = None


def format_results(results: Iterable[Any], fmt: str = 'stylish') -> str:
    """Format results with a shared ReportFormatter."""
    global _default_formatter
    if _default_formatter is None:
        _default_formatter = ReportFormatter()
    return _default_formatter.format(results, fmt)
