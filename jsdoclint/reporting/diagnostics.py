"""
Diagnostics
Located lint messages and the collector that receives them from rules.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Optional

from jinja2 import Environment, StrictUndefined

_message_env = Environment(autoescape=False, undefined=StrictUndefined, keep_trailing_newline=True)


@lru_cache(maxsize=128)
def _compile_message(template: str):
    return _message_env.from_string(template)


def render_message(template: str, data: Optional[Dict[str, Any]] = None) -> str:
    """Substitute ``{{key}}`` placeholders in a message template."""
    if not data:
        return template
    return _compile_message(template).render(**data)


class Severity(IntEnum):
    OFF = 0
    WARN = 1
    ERROR = 2

    @property
    def label(self) -> str:
        return "warning" if self is Severity.WARN else self.name.lower()


@dataclass
class Diagnostic:
    """One reported problem.

    ``line`` is 1-based. ``column`` is 1-based, or ``None`` when the problem
    is only known to a line.
    """

    rule_id: str
    message_template: str
    line: int
    column: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)
    severity: Severity = Severity.ERROR
    node_type: Optional[str] = None

    @property
    def message(self) -> str:
        return render_message(self.message_template, self.data)

    @property
    def sort_key(self):
        return (self.line, self.column or 0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ruleId": self.rule_id,
            "severity": int(self.severity),
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "nodeType": self.node_type,
        }

    def __str__(self) -> str:
        if self.column is not None:
            return f"Line {self.line}, Col {self.column}: {self.message}"
        return f"Line {self.line}: {self.message}"


class DiagnosticCollector:
    """Sink that records diagnostics in emission order."""

    def __init__(self):
        self.diagnostics: List[Diagnostic] = []

    def report(
        self,
        rule_id: str,
        message: str,
        line: int,
        column: Optional[int] = None,
        data: Optional[Dict[str, Any]] = None,
        severity: Severity = Severity.ERROR,
        node_type: Optional[str] = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(
            rule_id=rule_id,
            message_template=message,
            line=line,
            column=column,
            data=dict(data or {}),
            severity=severity,
            node_type=node_type,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic

    def sorted(self) -> List[Diagnostic]:
        """Diagnostics ordered by position; ties keep emission order."""
        return sorted(self.diagnostics, key=lambda d: d.sort_key)

    def clear(self) -> None:
        self.diagnostics.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.diagnostics)

    def __len__(self) -> int:
        return len(self.diagnostics)
