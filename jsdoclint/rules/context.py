"""
Rule Context
What a rule sees of the file being linted: its options, the comments that
precede a node, and a ``report`` method that forwards to the diagnostic sink.
"""

from bisect import bisect_right
from typing import Any, Dict, List, Optional, Union

from jsdoclint.ast.nodes import (
    CallExpression,
    Comment,
    FunctionDeclaration,
    FunctionExpression,
    NewExpression,
    Node,
    Program,
)
from jsdoclint.reporting.diagnostics import Diagnostic, DiagnosticCollector, Severity

Anchor = Union[Node, Comment]


class RuleContext:
    """Per-file, per-rule view handed to a rule's constructor."""

    def __init__(
        self,
        rule_id: str,
        program: Program,
        collector: DiagnosticCollector,
        options: Any = None,
        severity: Severity = Severity.ERROR,
    ):
        self.rule_id = rule_id
        self.program = program
        self.collector = collector
        self.options = options
        self.severity = severity
        self._comments = program.comments
        self._comment_ends = [c.end for c in program.comments]

    def get_source(self) -> str:
        return self.program.source

    def leading_comments(self, node: Node) -> List[Comment]:
        """Comments directly before ``node``, separated only by whitespace."""
        if isinstance(node, Program):
            return []
        source = self.program.source
        result: List[Comment] = []
        position = node.start
        index = bisect_right(self._comment_ends, position) - 1
        while index >= 0:
            comment = self._comments[index]
            if source[comment.end:position].strip():
                break
            result.append(comment)
            position = comment.start
            index -= 1
        result.reverse()
        return result

    def get_jsdoc_comment(self, node: Node) -> Optional[Comment]:
        """Return the JSDoc comment documenting a function node, if any.

        Function expressions passed directly as call or ``new`` arguments are
        never documented. Otherwise the nearest ancestor carrying comments
        supplies them, unless a function is reached first.
        """
        if isinstance(node, FunctionDeclaration):
            return _find_jsdoc_comment(self.leading_comments(node), node.lineno)
        if not isinstance(node, FunctionExpression):
            return None

        parent = node.parent
        if isinstance(parent, (CallExpression, NewExpression)):
            return None
        while (
            parent is not None
            and not self.leading_comments(parent)
            and not isinstance(parent, (FunctionDeclaration, FunctionExpression))
        ):
            parent = parent.parent
        if parent is None or isinstance(parent, FunctionDeclaration):
            return None
        return _find_jsdoc_comment(self.leading_comments(parent), parent.lineno)

    def report(
        self,
        anchor: Anchor,
        message: str,
        data: Optional[Dict[str, Any]] = None,
        *,
        line: Optional[int] = None,
        column: Optional[int] = None,
    ) -> Diagnostic:
        """Report a problem.

        Without ``line`` the anchor's own start position is used. A ``line``
        override without ``column`` reports a line-only location.
        """
        if line is None:
            line = anchor.lineno
            column = anchor.col_offset + 1
        return self.collector.report(
            self.rule_id,
            message,
            line,
            column,
            data,
            severity=self.severity,
            node_type=anchor.type,
        )


def _find_jsdoc_comment(comments: List[Comment], line: int) -> Optional[Comment]:
    """Pick the last JSDoc block from ``comments`` if it ends next to ``line``."""
    for comment in reversed(comments):
        if comment.is_jsdoc:
            if line - comment.end_lineno <= 1:
                return comment
            break
    return None
