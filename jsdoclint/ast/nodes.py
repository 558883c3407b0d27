"""
Abstract Syntax Tree Node Definitions
ESTree-shaped nodes for the JavaScript subset understood by jsdoclint.
"""

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Iterator, List, Optional

_LOCATION_FIELDS = frozenset({"lineno", "col_offset", "start", "parent"})


@dataclass
class Node:
    """Base class for all AST nodes with location information."""

    # Location information - keyword-only so subclass fields come first positionally
    lineno: int = field(default=0, kw_only=True)
    col_offset: int = field(default=0, kw_only=True)
    start: int = field(default=0, kw_only=True)
    parent: Optional["Node"] = field(default=None, kw_only=True, repr=False, compare=False)

    @property
    def type(self) -> str:
        """ESTree node type name."""
        return self.__class__.__name__

    def children(self) -> Iterator["Node"]:
        """Yield child nodes in source order."""
        for f in fields(self):
            if f.name in _LOCATION_FIELDS:
                continue
            value = getattr(self, f.name)
            if isinstance(value, Node):
                yield value
            elif isinstance(value, list):
                for item in value:
                    if isinstance(item, Node):
                        yield item

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for debugging."""
        result: Dict[str, Any] = {"type": self.type, "loc": {"line": self.lineno, "column": self.col_offset}}
        for f in fields(self):
            if f.name in _LOCATION_FIELDS:
                continue
            value = getattr(self, f.name)
            if isinstance(value, Node):
                result[f.name] = value.to_dict()
            elif isinstance(value, list):
                result[f.name] = [item.to_dict() if isinstance(item, Node) else item for item in value]
            else:
                result[f.name] = value
        return result


@dataclass
class Comment:
    """A source comment collected by the lexer.

    ``value`` excludes the ``/*``, ``*/`` or ``//`` delimiters, the same way
    ESTree comment values do.
    """

    kind: str  # "Block" | "Line"
    value: str
    start: int = 0
    end: int = 0
    lineno: int = 0
    col_offset: int = 0
    end_lineno: int = 0

    @property
    def type(self) -> str:
        return self.kind

    @property
    def is_jsdoc(self) -> bool:
        """True for ``/** ... */`` block comments."""
        return self.kind == "Block" and self.value.startswith("*")


# Expression nodes
@dataclass
class Expression(Node):
    """Base class for expression nodes."""
    pass


@dataclass
class Identifier(Expression):
    name: str = ""


@dataclass
class Literal(Expression):
    value: Any = None
    raw: str = ""


@dataclass
class ThisExpression(Expression):
    pass


@dataclass
class ArrayExpression(Expression):
    elements: List[Expression] = field(default_factory=list)


@dataclass
class Property(Node):
    """Object literal ``key: value`` entry."""
    key: Optional[Expression] = None
    value: Optional[Expression] = None


@dataclass
class ObjectExpression(Expression):
    properties: List[Property] = field(default_factory=list)


@dataclass
class MemberExpression(Expression):
    object: Optional[Expression] = None
    property: Optional[Expression] = None
    computed: bool = False


@dataclass
class CallExpression(Expression):
    callee: Optional[Expression] = None
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class NewExpression(Expression):
    callee: Optional[Expression] = None
    arguments: List[Expression] = field(default_factory=list)


@dataclass
class UnaryExpression(Expression):
    operator: str = ""
    argument: Optional[Expression] = None
    prefix: bool = True


@dataclass
class UpdateExpression(Expression):
    operator: str = ""
    argument: Optional[Expression] = None
    prefix: bool = True


@dataclass
class BinaryExpression(Expression):
    operator: str = ""
    left: Optional[Expression] = None
    right: Optional[Expression] = None


@dataclass
class LogicalExpression(Expression):
    operator: str = ""
    left: Optional[Expression] = None
    right: Optional[Expression] = None


@dataclass
class AssignmentExpression(Expression):
    operator: str = "="
    left: Optional[Expression] = None
    right: Optional[Expression] = None


@dataclass
class ConditionalExpression(Expression):
    test: Optional[Expression] = None
    consequent: Optional[Expression] = None
    alternate: Optional[Expression] = None


# Statement nodes
@dataclass
class Statement(Node):
    """Base class for statement nodes."""
    pass


@dataclass
class BlockStatement(Statement):
    body: List[Node] = field(default_factory=list)


@dataclass
class EmptyStatement(Statement):
    pass


@dataclass
class ExpressionStatement(Statement):
    expression: Optional[Expression] = None


@dataclass
class VariableDeclarator(Node):
    id: Optional[Identifier] = None
    init: Optional[Expression] = None


@dataclass
class VariableDeclaration(Statement):
    kind: str = "var"
    declarations: List[VariableDeclarator] = field(default_factory=list)


@dataclass
class ReturnStatement(Statement):
    argument: Optional[Expression] = None


@dataclass
class IfStatement(Statement):
    test: Optional[Expression] = None
    consequent: Optional[Statement] = None
    alternate: Optional[Statement] = None


@dataclass
class WhileStatement(Statement):
    test: Optional[Expression] = None
    body: Optional[Statement] = None


@dataclass
class DoWhileStatement(Statement):
    body: Optional[Statement] = None
    test: Optional[Expression] = None


@dataclass
class ForStatement(Statement):
    init: Optional[Node] = None
    test: Optional[Expression] = None
    update: Optional[Expression] = None
    body: Optional[Statement] = None


@dataclass
class ForInStatement(Statement):
    left: Optional[Node] = None
    right: Optional[Expression] = None
    body: Optional[Statement] = None


@dataclass
class ThrowStatement(Statement):
    argument: Optional[Expression] = None


@dataclass
class CatchClause(Node):
    param: Optional[Identifier] = None
    body: Optional[BlockStatement] = None


@dataclass
class TryStatement(Statement):
    block: Optional[BlockStatement] = None
    handler: Optional[CatchClause] = None
    finalizer: Optional[BlockStatement] = None


@dataclass
class SwitchCase(Node):
    test: Optional[Expression] = None  # None for ``default:``
    consequent: List[Node] = field(default_factory=list)


@dataclass
class SwitchStatement(Statement):
    discriminant: Optional[Expression] = None
    cases: List[SwitchCase] = field(default_factory=list)


@dataclass
class BreakStatement(Statement):
    pass


@dataclass
class ContinueStatement(Statement):
    pass


# Functions
@dataclass
class FunctionDeclaration(Statement):
    id: Optional[Identifier] = None
    params: List[Identifier] = field(default_factory=list)
    body: Optional[BlockStatement] = None


@dataclass
class FunctionExpression(Expression):
    id: Optional[Identifier] = None
    params: List[Identifier] = field(default_factory=list)
    body: Optional[BlockStatement] = None


FUNCTION_TYPES = (FunctionDeclaration, FunctionExpression)


# Program node
@dataclass
class Program(Node):
    """Root node representing an entire source file."""
    body: List[Node] = field(default_factory=list)
    comments: List[Comment] = field(default_factory=list)
    source: str = field(default="", repr=False)
