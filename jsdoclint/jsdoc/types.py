"""
JSDoc Type Expression Nodes
Dataclass nodes for Closure Compiler style type expressions as they appear
between the braces of a JSDoc tag, e.g. ``{Array.<string>|null}``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TypeNode:
    """Base class for all type expression nodes."""

    @property
    def type(self) -> str:
        return self.__class__.__name__

    def to_dict(self) -> Dict[str, Any]:
        """Convert node to dictionary for debugging."""
        result: Dict[str, Any] = {"type": self.type}
        for key, value in self.__dict__.items():
            if isinstance(value, TypeNode):
                result[key] = value.to_dict()
            elif isinstance(value, list):
                result[key] = [v.to_dict() if isinstance(v, TypeNode) else v for v in value]
            else:
                result[key] = value
        return result


@dataclass
class NameExpression(TypeNode):
    """A named type such as ``string``, ``Foo.Bar`` or ``void``."""
    name: str


@dataclass
class AllLiteral(TypeNode):
    """``*``"""
    pass


@dataclass
class NullableLiteral(TypeNode):
    """A bare ``?``"""
    pass


@dataclass
class TypeApplication(TypeNode):
    """``Array.<T>``, ``Object<K, V>`` and the ``T[]`` shorthand."""
    expression: TypeNode
    applications: List[TypeNode] = field(default_factory=list)


@dataclass
class UnionType(TypeNode):
    elements: List[TypeNode] = field(default_factory=list)


@dataclass
class ArrayType(TypeNode):
    """Tuple-like ``[a, b]``."""
    elements: List[TypeNode] = field(default_factory=list)


@dataclass
class FieldType(TypeNode):
    key: str
    value: Optional[TypeNode] = None


@dataclass
class RecordType(TypeNode):
    fields: List[FieldType] = field(default_factory=list)


@dataclass
class FunctionType(TypeNode):
    params: List[TypeNode] = field(default_factory=list)
    result: Optional[TypeNode] = None
    this: Optional[TypeNode] = None
    new: Optional[TypeNode] = None


@dataclass
class NullableType(TypeNode):
    expression: TypeNode
    prefix: bool = True


@dataclass
class NonNullableType(TypeNode):
    expression: TypeNode
    prefix: bool = True


@dataclass
class OptionalType(TypeNode):
    expression: TypeNode


@dataclass
class RestType(TypeNode):
    expression: Optional[TypeNode] = None


def stringify(node: Optional[TypeNode]) -> str:
    """Render a type expression back to compact JSDoc syntax."""
    if node is None:
        return ""
    if isinstance(node, NameExpression):
        return node.name
    if isinstance(node, AllLiteral):
        return "*"
    if isinstance(node, NullableLiteral):
        return "?"
    if isinstance(node, TypeApplication):
        inner = ", ".join(stringify(a) for a in node.applications)
        return f"{stringify(node.expression)}.<{inner}>"
    if isinstance(node, UnionType):
        return "(" + "|".join(stringify(e) for e in node.elements) + ")"
    if isinstance(node, ArrayType):
        return "[" + ", ".join(stringify(e) for e in node.elements) + "]"
    if isinstance(node, FieldType):
        if node.value is None:
            return node.key
        return f"{node.key}: {stringify(node.value)}"
    if isinstance(node, RecordType):
        return "{" + ", ".join(stringify(f) for f in node.fields) + "}"
    if isinstance(node, FunctionType):
        params = []
        if node.new is not None:
            params.append(f"new:{stringify(node.new)}")
        if node.this is not None:
            params.append(f"this:{stringify(node.this)}")
        params.extend(stringify(p) for p in node.params)
        text = "function(" + ", ".join(params) + ")"
        if node.result is not None:
            text += f": {stringify(node.result)}"
        return text
    if isinstance(node, NullableType):
        inner = stringify(node.expression)
        return f"?{inner}" if node.prefix else f"{inner}?"
    if isinstance(node, NonNullableType):
        inner = stringify(node.expression)
        return f"!{inner}" if node.prefix else f"{inner}!"
    if isinstance(node, OptionalType):
        return f"{stringify(node.expression)}="
    if isinstance(node, RestType):
        return "..." + stringify(node.expression)
    raise TypeError(f"Unknown type node: {node!r}")
