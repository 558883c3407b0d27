"""
JSDoc comment parsing: tags, names and Closure-style type expressions.
"""

from jsdoclint.jsdoc.comment_parser import ParsedComment, Tag, parse_comment
from jsdoclint.jsdoc.type_parser import parse_type

__all__ = ["ParsedComment", "Tag", "parse_comment", "parse_type"]
