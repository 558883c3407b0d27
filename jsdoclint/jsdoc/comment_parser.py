"""
JSDoc Comment Parser
Turns the text of a ``/** ... */`` comment into a description and an ordered
list of tags.

Each tag records the line it starts on as an offset from the first line of
the comment, so callers can map tags back to absolute source positions.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from jsdoclint.errors import JSDocSyntaxError, ParseErrorKind
from jsdoclint.jsdoc.type_parser import parse_type
from jsdoclint.jsdoc.types import OptionalType, TypeNode

logger = logging.getLogger(__name__)

# Titles that may carry a ``{type}``
TYPED_TITLES = frozenset({
    'param', 'arg', 'argument', 'property', 'prop',
    'return', 'returns', 'throws', 'exception',
    'type', 'typedef', 'enum', 'this', 'define',
    'implements', 'augments', 'extends', 'const', 'constant',
})

# Titles that must be followed by a name
NAMED_TITLES = frozenset({'param', 'arg', 'argument', 'property', 'prop', 'typedef'})

_TITLE_RE = re.compile(r'@(\w*)')
_NAME_RE = re.compile(r'[A-Za-z_$][\w$]*(?:\[\])?(?:\.[A-Za-z_$][\w$]*(?:\[\])?)*')
_GUTTER_RE = re.compile(r'^[ \t]*\*?[ \t]?')
_DASH_RE = re.compile(r'^-\s+')


@dataclass
class Tag:
    """One ``@title ...`` entry of a comment."""

    title: str
    description: Optional[str] = None
    type: Optional[TypeNode] = None
    name: Optional[str] = None
    line_number: int = 0
    optional: bool = False
    default: Optional[str] = None


@dataclass
class ParsedComment:
    """Result of parsing one comment."""

    description: str = ""
    tags: List[Tag] = field(default_factory=list)
    errors: List[JSDocSyntaxError] = field(default_factory=list)


def unwrap_comment(text: str) -> str:
    """Strip comment delimiters and the leading ``*`` gutter of every line.

    The number of lines is preserved.
    """
    if text.startswith('/*'):
        text = text[3:] if text.startswith('/**') else text[2:]
    if text.endswith('*/'):
        text = text[:-2]
    return '\n'.join(_GUTTER_RE.sub('', line, count=1) for line in text.split('\n'))


def _split_tags(lines: List[str]) -> Tuple[List[str], List[Tuple[int, List[str]]]]:
    """Split lines into the leading description and per-tag line groups."""
    description: List[str] = []
    groups: List[Tuple[int, List[str]]] = []
    for index, line in enumerate(lines):
        if line.lstrip().startswith('@'):
            groups.append((index, [line.lstrip()]))
        elif groups:
            groups[-1][1].append(line)
        else:
            description.append(line)
    return description, groups


def _scan_type(text: str, pos: int, line_number: int) -> Tuple[str, int]:
    """Return the text between balanced braces starting at ``text[pos] == '{'``."""
    depth = 0
    for index in range(pos, len(text)):
        ch = text[index]
        if ch == '{':
            depth += 1
        elif ch == '}':
            depth -= 1
            if depth == 0:
                return text[pos + 1:index], index + 1
    raise JSDocSyntaxError(
        "Braces are not balanced",
        ParseErrorKind.UNBALANCED_BRACES,
        line_number,
    )


def _skip_space(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_name(tag: Tag, text: str, pos: int, sloppy: bool) -> int:
    """Read the tag's name starting at ``pos`` and return the new position."""
    if sloppy and text.startswith('[', pos):
        depth = 0
        end = -1
        for index in range(pos, len(text)):
            if text[index] == '[':
                depth += 1
            elif text[index] == ']':
                depth -= 1
                if depth == 0:
                    end = index
                    break
        if end < 0:
            raise JSDocSyntaxError(
                "Missing or invalid tag name",
                ParseErrorKind.MISSING_NAME,
                tag.line_number,
            )
        inner = text[pos + 1:end]
        name, sep, default = inner.partition('=')
        name = name.strip()
        if not _NAME_RE.fullmatch(name):
            raise JSDocSyntaxError(
                "Missing or invalid tag name",
                ParseErrorKind.MISSING_NAME,
                tag.line_number,
            )
        tag.name = name
        tag.optional = True
        if sep:
            tag.default = default.strip()
        if tag.type is not None and not isinstance(tag.type, OptionalType):
            tag.type = OptionalType(tag.type)
        return end + 1

    match = _NAME_RE.match(text, pos)
    if match is None:
        raise JSDocSyntaxError(
            "Missing or invalid tag name",
            ParseErrorKind.MISSING_NAME,
            tag.line_number,
        )
    tag.name = match.group(0)
    return match.end()


def _parse_tag(line_number: int, group: List[str], sloppy: bool) -> Tag:
    text = '\n'.join(group)
    match = _TITLE_RE.match(text)
    title = match.group(1)
    if not title:
        raise JSDocSyntaxError(
            "Missing or invalid title",
            ParseErrorKind.INVALID_TITLE,
            line_number,
        )
    tag = Tag(title=title, line_number=line_number)
    pos = _skip_space(text, match.end())

    if title in TYPED_TITLES and text.startswith('{', pos):
        type_text, pos = _scan_type(text, pos, line_number)
        try:
            tag.type = parse_type(type_text)
        except JSDocSyntaxError as e:
            e.line_number = line_number
            raise
        pos = _skip_space(text, pos)

    if title in NAMED_TITLES:
        pos = _parse_name(tag, text, pos, sloppy)

    description = _DASH_RE.sub('', text[pos:].strip(), count=1)
    tag.description = description or None
    return tag


def parse_comment(
    text: str,
    *,
    strict: bool = False,
    sloppy: bool = False,
    unwrap: bool = False,
) -> ParsedComment:
    """Parse a JSDoc comment.

    Args:
        text: Comment text. With ``unwrap`` the ``/**``, ``*/`` delimiters and
            ``*`` gutters are removed first.
        strict: Raise on the first invalid tag instead of collecting it in
            ``ParsedComment.errors``.
        sloppy: Accept optional parameter syntax ``[name]`` and
            ``[name=default]``.
        unwrap: Treat ``text`` as a raw comment body.

    Raises:
        JSDocSyntaxError: In strict mode, for the first malformed tag.
    """
    if unwrap:
        text = unwrap_comment(text)
    description, groups = _split_tags(text.split('\n'))

    result = ParsedComment(description='\n'.join(description).strip())
    for line_number, group in groups:
        try:
            result.tags.append(_parse_tag(line_number, group, sloppy))
        except JSDocSyntaxError as e:
            if strict:
                raise
            logger.debug("Dropping invalid tag on line %d: %s", line_number, e.message)
            result.errors.append(e)
    return result
