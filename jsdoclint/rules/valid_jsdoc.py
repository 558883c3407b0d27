"""
valid-jsdoc
Checks JSDoc comments on functions against the functions they document.

For every documented function the rule verifies that

- each ``@param`` has a type, a description and a unique name,
- the documented parameters match the real ones by name and position,
- a ``@return``/``@returns`` tag is present when required, has a type and a
  description, and is not claimed by a function that never returns a value,
- disfavored tag titles and non-canonical type names are flagged.

Return presence is tracked per function with a stack so that a ``return``
inside a nested function never counts for the enclosing one.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from jsdoclint.ast.nodes import Comment, Node, ReturnStatement
from jsdoclint.config import ValidJSDocOptions, resolve_options
from jsdoclint.errors import JSDocSyntaxError, ParseErrorKind
from jsdoclint.jsdoc.comment_parser import Tag, parse_comment
from jsdoclint.jsdoc.types import NameExpression
from jsdoclint.rules.context import RuleContext

logger = logging.getLogger(__name__)

RULE_ID = "valid-jsdoc"

# Canonical spelling of common type names, keyed by lower case
PREFERRED_TYPE_NAMES = {
    'string': 'string',
    'boolean': 'boolean',
    'number': 'number',
    'int': 'number',
    'array': 'Array',
    'function': 'Function',
    'date': 'Date',
    'object': 'Object',
    'regexp': 'RegExp',
}

NO_VALUE_TYPE_NAMES = frozenset({'void', 'undefined'})

MSG_MISSING_BRACE = "JSDoc type missing brace."
MSG_SYNTAX_ERROR = "JSDoc syntax error."
MSG_MISSING_PARAM_TYPE = 'Missing JSDoc parameter type for "{{name}}".'
MSG_MISSING_PARAM_DESCRIPTION = 'Missing JSDoc parameter description for "{{name}}".'
MSG_DUPLICATE_PARAM = 'Duplicate JSDoc parameter "{{name}}".'
MSG_UNEXPECTED_RETURN = "Unexpected @{{title}} tag; function has no return statement."
MSG_MISSING_RETURN_TYPE = "Missing JSDoc return type."
MSG_MISSING_RETURN_DESCRIPTION = "Missing JSDoc return description."
MSG_PREFER_TAG = "Use @{{name}} instead."
MSG_PREFER_TYPE = 'Expected JSDoc type name "{{name}}" but found "{{jsdocName}}".'
MSG_MISSING_RETURN = "Missing JSDoc @return for function."
MSG_PARAM_MISMATCH = 'Expected JSDoc for "{{name}}" but found "{{jsdocName}}".'
MSG_MISSING_PARAM = 'Missing JSDoc for parameter "{{name}}".'


class TagKind(Enum):
    PARAM = "param"
    RETURN = "return"
    CONSTRUCTOR = "constructor"
    OTHER = "other"


def classify(title: str) -> TagKind:
    if title == 'param':
        return TagKind.PARAM
    if title in ('return', 'returns'):
        return TagKind.RETURN
    if title == 'constructor':
        return TagKind.CONSTRUCTOR
    return TagKind.OTHER


@dataclass
class FunctionReturnState:
    return_present: bool = False


class NestingTracker:
    """Stack of return states, one per function open on the traversal path."""

    def __init__(self):
        self._stack: List[FunctionReturnState] = []

    @property
    def depth(self) -> int:
        return len(self._stack)

    def on_function_enter(self) -> None:
        self._stack.append(FunctionReturnState())

    def on_return(self, has_argument: bool) -> None:
        if self._stack and has_argument:
            self._stack[-1].return_present = True

    def on_function_exit(self) -> FunctionReturnState:
        """Pop the innermost state. Raises IndexError if no function is open."""
        return self._stack.pop()


def is_brace_error(error: JSDocSyntaxError) -> bool:
    """True when a comment failed to parse because of unbalanced braces."""
    kind = getattr(error, 'kind', None)
    if kind is not None:
        return kind is ParseErrorKind.UNBALANCED_BRACES
    return 'braces' in str(error).lower()


def _type_name(tag: Tag) -> Optional[str]:
    if isinstance(tag.type, NameExpression):
        return tag.type.name
    return None


class _FunctionCheck:
    """State of the exit check for one documented function."""

    def __init__(self, context: RuleContext, options: ValidJSDocOptions, comment: Comment):
        self.context = context
        self.options = options
        self.comment = comment
        self.params: Dict[str, Tag] = {}
        self.has_returns = False
        self.has_constructor = False
        self.start_line = comment.lineno
        self.start_column = comment.col_offset + 1
        self.lines = comment.value.split('\n')

    def report_at_tag(self, tag: Tag, message: str, data=None, column=None) -> None:
        self.context.report(
            self.comment,
            message,
            data,
            line=self.start_line + tag.line_number,
            column=column,
        )

    def check_tag(self, tag: Tag, state: FunctionReturnState) -> None:
        kind = classify(tag.title)

        if kind is TagKind.PARAM:
            self._check_param(tag)
        elif kind is TagKind.RETURN:
            self._check_return(tag, state)
        elif kind is TagKind.CONSTRUCTOR:
            self.has_constructor = True

        preferred_title = self.options.prefer.get(tag.title)
        if preferred_title is not None:
            self.report_at_tag(tag, MSG_PREFER_TAG, {"name": preferred_title})

        self._check_type_name(tag)

    def _check_param(self, tag: Tag) -> None:
        if tag.type is None:
            self.report_at_tag(tag, MSG_MISSING_PARAM_TYPE, {"name": tag.name})

        if not tag.description and self.options.require_param_description:
            self.report_at_tag(tag, MSG_MISSING_PARAM_DESCRIPTION, {"name": tag.name})

        if tag.name in self.params:
            self.report_at_tag(tag, MSG_DUPLICATE_PARAM, {"name": tag.name})
        elif '.' not in tag.name:
            self.params[tag.name] = tag

    def _check_return(self, tag: Tag, state: FunctionReturnState) -> None:
        self.has_returns = True
        type_name = _type_name(tag)

        if (
            not self.options.require_return
            and not state.return_present
            and type_name not in NO_VALUE_TYPE_NAMES
        ):
            self.report_at_tag(tag, MSG_UNEXPECTED_RETURN, {"title": tag.title})
            return

        if tag.type is None:
            self.report_at_tag(tag, MSG_MISSING_RETURN_TYPE)
        if type_name != 'void' and not tag.description:
            self.report_at_tag(tag, MSG_MISSING_RETURN_DESCRIPTION)

    def _check_type_name(self, tag: Tag) -> None:
        written = _type_name(tag)
        if written is None:
            return
        preferred = PREFERRED_TYPE_NAMES.get(written.lower())
        if preferred and written != preferred:
            self.report_at_tag(
                tag,
                MSG_PREFER_TYPE,
                {"name": preferred, "jsdocName": written},
                column=self.type_name_column(tag, written),
            )

    def type_name_column(self, tag: Tag, written: str) -> int:
        """1-based source column of a type name written on the tag's line.

        The first line of the comment begins two characters after the comment
        start (past ``/*``); every later line begins at column 1.
        """
        if tag.line_number >= len(self.lines):
            return self.start_column
        line = self.lines[tag.line_number]
        brace = line.find('{')
        index = line.find(written, brace + 1 if brace >= 0 else 0)
        if index < 0:
            return self.start_column
        if tag.line_number == 0:
            return self.start_column + 2 + index
        return index + 1

    def check_signature(self, node: Node) -> None:
        documented = list(self.params)
        for i, param in enumerate(node.params):
            name = param.name
            if i < len(documented) and documented[i] != name:
                self.report_at_tag(
                    self.params[documented[i]],
                    MSG_PARAM_MISMATCH,
                    {"name": name, "jsdocName": documented[i]},
                )
            if name not in self.params:
                self.context.report(self.comment, MSG_MISSING_PARAM, {"name": name})


class ValidJSDoc:
    """The ``valid-jsdoc`` rule.

    Example usage:
        rule = ValidJSDoc(context)
        Traverser(rule.listeners()).traverse(program)
    """

    rule_id = RULE_ID

    def __init__(self, context: RuleContext):
        self.context = context
        self.options = resolve_options(context.options)
        self.tracker = NestingTracker()

    def listeners(self) -> Dict[str, Callable[[Node], None]]:
        return {
            'FunctionExpression': self.start_function,
            'FunctionDeclaration': self.start_function,
            'FunctionExpression:exit': self.check_jsdoc,
            'FunctionDeclaration:exit': self.check_jsdoc,
            'ReturnStatement': self.add_return,
        }

    def start_function(self, node: Node) -> None:
        self.tracker.on_function_enter()

    def add_return(self, node: ReturnStatement) -> None:
        self.tracker.on_return(node.argument is not None)

    def check_jsdoc(self, node: Node) -> None:
        """Validate the comment of a function being left by the traversal."""
        state = self.tracker.on_function_exit()
        comment = self.context.get_jsdoc_comment(node)
        if comment is None:
            return

        try:
            parsed = parse_comment(
                comment.value.replace('module:', ''),
                strict=True,
                sloppy=True,
                unwrap=True,
            )
        except JSDocSyntaxError as e:
            logger.debug("Line %d: JSDoc parse failure: %s", comment.lineno, e)
            message = MSG_MISSING_BRACE if is_brace_error(e) else MSG_SYNTAX_ERROR
            self.context.report(comment, message)
            return

        check = _FunctionCheck(self.context, self.options, comment)
        for tag in parsed.tags:
            check.check_tag(tag, state)

        if not check.has_returns and not check.has_constructor:
            if self.options.require_return or state.return_present:
                self.context.report(comment, MSG_MISSING_RETURN)

        check.check_signature(node)
