"""
JSDoc Type Lexer
Tokenizes the contents of a JSDoc ``{...}`` type expression.
"""

import ply.lex as lex

from jsdoclint.errors import JSDocSyntaxError, ParseErrorKind


class TypeLexer:
    """PLY lexer for Closure/JSDoc type expressions."""

    tokens = [
        'NAME',
        'FUNCTION',
        'ELLIPSIS',
        'LT',
        'GT',
        'LPAREN',
        'RPAREN',
        'LBRACE',
        'RBRACE',
        'LBRACKET',
        'RBRACKET',
        'COMMA',
        'COLON',
        'PIPE',
        'QUESTION',
        'BANG',
        'EQUALS',
        'STAR',
    ]

    t_GT = r'>'
    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_LBRACE = r'\{'
    t_RBRACE = r'\}'
    t_LBRACKET = r'\['
    t_RBRACKET = r'\]'
    t_COMMA = r','
    t_COLON = r':'
    t_PIPE = r'\|'
    t_QUESTION = r'\?'
    t_BANG = r'!'
    t_EQUALS = r'='
    t_STAR = r'\*'

    t_ignore = ' \t\r\n'

    def __init__(self):
        self.lexer = None

    def build(self, **kwargs):
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def t_ELLIPSIS(self, t):
        r'\.\.\.'
        return t

    def t_LT(self, t):
        r'\.?<'
        return t

    def t_NAME(self, t):
        r'[A-Za-z_$][\w$]*(?:[.#~/][A-Za-z_$][\w$]*)*'
        if t.value == 'function':
            t.type = 'FUNCTION'
        return t

    def t_error(self, t):
        raise JSDocSyntaxError(
            f"Unexpected character '{t.value[0]}' in type expression",
            ParseErrorKind.INVALID_TYPE,
        )


_type_lexer = TypeLexer()
_type_lexer.build()

tokens = TypeLexer.tokens


def make_lexer():
    """Return an independent lexer instance ready for ``input()``."""
    return _type_lexer.lexer.clone()
