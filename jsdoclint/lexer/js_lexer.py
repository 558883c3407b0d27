"""
JavaScript Lexer
Tokenizes JavaScript source code for parsing.

This module implements a PLY-based lexer for the ECMAScript 5 subset that
jsdoclint understands. Comments are not emitted as tokens; they are collected
on the lexer so the linter can associate them with function nodes later.
"""

from typing import List

import ply.lex as lex

from jsdoclint.ast.nodes import Comment
from jsdoclint.errors import JSSyntaxError


def find_column(lexdata: str, lexpos: int) -> int:
    """Return the 0-based column of ``lexpos`` within its line."""
    line_start = lexdata.rfind("\n", 0, lexpos) + 1
    return lexpos - line_start


class JSLexer:
    """
    Lexer for JavaScript using PLY (Python Lex-Yacc).

    Example usage:
        lexer = JSLexer()
        lexer.input("function f(a) { return a; }")
        for tok in lexer:
            print(tok)
    """

    # Reserved words
    reserved = {
        'function': 'FUNCTION',
        'return': 'RETURN',
        'var': 'VAR',
        'let': 'LET',
        'const': 'CONST',
        'if': 'IF',
        'else': 'ELSE',
        'while': 'WHILE',
        'for': 'FOR',
        'do': 'DO',
        'switch': 'SWITCH',
        'case': 'CASE',
        'default': 'DEFAULT',
        'new': 'NEW',
        'this': 'THIS',
        'null': 'NULL',
        'true': 'TRUE',
        'false': 'FALSE',
        'typeof': 'TYPEOF',
        'void': 'VOID',
        'delete': 'DELETE',
        'instanceof': 'INSTANCEOF',
        'in': 'IN',
        'throw': 'THROW',
        'try': 'TRY',
        'catch': 'CATCH',
        'finally': 'FINALLY',
        'break': 'BREAK',
        'continue': 'CONTINUE',
    }

    # Token list
    tokens = [
        # Arithmetic
        'PLUS',
        'MINUS',
        'TIMES',
        'DIVIDE',
        'MOD',
        'PLUSPLUS',
        'MINUSMINUS',

        # Comparison and logic
        'EQ',
        'NE',
        'SEQ',
        'SNE',
        'LT',
        'GT',
        'LE',
        'GE',
        'AND',
        'OR',
        'NOT',

        # Bitwise
        'BITAND',
        'BITOR',
        'BITXOR',
        'BITNOT',
        'LSHIFT',
        'RSHIFT',
        'URSHIFT',

        # Assignment
        'ASSIGN',
        'PLUSEQ',
        'MINUSEQ',
        'TIMESEQ',
        'DIVEQ',
        'MODEQ',
        'ANDEQ',
        'OREQ',
        'XOREQ',
        'LSHIFTEQ',
        'RSHIFTEQ',
        'URSHIFTEQ',

        # Literals
        'NUMBER',
        'STRING',
        'IDENTIFIER',

        # Delimiters
        'LPAREN',
        'RPAREN',
        'LBRACE',
        'RBRACE',
        'LBRACKET',
        'RBRACKET',
        'COMMA',
        'COLON',
        'SEMI',
        'DOT',
        'QUESTION',
    ] + list(reserved.values())

    # Token rules (simple tokens)
    t_PLUS = r'\+'
    t_MINUS = r'-'
    t_TIMES = r'\*'
    t_DIVIDE = r'/'
    t_MOD = r'%'
    t_PLUSPLUS = r'\+\+'
    t_MINUSMINUS = r'--'
    t_EQ = r'=='
    t_NE = r'!='
    t_SEQ = r'==='
    t_SNE = r'!=='
    t_LT = r'<'
    t_GT = r'>'
    t_LE = r'<='
    t_GE = r'>='
    t_AND = r'&&'
    t_OR = r'\|\|'
    t_NOT = r'!'
    t_BITAND = r'&'
    t_BITOR = r'\|'
    t_BITXOR = r'\^'
    t_BITNOT = r'~'
    t_LSHIFT = r'<<'
    t_RSHIFT = r'>>'
    t_URSHIFT = r'>>>'
    t_ASSIGN = r'='
    t_PLUSEQ = r'\+='
    t_MINUSEQ = r'-='
    t_TIMESEQ = r'\*='
    t_DIVEQ = r'/='
    t_MODEQ = r'%='
    t_ANDEQ = r'&='
    t_OREQ = r'\|='
    t_XOREQ = r'\^='
    t_LSHIFTEQ = r'<<='
    t_RSHIFTEQ = r'>>='
    t_URSHIFTEQ = r'>>>='
    t_LPAREN = r'\('
    t_RPAREN = r'\)'
    t_LBRACE = r'\{'
    t_RBRACE = r'\}'
    t_LBRACKET = r'\['
    t_RBRACKET = r'\]'
    t_COMMA = r','
    t_COLON = r':'
    t_SEMI = r';'
    t_DOT = r'\.'
    t_QUESTION = r'\?'

    # Ignored characters (whitespace)
    t_ignore = ' \t\r\f\v'

    def __init__(self):
        """Initialize the lexer."""
        self.lexer = None
        self.last_token = None
        self.comments: List[Comment] = []

    def build(self, **kwargs):
        """Build the lexer."""
        self.lexer = lex.lex(module=self, **kwargs)
        return self.lexer

    def input(self, data):
        """Set the input string for lexing."""
        if self.lexer is None:
            self.build()
        self.comments = []
        self.lexer.lineno = 1
        self.lexer.input(data)

    def token(self):
        """Get the next token."""
        if self.lexer is None:
            self.build()
        self.last_token = self.lexer.token()
        return self.last_token

    def __iter__(self):
        """Make lexer iterable."""
        return self

    def __next__(self):
        """Get next token for iteration."""
        tok = self.token()
        if tok is None:
            raise StopIteration
        return tok

    # Token rules with actions. Comments come first so they win over DIVIDE.

    def t_BLOCK_COMMENT(self, t):
        r'/\*[\s\S]*?\*/'
        self._add_comment(t, "Block", t.value[2:-2])

    def t_UNTERMINATED_COMMENT(self, t):
        r'/\*'
        raise JSSyntaxError(
            "Unterminated comment",
            t.lexer.lineno,
            find_column(t.lexer.lexdata, t.lexpos),
        )

    def t_LINE_COMMENT(self, t):
        r'//[^\n]*'
        self._add_comment(t, "Line", t.value[2:])

    def t_NUMBER(self, t):
        r'0[xX][0-9a-fA-F]+|(\d+\.\d*|\.\d+|\d+)([eE][+-]?\d+)?'
        text = t.value
        if text[:2] in ('0x', '0X'):
            t.value = int(text, 16)
        elif any(ch in text for ch in '.eE'):
            t.value = float(text)
        else:
            t.value = int(text)
        return t

    def t_STRING(self, t):
        r'"([^"\\\n]|\\[\s\S])*"|\'([^\'\\\n]|\\[\s\S])*\'|`([^`\\]|\\[\s\S])*`'
        t.lexer.lineno += t.value.count('\n')
        return t

    def t_IDENTIFIER(self, t):
        r'[A-Za-z_$][A-Za-z0-9_$]*'
        # Check for reserved words
        t.type = self.reserved.get(t.value, 'IDENTIFIER')
        return t

    def t_newline(self, t):
        r'\n+'
        t.lexer.lineno += len(t.value)

    def t_error(self, t):
        """Error handling rule."""
        raise JSSyntaxError(
            f"Illegal character '{t.value[0]}'",
            t.lexer.lineno,
            find_column(t.lexer.lexdata, t.lexpos),
        )

    def _add_comment(self, t, kind, value):
        lineno = t.lexer.lineno
        newlines = t.value.count('\n')
        self.comments.append(Comment(
            kind=kind,
            value=value,
            start=t.lexpos,
            end=t.lexpos + len(t.value),
            lineno=lineno,
            col_offset=find_column(t.lexer.lexdata, t.lexpos),
            end_lineno=lineno + newlines,
        ))
        t.lexer.lineno += newlines


# Module-level token list for the parser
tokens = JSLexer.tokens


def tokenize(data: str):
    """Tokenize a source string and return the list of tokens."""
    lexer = JSLexer()
    lexer.build()
    lexer.input(data)
    return list(lexer)
