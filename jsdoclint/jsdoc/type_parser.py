"""
JSDoc Type Parser
LALR grammar for Closure Compiler type expressions.

Precedence, loosest first: union ``a|b``; prefix ``?T``, ``!T``, ``...T``;
postfix ``T=``, ``T?``, ``T!``, ``T[]``; then names, applications, records,
tuples, function types and parenthesized groups.
"""

import ply.yacc as yacc

from jsdoclint.errors import JSDocSyntaxError, ParseErrorKind
from jsdoclint.jsdoc.type_lexer import make_lexer, tokens  # noqa: F401
from jsdoclint.jsdoc.types import (
    AllLiteral,
    ArrayType,
    FieldType,
    FunctionType,
    NameExpression,
    NonNullableType,
    NullableLiteral,
    NullableType,
    OptionalType,
    RecordType,
    RestType,
    TypeApplication,
    TypeNode,
    UnionType,
)

start = 'type_expr'


def p_type_expr(p):
    """type_expr : union"""
    elements = p[1]
    p[0] = elements[0] if len(elements) == 1 else UnionType(elements)


def p_union(p):
    """union : union PIPE unary
    | unary"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_unary_prefix(p):
    """unary : QUESTION unary
    | BANG unary
    | ELLIPSIS unary"""
    if p[1] == '?':
        p[0] = NullableType(p[2], prefix=True)
    elif p[1] == '!':
        p[0] = NonNullableType(p[2], prefix=True)
    else:
        p[0] = RestType(p[2])


def p_unary_rest_alone(p):
    """unary : ELLIPSIS"""
    p[0] = RestType(None)


def p_unary_postfix(p):
    """unary : postfix"""
    p[0] = p[1]


def p_postfix_modifier(p):
    """postfix : postfix EQUALS
    | postfix QUESTION
    | postfix BANG"""
    if p[2] == '=':
        p[0] = OptionalType(p[1])
    elif p[2] == '?':
        p[0] = NullableType(p[1], prefix=False)
    else:
        p[0] = NonNullableType(p[1], prefix=False)


def p_postfix_array(p):
    """postfix : postfix LBRACKET RBRACKET"""
    p[0] = TypeApplication(NameExpression('Array'), [p[1]])


def p_postfix_basic(p):
    """postfix : basic"""
    p[0] = p[1]


def p_basic_name(p):
    """basic : NAME"""
    p[0] = NameExpression(p[1])


def p_basic_application(p):
    """basic : NAME LT type_list GT"""
    p[0] = TypeApplication(NameExpression(p[1]), p[3])


def p_basic_all(p):
    """basic : STAR"""
    p[0] = AllLiteral()


def p_basic_unknown(p):
    """basic : QUESTION"""
    p[0] = NullableLiteral()


def p_basic_function_name(p):
    """basic : FUNCTION"""
    p[0] = NameExpression(p[1])


def p_basic_function(p):
    """basic : FUNCTION LPAREN function_params RPAREN COLON unary
    | FUNCTION LPAREN function_params RPAREN"""
    node = FunctionType()
    for kind, param in p[3]:
        if kind == 'new':
            node.new = param
        elif kind == 'this':
            node.this = param
        else:
            node.params.append(param)
    if len(p) == 7:
        node.result = p[6]
    p[0] = node


def p_function_params(p):
    """function_params : function_param_list
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_function_param_list(p):
    """function_param_list : function_param_list COMMA function_param
    | function_param"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_function_param(p):
    """function_param : NAME COLON type_expr
    | type_expr"""
    if len(p) == 4:
        if p[1] not in ('new', 'this'):
            raise JSDocSyntaxError(
                f"Unexpected '{p[1]}:' in function type",
                ParseErrorKind.INVALID_TYPE,
            )
        p[0] = (p[1], p[3])
    else:
        p[0] = (None, p[1])


def p_basic_group(p):
    """basic : LPAREN type_expr RPAREN"""
    p[0] = p[2]


def p_basic_array(p):
    """basic : LBRACKET type_list RBRACKET
    | LBRACKET RBRACKET"""
    p[0] = ArrayType(p[2] if len(p) == 4 else [])


def p_basic_record(p):
    """basic : LBRACE field_list RBRACE
    | LBRACE RBRACE"""
    p[0] = RecordType(p[2] if len(p) == 4 else [])


def p_field_list(p):
    """field_list : field_list COMMA field
    | field"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_field(p):
    """field : NAME COLON type_expr
    | NAME"""
    p[0] = FieldType(p[1], p[3] if len(p) == 4 else None)


def p_type_list(p):
    """type_list : type_list COMMA type_expr
    | type_expr"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_empty(p):
    """empty :"""
    pass


def p_error(p):
    if p:
        message = f"Unexpected '{p.value}' in type expression"
    else:
        message = "Unexpected end of type expression"
    raise JSDocSyntaxError(message, ParseErrorKind.INVALID_TYPE)


parser = yacc.yacc(debug=False, write_tables=False, errorlog=yacc.NullLogger())


def parse_type(text: str) -> TypeNode:
    """Parse the text between a tag's braces into a type expression node.

    Raises:
        JSDocSyntaxError: with kind ``INVALID_TYPE`` when the text is not a
            valid type expression.
    """
    if not text.strip():
        raise JSDocSyntaxError("Empty type expression", ParseErrorKind.INVALID_TYPE)
    return parser.parse(text, lexer=make_lexer())
