"""
JavaScript Parser
LALR parser using PLY yacc to generate an ESTree-shaped Abstract Syntax Tree.

Covers the ECMAScript 5 statement and expression forms that matter for
documentation linting. Regular-expression literals, labels, getters/setters,
arrow functions and comma sequences are not supported.
"""

import ply.yacc as yacc

from jsdoclint.ast.nodes import (
    ArrayExpression,
    AssignmentExpression,
    BinaryExpression,
    BlockStatement,
    BreakStatement,
    CallExpression,
    CatchClause,
    ConditionalExpression,
    ContinueStatement,
    DoWhileStatement,
    EmptyStatement,
    ExpressionStatement,
    ForInStatement,
    ForStatement,
    FunctionDeclaration,
    FunctionExpression,
    Identifier,
    IfStatement,
    Literal,
    LogicalExpression,
    MemberExpression,
    NewExpression,
    ObjectExpression,
    Program,
    Property,
    ReturnStatement,
    SwitchCase,
    SwitchStatement,
    ThisExpression,
    ThrowStatement,
    TryStatement,
    UnaryExpression,
    UpdateExpression,
    VariableDeclaration,
    VariableDeclarator,
    WhileStatement,
)
from jsdoclint.errors import JSSyntaxError
from jsdoclint.lexer.js_lexer import JSLexer, find_column, tokens  # noqa: F401

start = 'program'

# Operator precedence and associativity
precedence = (
    ('right', 'ASSIGN', 'PLUSEQ', 'MINUSEQ', 'TIMESEQ', 'DIVEQ', 'MODEQ',
     'ANDEQ', 'OREQ', 'XOREQ', 'LSHIFTEQ', 'RSHIFTEQ', 'URSHIFTEQ'),
    ('right', 'QUESTION', 'COLON'),
    ('left', 'OR'),
    ('left', 'AND'),
    ('left', 'BITOR'),
    ('left', 'BITXOR'),
    ('left', 'BITAND'),
    ('left', 'EQ', 'NE', 'SEQ', 'SNE'),
    ('left', 'LT', 'GT', 'LE', 'GE', 'INSTANCEOF', 'IN'),
    ('left', 'LSHIFT', 'RSHIFT', 'URSHIFT'),
    ('left', 'PLUS', 'MINUS'),
    ('left', 'TIMES', 'DIVIDE', 'MOD'),
    ('right', 'UNARY', 'NOT', 'BITNOT', 'TYPEOF', 'VOID', 'DELETE', 'PLUSPLUS', 'MINUSMINUS'),
    ('right', 'NEW'),
    ('left', 'DOT', 'LBRACKET', 'LPAREN'),
)

_LOGICAL_OPERATORS = ('&&', '||')


def _pos(p, n):
    """Location keyword arguments for the n-th symbol of a production."""
    lexpos = p.lexpos(n)
    return {
        "lineno": p.lineno(n),
        "col_offset": find_column(p.lexer.lexdata, lexpos),
        "start": lexpos,
    }


# Program structure

def p_program(p):
    """program : source_elements"""
    p[0] = Program(body=p[1], lineno=1, col_offset=0, start=0)


def p_source_elements(p):
    """source_elements : source_elements source_element
    | empty"""
    if len(p) == 3:
        p[1].append(p[2])
        p[0] = p[1]
    else:
        p[0] = []


def p_element_list(p):
    """element_list : element_list source_element
    | source_element"""
    if len(p) == 3:
        p[1].append(p[2])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_source_element(p):
    """source_element : function_declaration
    | statement"""
    p[0] = p[1]


# Declarations come before function expressions so that the reduce/reduce
# conflict on a named function at statement level resolves to a declaration.

def p_function_declaration(p):
    """function_declaration : FUNCTION IDENTIFIER LPAREN formal_params RPAREN function_body"""
    p[0] = FunctionDeclaration(Identifier(p[2], **_pos(p, 2)), p[4], p[6], **_pos(p, 1))


def p_function_expression(p):
    """function_expression : FUNCTION IDENTIFIER LPAREN formal_params RPAREN function_body
    | FUNCTION LPAREN formal_params RPAREN function_body"""
    if len(p) == 7:
        p[0] = FunctionExpression(Identifier(p[2], **_pos(p, 2)), p[4], p[6], **_pos(p, 1))
    else:
        p[0] = FunctionExpression(None, p[3], p[5], **_pos(p, 1))


def p_function_body(p):
    """function_body : LBRACE source_elements RBRACE"""
    p[0] = BlockStatement(p[2], **_pos(p, 1))


def p_formal_params(p):
    """formal_params : param_list
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_param_list(p):
    """param_list : param_list COMMA IDENTIFIER
    | IDENTIFIER"""
    if len(p) == 4:
        p[1].append(Identifier(p[3], **_pos(p, 3)))
        p[0] = p[1]
    else:
        p[0] = [Identifier(p[1], **_pos(p, 1))]


# Statements

def p_statement(p):
    """statement : block
    | variable_statement
    | empty_statement
    | expression_statement
    | if_statement
    | while_statement
    | do_while_statement
    | for_statement
    | for_in_statement
    | return_statement
    | throw_statement
    | try_statement
    | switch_statement
    | break_statement
    | continue_statement"""
    p[0] = p[1]


# Blocks are defined before object literals: ``{}`` at statement level is a block.

def p_block(p):
    """block : LBRACE element_list RBRACE
    | LBRACE RBRACE"""
    body = p[2] if len(p) == 4 else []
    p[0] = BlockStatement(body, **_pos(p, 1))


def p_variable_statement(p):
    """variable_statement : var_kind variable_declaration_list SEMI
    | var_kind variable_declaration_list"""
    p[0] = VariableDeclaration(p[1], p[2], **_pos(p, 1))


def p_var_kind(p):
    """var_kind : VAR
    | LET
    | CONST"""
    p[0] = p[1]


def p_variable_declaration_list(p):
    """variable_declaration_list : variable_declaration_list COMMA variable_declaration
    | variable_declaration"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_variable_declaration(p):
    """variable_declaration : IDENTIFIER ASSIGN expression
    | IDENTIFIER"""
    init = p[3] if len(p) == 4 else None
    p[0] = VariableDeclarator(Identifier(p[1], **_pos(p, 1)), init, **_pos(p, 1))


def p_empty_statement(p):
    """empty_statement : SEMI"""
    p[0] = EmptyStatement(**_pos(p, 1))


def p_expression_statement(p):
    """expression_statement : expression SEMI
    | expression"""
    p[0] = ExpressionStatement(p[1], **_pos(p, 1))


def p_if_statement(p):
    """if_statement : IF LPAREN expression RPAREN statement ELSE statement
    | IF LPAREN expression RPAREN statement"""
    alternate = p[7] if len(p) == 8 else None
    p[0] = IfStatement(p[3], p[5], alternate, **_pos(p, 1))


def p_while_statement(p):
    """while_statement : WHILE LPAREN expression RPAREN statement"""
    p[0] = WhileStatement(p[3], p[5], **_pos(p, 1))


def p_do_while_statement(p):
    """do_while_statement : DO statement WHILE LPAREN expression RPAREN SEMI
    | DO statement WHILE LPAREN expression RPAREN"""
    p[0] = DoWhileStatement(p[2], p[5], **_pos(p, 1))


def p_for_statement(p):
    """for_statement : FOR LPAREN for_init SEMI optional_expression SEMI optional_expression RPAREN statement"""
    p[0] = ForStatement(p[3], p[5], p[7], p[9], **_pos(p, 1))


def p_for_init(p):
    """for_init : var_kind variable_declaration_list
    | expression
    | empty"""
    if len(p) == 3:
        p[0] = VariableDeclaration(p[1], p[2], **_pos(p, 1))
    else:
        p[0] = p[1]


def p_for_in_statement(p):
    """for_in_statement : FOR LPAREN var_kind IDENTIFIER IN expression RPAREN statement
    | FOR LPAREN IDENTIFIER IN expression RPAREN statement"""
    if len(p) == 9:
        declarator = VariableDeclarator(Identifier(p[4], **_pos(p, 4)), None, **_pos(p, 4))
        left = VariableDeclaration(p[3], [declarator], **_pos(p, 3))
        p[0] = ForInStatement(left, p[6], p[8], **_pos(p, 1))
    else:
        p[0] = ForInStatement(Identifier(p[3], **_pos(p, 3)), p[5], p[7], **_pos(p, 1))


def p_optional_expression(p):
    """optional_expression : expression
    | empty"""
    p[0] = p[1]


def p_return_statement(p):
    """return_statement : RETURN expression SEMI
    | RETURN expression
    | RETURN SEMI
    | RETURN"""
    argument = p[2] if len(p) >= 3 and p[2] != ';' else None
    p[0] = ReturnStatement(argument, **_pos(p, 1))


def p_throw_statement(p):
    """throw_statement : THROW expression SEMI
    | THROW expression"""
    p[0] = ThrowStatement(p[2], **_pos(p, 1))


def p_try_statement(p):
    """try_statement : TRY block catch_clause finally_clause
    | TRY block catch_clause
    | TRY block finally_clause"""
    if len(p) == 5:
        p[0] = TryStatement(p[2], p[3], p[4], **_pos(p, 1))
    elif isinstance(p[3], CatchClause):
        p[0] = TryStatement(p[2], p[3], None, **_pos(p, 1))
    else:
        p[0] = TryStatement(p[2], None, p[3], **_pos(p, 1))


def p_catch_clause(p):
    """catch_clause : CATCH LPAREN IDENTIFIER RPAREN block"""
    p[0] = CatchClause(Identifier(p[3], **_pos(p, 3)), p[5], **_pos(p, 1))


def p_finally_clause(p):
    """finally_clause : FINALLY block"""
    p[0] = p[2]


def p_switch_statement(p):
    """switch_statement : SWITCH LPAREN expression RPAREN LBRACE case_clauses RBRACE"""
    p[0] = SwitchStatement(p[3], p[6], **_pos(p, 1))


def p_case_clauses(p):
    """case_clauses : case_clauses case_clause
    | empty"""
    if len(p) == 3:
        p[1].append(p[2])
        p[0] = p[1]
    else:
        p[0] = []


def p_case_clause(p):
    """case_clause : CASE expression COLON source_elements
    | DEFAULT COLON source_elements"""
    if len(p) == 5:
        p[0] = SwitchCase(p[2], p[4], **_pos(p, 1))
    else:
        p[0] = SwitchCase(None, p[3], **_pos(p, 1))


def p_break_statement(p):
    """break_statement : BREAK SEMI
    | BREAK"""
    p[0] = BreakStatement(**_pos(p, 1))


def p_continue_statement(p):
    """continue_statement : CONTINUE SEMI
    | CONTINUE"""
    p[0] = ContinueStatement(**_pos(p, 1))


# Expressions

def p_expression_binop(p):
    """expression : expression PLUS expression
    | expression MINUS expression
    | expression TIMES expression
    | expression DIVIDE expression
    | expression MOD expression
    | expression LSHIFT expression
    | expression RSHIFT expression
    | expression URSHIFT expression
    | expression LT expression
    | expression GT expression
    | expression LE expression
    | expression GE expression
    | expression EQ expression
    | expression NE expression
    | expression SEQ expression
    | expression SNE expression
    | expression BITAND expression
    | expression BITOR expression
    | expression BITXOR expression
    | expression INSTANCEOF expression
    | expression IN expression
    | expression AND expression
    | expression OR expression"""
    if p[2] in _LOGICAL_OPERATORS:
        p[0] = LogicalExpression(p[2], p[1], p[3], **_pos(p, 1))
    else:
        p[0] = BinaryExpression(p[2], p[1], p[3], **_pos(p, 1))


def p_expression_assign(p):
    """expression : expression ASSIGN expression
    | expression PLUSEQ expression
    | expression MINUSEQ expression
    | expression TIMESEQ expression
    | expression DIVEQ expression
    | expression MODEQ expression
    | expression ANDEQ expression
    | expression OREQ expression
    | expression XOREQ expression
    | expression LSHIFTEQ expression
    | expression RSHIFTEQ expression
    | expression URSHIFTEQ expression"""
    p[0] = AssignmentExpression(p[2], p[1], p[3], **_pos(p, 1))


def p_expression_conditional(p):
    """expression : expression QUESTION expression COLON expression"""
    p[0] = ConditionalExpression(p[1], p[3], p[5], **_pos(p, 1))


def p_expression_unary(p):
    """expression : MINUS expression %prec UNARY
    | PLUS expression %prec UNARY
    | NOT expression
    | BITNOT expression
    | TYPEOF expression
    | VOID expression
    | DELETE expression"""
    p[0] = UnaryExpression(p[1], p[2], True, **_pos(p, 1))


def p_expression_prefix_update(p):
    """expression : PLUSPLUS expression
    | MINUSMINUS expression"""
    p[0] = UpdateExpression(p[1], p[2], True, **_pos(p, 1))


def p_expression_postfix_update(p):
    """expression : expression PLUSPLUS
    | expression MINUSMINUS"""
    p[0] = UpdateExpression(p[2], p[1], False, **_pos(p, 1))


def p_expression_new(p):
    """expression : NEW expression %prec NEW"""
    target = p[2]
    if isinstance(target, CallExpression):
        p[0] = NewExpression(target.callee, target.arguments, **_pos(p, 1))
    else:
        p[0] = NewExpression(target, [], **_pos(p, 1))


def p_expression_member(p):
    """expression : expression DOT property_name"""
    p[0] = MemberExpression(p[1], Identifier(p[3], **_pos(p, 3)), False, **_pos(p, 1))


def p_expression_index(p):
    """expression : expression LBRACKET expression RBRACKET"""
    p[0] = MemberExpression(p[1], p[3], True, **_pos(p, 1))


def p_expression_call(p):
    """expression : expression LPAREN arguments RPAREN"""
    p[0] = CallExpression(p[1], p[3], **_pos(p, 1))


def p_property_name(p):
    """property_name : IDENTIFIER
    | FUNCTION
    | RETURN
    | VAR
    | LET
    | CONST
    | IF
    | ELSE
    | WHILE
    | FOR
    | DO
    | SWITCH
    | CASE
    | DEFAULT
    | NEW
    | THIS
    | NULL
    | TRUE
    | FALSE
    | TYPEOF
    | VOID
    | DELETE
    | INSTANCEOF
    | IN
    | THROW
    | TRY
    | CATCH
    | FINALLY
    | BREAK
    | CONTINUE"""
    p[0] = p[1]


def p_arguments(p):
    """arguments : argument_list
    | empty"""
    p[0] = p[1] if p[1] is not None else []


def p_argument_list(p):
    """argument_list : argument_list COMMA expression
    | expression"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_expression_identifier(p):
    """expression : IDENTIFIER"""
    p[0] = Identifier(p[1], **_pos(p, 1))


def p_expression_number(p):
    """expression : NUMBER"""
    p[0] = Literal(p[1], str(p[1]), **_pos(p, 1))


def p_expression_string(p):
    """expression : STRING"""
    p[0] = Literal(p[1][1:-1], p[1], **_pos(p, 1))


def p_expression_keyword_literal(p):
    """expression : TRUE
    | FALSE
    | NULL"""
    values = {'true': True, 'false': False, 'null': None}
    p[0] = Literal(values[p[1]], p[1], **_pos(p, 1))


def p_expression_this(p):
    """expression : THIS"""
    p[0] = ThisExpression(**_pos(p, 1))


def p_expression_group(p):
    """expression : LPAREN expression RPAREN"""
    p[0] = p[2]


def p_expression_function(p):
    """expression : function_expression
    | array_literal
    | object_literal"""
    p[0] = p[1]


def p_array_literal(p):
    """array_literal : LBRACKET array_elements COMMA RBRACKET
    | LBRACKET array_elements RBRACKET
    | LBRACKET RBRACKET"""
    elements = p[2] if len(p) > 3 else []
    p[0] = ArrayExpression(elements, **_pos(p, 1))


def p_array_elements(p):
    """array_elements : array_elements COMMA expression
    | expression"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_object_literal(p):
    """object_literal : LBRACE property_list COMMA RBRACE
    | LBRACE property_list RBRACE
    | LBRACE RBRACE"""
    properties = p[2] if len(p) > 3 else []
    p[0] = ObjectExpression(properties, **_pos(p, 1))


def p_property_list(p):
    """property_list : property_list COMMA property
    | property"""
    if len(p) == 4:
        p[1].append(p[3])
        p[0] = p[1]
    else:
        p[0] = [p[1]]


def p_property(p):
    """property : property_key COLON expression"""
    p[0] = Property(p[1], p[3], **_pos(p, 1))


def p_property_key(p):
    """property_key : IDENTIFIER
    | STRING
    | NUMBER"""
    if p.slice[1].type == 'IDENTIFIER':
        p[0] = Identifier(p[1], **_pos(p, 1))
    elif p.slice[1].type == 'STRING':
        p[0] = Literal(p[1][1:-1], p[1], **_pos(p, 1))
    else:
        p[0] = Literal(p[1], str(p[1]), **_pos(p, 1))


def p_empty(p):
    """empty :"""
    pass


def p_error(p):
    """Report the first syntax error; no recovery is attempted."""
    if p:
        raise JSSyntaxError(
            f"Unexpected token {p.type} ('{p.value}')",
            p.lineno,
            find_column(p.lexer.lexdata, p.lexpos),
        )
    raise JSSyntaxError("Unexpected end of input")


# Build the parser
parser = yacc.yacc(debug=False, write_tables=False, errorlog=yacc.NullLogger())


def parse(data: str) -> Program:
    """Parse a JavaScript source string and return its Program node."""
    js_lexer = JSLexer()
    js_lexer.build()
    js_lexer.input(data)
    program = parser.parse(lexer=js_lexer.lexer, tracking=True)
    program.comments = js_lexer.comments
    program.source = data
    return program
