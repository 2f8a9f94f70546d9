"""Parser for calculator input.

The important functions are:
 - parse:    str -> Exp, SAssign, or None for blank input
 - tokenize: str -> stream of ply tokens
"""

# builtin
import re
from fractions import Fraction

# 3rd party
from ply import lex, yacc

# ours
from polycalc import parsetools
from polycalc import syntax

class ParseError(Exception):
    pass

# Each operator has a name and a syntax.  Each becomes an OP_* token for the
# lexer.  So, e.g. ("ASSIGN", "=") matches "=" and the token will be named
# OP_ASSIGN.
_OPERATORS = [
    ("ASSIGN", "="),
    ("PLUS", "+"),
    ("MINUS", "-"),
    ("TIMES", "*"),
    ("DIVIDE", "/"),
    ("CARET", "^"),
    ("COMMA", ","),
    ("OPEN_PAREN", "("),
    ("CLOSE_PAREN", ")"),
    ("OPEN_BRACKET", "["),
    ("CLOSE_BRACKET", "]"),
    ]

# Lexer ########################################################################

def op_token_name(opname):
    return "OP_{}".format(opname.upper())

# Enumerate token names
tokens = []
for opname, op in _OPERATORS:
    tokens.append(op_token_name(opname))
tokens += ["WORD", "NUM"]
tokens = tuple(tokens) # freeze tokens

def make_lexer():
    rules = { "tokens": tokens, "__module__": __name__ }
    for opname, op in _OPERATORS:
        rules["t_{}".format(op_token_name(opname))] = re.escape(op)

    def t_WORD(t):
        r"[a-zA-Z_][a-zA-Z_0-9]*"
        return t

    def t_NUM(t):
        r"\d+(\.\d+)?|\.\d+"
        # Decimal literals are exact: ".2" is 1/5.
        t.value = syntax.ENum(Fraction(t.value))
        return t

    def t_COMMENT(t):
        r"\#[^\n]*"
        pass

    def t_newline(t):
        r"\n+"
        t.lexer.lineno += len(t.value)

    def t_error(t):
        raise ParseError("illegal character {} on line {}".format(repr(t.value[0]), t.lexer.lineno))

    for f in (t_WORD, t_NUM, t_COMMENT, t_newline, t_error):
        rules[f.__name__] = f
    rules["t_ignore"] = " \t\r"

    return lex.lex(module=parsetools.rule_module("CalculatorLexer", rules))

_lexer = make_lexer()
def tokenize(s):
    lexer = _lexer.clone() # Because lexer objects are stateful
    lexer.input(s)
    while True:
        tok = lexer.token()
        if not tok:
            break
        yield tok

# Parser #######################################################################

def make_parser():
    rules = {
        "tokens": tokens,
        "start": "input",
        "__module__": __name__,
        "precedence": (
            ("left", "OP_PLUS", "OP_MINUS"),
            ("left", "OP_TIMES", "OP_DIVIDE"),
            ("right", "UMINUS"),
            ("right", "OP_CARET")),
        }

    def rule(f):
        rules[f.__name__] = f
        return f

    @rule
    def p_input(p):
        """input :
                 | stm"""
        p[0] = p[1] if len(p) > 1 else None

    @rule
    def p_stm(p):
        """stm : exp
               | WORD OP_ASSIGN exp"""
        if len(p) == 2:
            p[0] = p[1]
        else:
            p[0] = syntax.SAssign(p[1], p[3])

    @rule
    def p_exp(p):
        """exp : NUM
               | WORD
               | WORD OP_OPEN_PAREN exp_list OP_CLOSE_PAREN
               | OP_OPEN_PAREN exp OP_CLOSE_PAREN
               | OP_OPEN_BRACKET exp_list OP_CLOSE_BRACKET
               | exp OP_PLUS   exp
               | exp OP_MINUS  exp
               | exp OP_TIMES  exp
               | exp OP_DIVIDE exp
               | exp OP_CARET  exp"""
        if len(p) == 2:
            if isinstance(p[1], syntax.ENum):
                p[0] = p[1]
            else:
                p[0] = syntax.EVar(p[1])
        elif len(p) == 4:
            if p[1] == "(":
                p[0] = p[2]
            elif p[1] == "[":
                p[0] = syntax.EList(p[2])
            else:
                p[0] = syntax.BINOPS[p[2]](p[1], p[3])
        elif len(p) == 5:
            p[0] = syntax.ECall(p[1], p[3])
        else:
            assert False, "unknown case: {}".format(repr(p[1:]))

    @rule
    def p_exp_neg(p):
        """exp : OP_MINUS exp %prec UMINUS"""
        p[0] = syntax.ENeg(p[2])

    parsetools.multi(rules, "exp_list", "exp", sep="OP_COMMA")

    @rule
    def p_empty(p):
        'empty :'
        pass

    @rule
    def p_error(p):
        if p is None:
            raise ParseError("unexpected end of input")
        raise ParseError("syntax error at {}".format(repr(_token_text(p))))

    return yacc.yacc(
        module=parsetools.rule_module("CalculatorGrammar", rules),
        debug=False,
        write_tables=False)

def _token_text(tok):
    if isinstance(tok.value, syntax.ENum):
        return str(tok.value.val)
    return tok.value

_parser = make_parser()

def parse(s):
    """Parse one line of calculator input.

    Returns an expression, an assignment statement, or None if the input is
    blank.
    """
    return _parser.parse(s, lexer=_lexer.clone())
