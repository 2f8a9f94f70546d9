"""Interpreter for calculator input.

Important functions and classes:
 - eval: execute a syntax tree in an environment
 - Session: an environment plus the parser, as used by the command line
"""

from fractions import Fraction

from polycalc.common import Visitor
from polycalc.syntax import ENum, EList, EBinOp, SAssign
from polycalc.syntax_tools import pprint
from polycalc.logging import task
from polycalc.parse import parse
from polycalc import library

class EvaluationError(Exception):
    pass

def _pow(a, b):
    if b.denominator != 1:
        return None
    return a ** b.numerator

def _div(a, b):
    if b == 0:
        raise EvaluationError("division by zero")
    return a / b

# Arithmetic on numbers is done exactly.  An entry returning None leaves the
# expression symbolic.
_ARITHMETIC = {
    "+": lambda a, b: a + b,
    "-": lambda a, b: a - b,
    "*": lambda a, b: a * b,
    "/": _div,
    "^": _pow,
}

class Evaluator(Visitor):
    def __init__(self, env):
        self.env = env

    def visit_ENum(self, e):
        return e

    def visit_Polynomial(self, p):
        return p

    def visit_EVar(self, e):
        return self.env.get(e.id, e)

    def visit_EBinOp(self, e):
        # Long sums nest to the left; walk that spine without recursing.
        spine = []
        while isinstance(e, EBinOp):
            spine.append(e)
            e = e.e1
        res = self.visit(e)
        while spine:
            e = spine.pop()
            res = self.apply(e, res, self.visit(e.e2))
        return res

    def apply(self, e, e1, e2):
        if isinstance(e1, ENum) and isinstance(e2, ENum):
            try:
                val = _ARITHMETIC[e.op](e1.val, e2.val)
            except ZeroDivisionError:
                raise EvaluationError("division by zero")
            if val is not None:
                return ENum(Fraction(val))
        return type(e)(e1, e2)

    def visit_EList(self, e):
        return EList(tuple(self.visit(x) for x in e.es))

    def visit_ECall(self, e):
        args = tuple(self.visit(x) for x in e.args)
        return library.call(e.func, args, self.env)

    def visit_SAssign(self, s):
        val = self.visit(s.e)
        self.env[s.id] = val
        return SAssign(s.id, val)

    def visit_object(self, o):
        raise EvaluationError("cannot evaluate {!r}".format(o))

def eval(e, env):
    """Evaluate a syntax tree.

    Parameters:
        e - an expression or assignment statement
        env - a dictionary mapping names to values; assignments write to it

    Unbound identifiers evaluate to themselves, so the result is again an
    expression (or an assignment, echoing the bound value).
    """
    if e is None:
        return None
    return Evaluator(env).visit(e)

class Session(object):
    """The state of one calculator session."""

    def __init__(self):
        self.env = {}

    def execute(self, text):
        """Parse and evaluate one line of input.

        Returns the resulting value, or None if there is nothing to print.
        """
        with task("execute", input=text.strip()):
            return eval(parse(text), self.env)

    def run(self, text):
        """Execute one line of input and format the result for printing."""
        res = self.execute(text)
        return None if res is None else pprint(res)

    def reset(self):
        """Forget all bindings."""
        self.env = {}
