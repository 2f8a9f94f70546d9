"""Utilities for working with syntax trees.

Important functions:
 - pprint: prettyprint a syntax tree (or a polynomial)
 - free_vars: compute the set of identifiers in a tree
"""

from polycalc import common
from polycalc import syntax

class PrettyPrinter(common.Visitor):
    def visit_ENum(self, e):
        return str(e.val)

    def visit_EVar(self, e):
        return e.id

    def visit_EBinOp(self, e):
        spine = []
        while isinstance(e, syntax.EBinOp):
            spine.append(e)
            e = e.e1
        parts = ["(" * len(spine), self.visit(e)]
        while spine:
            e = spine.pop()
            parts.append(" {} {})".format(e.op, self.visit(e.e2)))
        return "".join(parts)

    def visit_EList(self, e):
        return "[{}]".format(" ".join(self.visit(x) for x in e.es))

    def visit_ECall(self, e):
        return "{}({})".format(e.func, ", ".join(self.visit(x) for x in e.args))

    def visit_SAssign(self, s):
        return "{} = {}".format(s.id, self.visit(s.e))

    def visit_Polynomial(self, p):
        return str(p)

    def visit_ADT(self, e):
        return repr(e)

    def visit_object(self, o):
        return str(o)

_PRETTYPRINTER = PrettyPrinter()
def pprint(ast):
    return _PRETTYPRINTER.visit(ast)

def free_vars(exp):
    """Find all identifiers in an AST.

    Returns an OrderedSet of identifier names in the order of their first
    occurrence (left to right).

    The walk uses a work stack rather than recursion, so very deep trees
    (long sums, for instance) do not run out of stack frames.
    """
    res = common.OrderedSet()
    stk = [exp]
    while stk:
        x = stk.pop()
        if isinstance(x, syntax.EVar):
            res.add(x.id)
        elif isinstance(x, syntax.Exp) or isinstance(x, syntax.Stm):
            stk.extend(reversed(x.children()))
        elif isinstance(x, list) or isinstance(x, tuple):
            stk.extend(reversed(x))
    return res
