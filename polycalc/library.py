"""Built-in operations of the calculator.

Every operation is registered with a fixed list of parameter kinds.  The
arguments of a call are checked and converted up front (expressions become
polynomials, lists become variable names or exponents) before the handler
runs, so handlers only ever see well-typed values.

Important functions:
 - call: run an operation by name
 - names: all operation names
"""

import collections
import inspect

from polycalc.common import FrozenDict, StopException
from polycalc.syntax import ENum, EVar, EList
from polycalc.syntax_tools import pprint
from polycalc.polynomials import build, term_of, lex_order, revlex_order, total_order

class ArgumentError(Exception):
    pass

class InvalidVarsList(ArgumentError):
    pass

class InvalidExpList(ArgumentError):
    pass

class ArityError(ArgumentError):
    pass

class UndefinedOperation(Exception):
    pass

Operation = collections.namedtuple("Operation", ["name", "params", "handler", "doc"])

# Parameter kinds ##############################################################

def polynomial(e):
    return build(e)

def expression(e):
    return e

def var_list(e):
    if not isinstance(e, EList) or not all(isinstance(x, EVar) for x in e.es):
        raise InvalidVarsList("invalid vars list: {}".format(pprint(e)))
    return [x.id for x in e.es]

def exp_list(e):
    if not isinstance(e, EList) or not all(isinstance(x, ENum) for x in e.es):
        raise InvalidExpList("invalid exp list: {}".format(pprint(e)))
    return [x.val for x in e.es]

def polynomial_list(e):
    if not isinstance(e, EList):
        raise ArgumentError("invalid polynomial list: {}".format(pprint(e)))
    return [build(x) for x in e.es]

# Registry #####################################################################

_operations = collections.OrderedDict()

def operation(name, *params):
    """Register the decorated function as the operation `name`.

    The handler is called as handler(env, *converted_args).
    """
    def register(handler):
        _operations[name] = Operation(name, params, handler, inspect.getdoc(handler) or "")
        return handler
    return register

def _list(rows):
    return EList(tuple(EList(tuple(ENum(x) for x in row)) for row in rows))

@operation("quit")
def _quit(env):
    """Leave the calculator."""
    raise StopException()

@operation("reset")
def _reset(env):
    """Forget all variables."""
    env.clear()

@operation("help")
def _help(env):
    """List the available operations."""
    return EList(tuple(EVar(name) for name in names()))

@operation("p", polynomial)
def _p(env, f):
    """Convert an expression into a polynomial."""
    return f

@operation("multicoeff", polynomial, var_list, exp_list)
def _multicoeff(env, f, vars, exps):
    """Coefficient of the power product vars^exps, as a polynomial."""
    return f.multi_coefficient(vars, exps)

@operation("multicoeff2", polynomial, polynomial)
def _multicoeff2(env, f, term):
    """Coefficient of the power product given as a one-term polynomial."""
    return f.multi_coefficient_of(term)

@operation("support", polynomial, var_list)
def _support(env, f, vars):
    """Exponents of vars in every monomial."""
    return _list(f.support(vars))

@operation("lexorder", polynomial)
def _lexorder(env, f):
    """Sort by the lexicographic order."""
    return f.reorder(lex_order)

@operation("revlexorder", polynomial)
def _revlexorder(env, f):
    """Sort by the reverse lexicographic order."""
    return f.reorder(revlex_order)

@operation("totalorder", polynomial)
def _totalorder(env, f):
    """Sort by total degree, ties broken lexicographically."""
    return f.reorder(total_order)

@operation("lpp", polynomial)
def _lpp(env, f):
    """Leading power product."""
    return f.leading_power_product()

@operation("lc", polynomial)
def _lc(env, f):
    """Leading coefficient."""
    return ENum(f.leading_coefficient())

@operation("lm", polynomial)
def _lm(env, f):
    """Leading monomial."""
    return f.leading_monomial()

@operation("higher", polynomial, expression)
def _higher(env, f, t):
    """Monomials above the term t."""
    return f.higher(term_of(f, t))

@operation("lower", polynomial, expression)
def _lower(env, f, t):
    """Monomials below the term t."""
    return f.lower(term_of(f, t))

@operation("between", polynomial, expression, expression)
def _between(env, f, t1, t2):
    """Monomials above the term t1 and below the term t2."""
    return f.between(term_of(f, t1), term_of(f, t2))

@operation("remainder", polynomial)
def _remainder(env, f):
    """Everything but the leading monomial."""
    return f.remainder()

@operation("reduceterm", polynomial, polynomial, expression)
def _reduceterm(env, g, f, t):
    """Eliminate the term t of g using the leading term of f."""
    return g.reduce_term(f, term_of(g, t))

@operation("reduce", polynomial, polynomial)
def _reduce(env, g, f):
    """Eliminate the first term of g that f can eliminate."""
    return g.reduce(f)

@operation("reduceany", polynomial, polynomial_list)
def _reduceany(env, g, fs):
    """Reduce g by the first polynomial of fs that changes it."""
    return g.reduce_any(fs)

OPERATIONS = FrozenDict(_operations)

def names():
    return sorted(OPERATIONS.keys())

def call(name, args, env):
    """Run the operation `name` on already evaluated arguments."""
    op = OPERATIONS.get(name)
    if op is None:
        raise UndefinedOperation("undefined {!r}".format(name))
    if len(args) != len(op.params):
        raise ArityError("invalid number of args. expected {}, got {}.".format(len(op.params), len(args)))
    converted = [convert(arg) for convert, arg in zip(op.params, args)]
    return op.handler(env, *converted)
