"""Multivariate polynomials with rational coefficients and rational exponents.

A Polynomial is a tuple of variable names, an active term order, and a list
of monomials kept sorted in descending order.  Each monomial pairs a
Fraction coefficient with a term: a tuple of Fraction exponents, one per
variable.

Important functions and classes:
 - build: convert an expression tree into a Polynomial
 - term_of: convert an expression into a term over a polynomial's variables
 - lex_order, revlex_order, total_order: term orders
 - Polynomial: leading term queries, range queries, coefficient and support
   extraction, and single-step reduction
"""

import collections
from fractions import Fraction
from functools import cmp_to_key

from polycalc.common import partition_point, typechecked
from polycalc.logging import task, event
from polycalc.opts import Option
from polycalc.syntax import Exp, ENum, EVar, EAdd, ESub, EMul
from polycalc.syntax_tools import free_vars, pprint
from polycalc import common

class PolynomialError(Exception):
    pass

class InvalidPolynomial(PolynomialError):
    pass

class InvalidTerm(PolynomialError):
    pass

class TermNotFound(PolynomialError):
    pass

class InvalidReduction(PolynomialError):
    pass

# Term orders ##################################################################
#
# A term order is a function order(a, b) that is true when term a is strictly
# less than term b.  Terms of different length are never comparable.

def lex_order(a, b):
    if len(a) != len(b):
        return False
    for x, y in zip(a, b):
        if x != y:
            return x < y
    return False

def revlex_order(a, b):
    if len(a) != len(b):
        return False
    for x, y in zip(reversed(a), reversed(b)):
        if x != y:
            return x < y
    return False

def total_order(a, b):
    if len(a) != len(b):
        return False
    da = sum(a)
    db = sum(b)
    if da != db:
        return da < db
    return lex_order(a, b)

TERM_ORDERS = collections.OrderedDict([
    ("lex", lex_order),
    ("revlex", revlex_order),
    ("total", total_order)])

default_order = Option("order", str, "lex",
    description="Term order of newly built polynomials",
    choices=tuple(TERM_ORDERS))

def order_name(order):
    for name, o in TERM_ORDERS.items():
        if o is order:
            return name
    return getattr(order, "__name__", repr(order))

def sort_descending(monomials, order):
    """Stable sort of monomials, largest term first."""
    def cmp(m1, m2):
        if order(m2.term, m1.term):
            return -1
        if order(m1.term, m2.term):
            return 1
        return 0
    return sorted(monomials, key=cmp_to_key(cmp))

# Polynomials ##################################################################

Monomial = collections.namedtuple("Monomial", ["coefficient", "term"])

ZERO = Fraction(0)
ONE = Fraction(1)

def as_term(t):
    return tuple(Fraction(x) for x in t)

def realign(term, from_vars, to_vars):
    """Re-express a term over `from_vars` as a term over `to_vars`.

    Returns None if the term has a non-zero exponent for a variable that is
    missing from `to_vars`.
    """
    index = { v : i for i, v in enumerate(to_vars) }
    res = [ZERO] * len(to_vars)
    for v, e in zip(from_vars, term):
        i = index.get(v)
        if i is None:
            if e != 0:
                return None
        else:
            res[i] += e
    return tuple(res)

class Polynomial(Exp):
    """A polynomial in canonical form.

    Polynomials are values in the expression language, so they can be bound
    to names and passed to operations.  Every query returns a new Polynomial
    with its own monomial list; only `reorder` mutates.
    """

    def __init__(self, vars, order=lex_order, monomials=()):
        self.vars = tuple(vars)
        self.order = order
        self.monomials = list(monomials)

    def _derive(self, monomials):
        return Polynomial(self.vars, self.order, monomials)

    def children(self):
        return (self.vars, tuple(self.monomials))

    def __repr__(self):
        return "Polynomial({!r}, {}, {!r})".format(self.vars, order_name(self.order), self.monomials)

    def __str__(self):
        if not self.monomials:
            return "0"
        parts = []
        for m in self.monomials:
            s = str(m.coefficient)
            for v, e in zip(self.vars, m.term):
                if e != 0:
                    s += "*" + v
                    if e != 1:
                        s += "^" + str(e)
            parts.append(s)
        return " + ".join(parts)

    def equal(self, other):
        """Positional equality.

        Two polynomials are equal if they have the same number of variables
        and the same monomials at the same positions.  The same mathematical
        polynomial sorted two different ways compares unequal.
        """
        if self is other:
            return True
        if len(self.vars) != len(other.vars) or len(self.monomials) != len(other.monomials):
            return False
        return all(m1.coefficient == m2.coefficient and m1.term == m2.term
            for m1, m2 in zip(self.monomials, other.monomials))

    def __eq__(self, other):
        return isinstance(other, Polynomial) and self.equal(other)

    def __ne__(self, other):
        return not self.__eq__(other)

    # reorder() mutates, so polynomials must not be used as dictionary keys
    __hash__ = None

    def normalize(self):
        """Drop zero coefficients and sort by the active order (in place)."""
        self.monomials = sort_descending(
            [m for m in self.monomials if m.coefficient != 0],
            self.order)
        return self

    def reorder(self, order):
        """Make `order` the active order and re-sort the monomials in place.

        The caller must be the only one looking at this polynomial while it
        is being sorted.
        """
        self.order = order
        self.monomials = sort_descending(self.monomials, order)
        return self

    def is_valid(self):
        """True if no monomial has a negative exponent."""
        return all(e >= 0 for m in self.monomials for e in m.term)

    def _check_term(self, t):
        t = as_term(t)
        if len(t) != len(self.vars):
            raise InvalidTerm("invalid term: expected {} exponents, got {}".format(len(self.vars), len(t)))
        return t

    def _index_vars(self, vars):
        index = { v : i for i, v in enumerate(self.vars) }
        return [index.get(v, -1) for v in vars]

    def find_term(self, t):
        """Index of the monomial with term exactly t, or -1."""
        i = partition_point(len(self.monomials), lambda i: not self.order(t, self.monomials[i].term))
        if i < len(self.monomials) and self.monomials[i].term == t:
            return i
        return -1

    # Leading terms. ###########################################################

    def leading_power_product(self):
        if not self.monomials:
            return self._derive(())
        return self._derive([Monomial(ONE, self.monomials[0].term)])

    def leading_coefficient(self):
        if not self.monomials:
            return ZERO
        return self.monomials[0].coefficient

    def leading_monomial(self):
        return self._derive(self.monomials[:1])

    # Range queries.  These all assume the monomials are sorted by the active
    # order. ##################################################################

    def higher(self, t):
        """The monomials whose term is strictly greater than t."""
        t = self._check_term(t)
        n = partition_point(len(self.monomials), lambda i: not self.order(t, self.monomials[i].term))
        return self._derive(self.monomials[:n])

    def lower(self, t):
        """The monomials whose term is strictly less than t."""
        t = self._check_term(t)
        n = partition_point(len(self.monomials), lambda i: self.order(self.monomials[i].term, t))
        return self._derive(self.monomials[n:])

    def between(self, t1, t2):
        """The monomials whose term is greater than t1 and less than t2."""
        return self.lower(t2).higher(t1)

    def remainder(self):
        return self._derive(self.monomials[1:])

    # Coefficients. ############################################################

    @typechecked
    def multi_coefficient(self, vars : [str], exponents):
        """The coefficient of prod(vars[i]^exponents[i]).

        The result is a polynomial over the same variables, in which the
        requested variables no longer occur.
        """
        if len(vars) != len(exponents):
            raise InvalidTerm("invalid term: {} variables but {} exponents".format(len(vars), len(exponents)))
        exponents = as_term(exponents)
        idx = self._index_vars(vars)
        res = []
        for m in self.monomials:
            if all(i >= 0 and m.term[i] == e for i, e in zip(idx, exponents)):
                term = list(m.term)
                for i in idx:
                    term[i] = ZERO
                res.append(Monomial(m.coefficient, tuple(term)))
        return self._derive(res)

    def multi_coefficient_of(self, term):
        """Like multi_coefficient, with the power product given as a polynomial."""
        if len(term.monomials) != 1:
            raise InvalidTerm("invalid term: {}".format(term))
        return self.multi_coefficient(list(term.vars), term.monomials[0].term)

    @typechecked
    def support(self, vars : [str]):
        """Exponents of `vars` in every monomial, in monomial order."""
        idx = self._index_vars(vars)
        return [[m.term[i] if i >= 0 else ZERO for i in idx] for m in self.monomials]

    # Reduction. ###############################################################

    def reduce_term(self, f, t):
        """Eliminate the monomial with term t using the leading term of f.

        Subtracts the multiple of f that cancels the monomial at t.  Raises
        InvalidReduction if that would need negative exponents.
        """
        t = self._check_term(t)
        if not f.monomials:
            raise InvalidPolynomial("invalid polynomial: divisor {} has no leading term".format(f))
        divisor = f.monomials
        if f.vars != self.vars:
            divisor = []
            for m in f.monomials:
                term = realign(m.term, f.vars, self.vars)
                if term is None:
                    raise InvalidReduction("invalid reduction: {} has variables not in {}".format(f, self))
                divisor.append(Monomial(m.coefficient, term))
        idx = self.find_term(t)
        if idx < 0:
            raise TermNotFound("invalid term (not in support)")

        lead = divisor[0]
        coefficient = -self.monomials[idx].coefficient / lead.coefficient
        shift = tuple(a - b for a, b in zip(t, lead.term))

        # coefficient*shift times the leading monomial of f is exactly the
        # negation of the monomial at t, so both are left out.
        h = [Monomial(coefficient * m.coefficient, tuple(a + b for a, b in zip(shift, m.term)))
             for m in divisor[1:]]
        positions = {}
        for i, m in enumerate(h):
            positions.setdefault(m.term, i)
        for i, m in enumerate(self.monomials):
            if i == idx:
                continue
            pos = positions.get(m.term)
            if pos is None:
                positions[m.term] = len(h)
                h.append(m)
            else:
                h[pos] = Monomial(h[pos].coefficient + m.coefficient, m.term)

        # The cancelled monomial at t is part of the result until zeros are
        # pruned, so a negative exponent in t makes the reduction invalid too.
        res = self._derive(h)
        if any(e < 0 for e in t) or not res.is_valid():
            raise InvalidReduction("invalid reduction {}".format(res))
        return res.normalize()

    def reduce(self, f):
        """Reduce the first term of this polynomial that f can eliminate.

        Returns this polynomial itself if no term can be reduced.
        """
        for m in self.monomials:
            try:
                return self.reduce_term(f, m.term)
            except PolynomialError:
                continue
        return self

    def reduce_any(self, divisors, callback=None):
        """Reduce by the first divisor that changes this polynomial.

        `callback(f, h)` is called with the divisor used and the result.
        Returns this polynomial itself if no divisor changes it.
        """
        with task("reduce_any", divisors=len(divisors)):
            for f in divisors:
                h = self.reduce(f)
                if not self.equal(h):
                    event("reduced by {} to {}".format(f, h))
                    if callback is not None:
                        callback(f, h)
                    return h
        return self

# Conversion from expressions ##################################################

def _summands(e, coefficient=ONE):
    """Split e on top-level + and -.

    Yields (coefficient, summand) pairs; the summands of the right side of a
    subtraction start with coefficient -1.
    """
    stk = [(coefficient, e)]
    while stk:
        c, x = stk.pop()
        if isinstance(x, EAdd):
            stk.append((c, x.e2))
            stk.append((c, x.e1))
        elif isinstance(x, ESub):
            stk.append((-c, x.e2))
            stk.append((c, x.e1))
        else:
            yield c, x

class _MonomialBuilder(common.Visitor):
    """Accumulates one summand into a single monomial."""

    def __init__(self, vars):
        self.index = { v : i for i, v in enumerate(vars) }

    def build(self, e, coefficient):
        self.coefficient = Fraction(coefficient)
        self.exponents = [ZERO] * len(self.index)
        self.visit(e)
        return Monomial(self.coefficient, tuple(self.exponents))

    def add_exponent(self, var, e):
        i = self.index.get(var.id)
        if i is None:
            raise InvalidPolynomial("invalid polynomial: unknown variable {}".format(var.id))
        self.exponents[i] += e

    def visit_ENum(self, e):
        self.coefficient *= e.val

    def visit_EMul(self, e):
        stk = [e]
        while stk:
            x = stk.pop()
            if isinstance(x, EMul):
                stk.append(x.e2)
                stk.append(x.e1)
            else:
                self.visit(x)

    def visit_EPow(self, e):
        if isinstance(e.e1, EVar) and isinstance(e.e2, ENum):
            self.add_exponent(e.e1, e.e2.val)
        else:
            self.invalid(e)

    def visit_EVar(self, e):
        self.add_exponent(e, ONE)

    def visit_Polynomial(self, p):
        self.invalid(p)

    def visit_ADT(self, e):
        self.invalid(e)

    def visit_object(self, o):
        self.invalid(o)

    def invalid(self, e):
        raise InvalidPolynomial("invalid polynomial: unsupported expression {}".format(pprint(e)))

def _convert(e, vars):
    builder = _MonomialBuilder(vars)
    monomials = [builder.build(x, c) for c, x in _summands(e)]
    return [m for m in monomials if m.coefficient != 0]

def build(e, order=None):
    """Convert an expression into a Polynomial.

    The variables of the result are the identifiers of e, sorted by name.
    Polynomials are returned unchanged.  Raises InvalidPolynomial if e
    contains anything other than sums, differences, products, numbers,
    identifiers, and identifiers raised to numeric powers.

    Summands that have the same term are kept as separate monomials.
    """
    if isinstance(e, Polynomial):
        return e
    if order is None:
        order = TERM_ORDERS[default_order.value]
    vars = sorted(free_vars(e))
    return Polynomial(vars, order, _convert(e, vars)).normalize()

def term_of(p, e):
    """Convert e, a single power product, into a term over p's variables."""
    if isinstance(e, Polynomial):
        if len(e.monomials) != 1:
            raise InvalidTerm("invalid term: {}".format(e))
        t = realign(e.monomials[0].term, e.vars, p.vars)
        if t is None:
            raise InvalidTerm("invalid term: {} has variables not in {}".format(e, p))
        return t
    monomials = _convert(e, p.vars)
    if len(monomials) != 1:
        raise InvalidTerm("invalid term: {}".format(pprint(e)))
    return monomials[0].term
