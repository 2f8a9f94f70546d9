"""Utility functions and classes not found in the standard libraries.

Important functions and classes:
 - @typechecked: decorator to perform runtime typechecking
 - ADT: top-level class for algebraic data types
 - declare_case: create a new subclass of an ADT
 - Visitor: top-level class for visitors over ADTs
 - fresh_name: generate a never-before-seen name (string)

Extra collection types:
 - OrderedSet: complements Python's OrderedDict
 - FrozenDict: a hashable immutable dictionary
"""

# builtins
from functools import wraps
import itertools
import sys
import inspect

# 3rd party
from ordered_set import OrderedSet
from dictionaries import FrozenDict

def check_type(value, ty, value_name="value"):
    """
    Verify that the given value has the given type.
        value      - the value to check
        ty         - the type to check for, or None to do no checking
        value_name - the variable or expression that evaluates to `value`;
                     printed in diagnostic messages

    The type ty can be:
        str, Fraction, etc.       - value must have this type
        (t1, t2, ...)             - value must be a tuple with these entries
        [ty]                      - value must be a list or tuple of ty
        {k:v}                     - value must be a dict with keys of type k and values of type v
    """

    if ty is None:
        pass
    elif type(ty) is tuple:
        assert isinstance(value, tuple), "{} has type {}, not {}".format(value_name, type(value).__name__, "tuple")
        assert len(value) == len(ty), "{} has {} entries, not {}".format(value_name, len(value), len(ty))
        for v, t, i in zip(value, ty, range(len(value))):
            check_type(v, t, "{}[{}]".format(value_name, i))
    elif type(ty) is list:
        assert isinstance(value, (list, tuple)), "{} has type {}, not {}".format(value_name, type(value).__name__, "list")
        for i in range(len(value)):
            check_type(value[i], ty[0], "{}[{}]".format(value_name, i))
    elif type(ty) is dict:
        assert isinstance(value, dict), "{} has type {}, not {}".format(value_name, type(value).__name__, "dict")
        ((kt, vt),) = ty.items()
        for k, v in value.items():
            check_type(k, kt, value_name)
            check_type(v, vt, "{}[{}]".format(value_name, k))
    else:
        assert isinstance(value, ty), "{} has type {}, not {}".format(value_name, type(value).__name__, ty.__name__)

def typechecked(f):
    """
    Use the @typechecked decorator on a function to perform run-time typechecking.
    The docstring for `check_type` describes how type annotations should look.
    """
    argspec = inspect.getfullargspec(f)
    annotations = f.__annotations__
    @wraps(f)
    def g(*args, **kwargs):
        for argname, argval in zip(argspec.args, args):
            check_type(argval, annotations.get(argname), argname)
        for argname, argval in kwargs.items():
            check_type(argval, annotations.get(argname), argname)
        ret = f(*args, **kwargs)
        check_type(ret, annotations.get("return"), "return")
        return ret
    return g

class ADT(object):
    """An algebraic data type (ADT).

    This class is not abstract, but it is not useful on its own; it is a parent
    for syntax trees and polynomials.

    ADTs are comparable (==, !=) and hashable (assuming they do not have
    lists or dictionaries as children).

    Important methods:
        - children

    See also:
        - Visitor
    """

    def children(self):
        return ()
    def __str__(self):
        return repr(self)
    def __repr__(self):
        return "{}({})".format(type(self).__name__, ", ".join(repr(child) for child in self.children()))
    def __hash__(self):
        if not hasattr(self, "_hash"):
            self._hash = hash(self.children())
        return self._hash
    def __eq__(self, other):
        if self is other: return True
        return type(self) is type(other) and self.children() == other.children()
    def __ne__(self, other):
        return not self.__eq__(other)

class Visitor(object):
    def visit(self, x, *args, **kwargs):
        """Call the method named "visit_TYPE" where TYPE is type(x).

        If there is no such method, the base classes of type(x) are tried in
        order, ending with `visit_object`.
        """
        t = type(x)
        first_visit_func = None
        while t is not None:
            visit_func = "visit_" + t.__name__
            first_visit_func = first_visit_func or visit_func
            f = getattr(self, visit_func, None)
            if f is None:
                if t is object:
                    break
                else:
                    t = t.__base__
                    continue
            return f(x, *args, **kwargs)
        print("Warning: {} does not implement {}".format(self, first_visit_func), file=sys.stderr)

_name_counter = itertools.count()

def fresh_name(hint : str = "name", omit : {str} = ()) -> str:
    """Generate a new name.

    The returned name is guaranteed to be distinct from all names previously
    returned by `fresh_name` and from all names in `omit`.

    The `hint` parameter will be used in the generated name.
    """
    name = None
    while name is None or name in omit:
        name = "_{}{}".format(hint, next(_name_counter))
    return name

def partition_point(n, pred):
    """Return the smallest index i in [0, n) for which pred(i) is true.

    Returns n if there is no such index.  The predicate must be monotone:
    once it is true for some index it stays true for every larger index.
    """
    lo, hi = 0, n
    while lo < hi:
        mid = (lo + hi) // 2
        if pred(mid):
            hi = mid
        else:
            lo = mid + 1
    return lo

def declare_case(supertype, name, attrs=()):
    """Create a new case for an ADT type.

    Usage:
        CaseName = declare_case(SuperType, "CaseName", ["member1", ...])

    Creates a new class (CaseName) that is a subclass of SuperType and has all
    the given members.
    """
    if not isinstance(attrs, tuple):
        attrs = tuple(attrs)
    def __init__(self, *args):
        assert len(args) == len(attrs), "{} expects {} args, was given {}".format(name, len(attrs), len(args))
        supertype.__init__(self)
        for attr, val in zip(attrs, args):
            setattr(self, attr, val)
    def children(self):
        return tuple(getattr(self, a) for a in attrs)
    return type(name, (supertype,), {
        "__init__": __init__,
        "__slots__": attrs,
        "__module__": supertype.__module__,
        "children": children })

class StopException(Exception):
    """
    Used to indicate that a session should stop operation.
    """
    pass
