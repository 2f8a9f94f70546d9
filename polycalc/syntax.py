"""Abstract syntax for calculator input."""

from fractions import Fraction

from polycalc.common import ADT, declare_case

class Exp(ADT): pass

ENum                = declare_case(Exp, "ENum",   ["val"])     # Fraction val
EVar                = declare_case(Exp, "EVar",   ["id"])
EList               = declare_case(Exp, "EList",  ["es"])      # tuple of Exp
ECall               = declare_case(Exp, "ECall",  ["func", "args"])

class EBinOp(Exp):
    """Parent of the binary operators.  Subclasses set `op`."""
    op = None

EAdd                = declare_case(EBinOp, "EAdd", ["e1", "e2"])
ESub                = declare_case(EBinOp, "ESub", ["e1", "e2"])
EMul                = declare_case(EBinOp, "EMul", ["e1", "e2"])
EDiv                = declare_case(EBinOp, "EDiv", ["e1", "e2"])
EPow                = declare_case(EBinOp, "EPow", ["e1", "e2"])

EAdd.op = "+"
ESub.op = "-"
EMul.op = "*"
EDiv.op = "/"
EPow.op = "^"

BINOPS = { t.op : t for t in (EAdd, ESub, EMul, EDiv, EPow) }

class Stm(ADT): pass
SAssign             = declare_case(Stm, "SAssign", ["id", "e"])

# -----------------------------------------------------------------------------
# Various utilities

MINUS_ONE = ENum(Fraction(-1))

def ENeg(e):
    return EMul(MINUS_ONE, e)
