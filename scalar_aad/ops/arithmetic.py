# scalar_aad/ops/arithmetic.py
from ..config import AADConfig
from ..core.node import ADD, ARITY, DIV, LEAF, MUL, NEG, POW, SUB, TapeInvariantError
from ..core.tape import Tape, as_float64, leaf_tape, merge_tapes
from ..core.var import Var
from .rules import RULES


def _tape_of(*operands) -> Tape:
    """
    The tape the result goes on: the Var operands' tape, after merging an
    anonymous operand tape into the other one. With no Var operands, the
    tape a new leaf would get.
    """
    tapes = []
    for x in operands:
        if isinstance(x, Var) and not any(x.tape is t for t in tapes):
            tapes.append(x.tape)
    if not tapes:
        return leaf_tape()
    tape = tapes[0]
    for other in tapes[1:]:
        tape = merge_tapes(tape, other)
    return tape


def _as_var(x, tape: Tape) -> Var:
    """Ensure x is a Var on `tape`; otherwise record it there as a constant leaf."""
    return x if isinstance(x, Var) else tape.value(x)


def apply(op_tag: str, *operands) -> Var:
    """
    Record `op_tag` applied to `operands` as a new node and return its handle.
    Operands are never modified; plain numbers become leaves on the operands' tape.
    Nothing is recorded when the call is rejected.
    """
    if op_tag not in ARITY or op_tag == LEAF:
        raise TapeInvariantError(f"unknown operator tag {op_tag!r}")
    if len(operands) != ARITY[op_tag]:
        raise TapeInvariantError(
            f"{op_tag!r} takes {ARITY[op_tag]} operand(s), got {len(operands)}"
        )
    # evaluate first: a bad constant or a trapped fp error must not touch any tape
    values = [x.data if isinstance(x, Var) else as_float64(x) for x in operands]
    with AADConfig.errstate():
        out = RULES[op_tag].forward(*values)

    tape = _tape_of(*operands)
    xs = [_as_var(x, tape) for x in operands]
    idx = tape.push_node(op_tag=op_tag, data=out, parents=[x.index for x in xs])
    return Var(tape, idx)


def add(x, y): return apply(ADD, x, y)
def sub(x, y): return apply(SUB, x, y)
def mul(x, y): return apply(MUL, x, y)
def div(x, y): return apply(DIV, x, y)


def neg(x):
    """Unary negation: out.data = -x.data"""
    return apply(NEG, x)


def pow(x, y):
    """
    Power with a differentiable exponent:
      out.data = x.data ** y.data

    Local partials:
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)        (nan for x <= 0, propagated as is)
    """
    return apply(POW, x, y)
