# scalar_aad/core/node.py
from dataclasses import dataclass
from typing import Dict, Tuple

# Closed set of operator tags. Every tag has exactly one entry in ARITY and
# one OpRule in scalar_aad.ops.rules.RULES.
LEAF = "leaf"
ADD = "add"
SUB = "sub"
MUL = "mul"
DIV = "div"
NEG = "neg"
POW = "pow"
SIGMOID = "sigmoid"

ARITY: Dict[str, int] = {
    LEAF: 0,
    NEG: 1,
    SIGMOID: 1,
    ADD: 2,
    SUB: 2,
    MUL: 2,
    DIV: 2,
    POW: 2,
}


class TapeInvariantError(AssertionError):
    """Raised when a node would break the tape's structural invariants
    (unknown tag, wrong operand count, forward reference)."""


@dataclass
class Node:
    """
    One slot of the tape (arena).

    Attributes
    ----------
    op_tag : str
        Operator that produced this node ("leaf" for inputs).
    data : np.float64
        Forward value, fixed at construction.
    parents : Tuple[int, ...]
        Tape indices of the operands, in operand order. Always strictly
        smaller than this node's own index.
    grad : np.float64
        Adjoint accumulator. The only field written after construction.
    """
    op_tag: str
    data: float
    parents: Tuple[int, ...] = ()
    grad: float = 0.0
