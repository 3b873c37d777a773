# scalar_aad/core/tape.py
from __future__ import annotations
import logging
import numbers
from contextlib import contextmanager
from typing import List, Optional, Sequence

import numpy as np

from .node import ARITY, LEAF, Node, TapeInvariantError

logger = logging.getLogger(__name__)


def as_float64(x) -> np.float64:
    """Coerce a real scalar to np.float64; reject anything else."""
    if isinstance(x, (bool, np.bool_)) or not isinstance(x, numbers.Real):
        raise TypeError(
            f"scalar_aad only accepts real scalars (int, float, np.floating), "
            f"but got {type(x)}"
        )
    return np.float64(x)


class Tape:
    """
    Arena of nodes in creation order.

    A node is addressed by its index in `nodes`; operand lists hold indices
    of earlier nodes only, so a tape is always a DAG.

    An anonymous tape is one created on the fly for a leaf built outside any
    `use_tape()` block. It may be absorbed into another tape when its nodes
    are combined with that tape's nodes; afterwards it forwards to the
    absorbing tape and keeps no nodes of its own.
    """
    def __init__(self, *, anonymous: bool = False):
        self.nodes: List[Node] = []
        self.anonymous = anonymous
        # (target tape, index offset) once absorbed
        self.forward_to = None

    def __len__(self):
        return len(self.nodes)

    def __repr__(self):
        kind = "anonymous " if self.anonymous else ""
        return f"Tape({kind}nodes={len(self.nodes)})"

    def reset(self):
        logger.debug("tape reset: dropping %d nodes", len(self.nodes))
        self.nodes.clear()

    def push_node(self, *, op_tag: str, data, parents: Sequence[int] = ()) -> int:
        """
        Append Node(op_tag, data, parents) and return its index.
        `parents` are tape indices of the operands.
        """
        if self.forward_to is not None:
            raise TapeInvariantError("tape was absorbed into another tape")
        if op_tag not in ARITY:
            raise TapeInvariantError(f"unknown op tag {op_tag!r}")
        parents = tuple(int(p) for p in parents)
        if len(parents) != ARITY[op_tag]:
            raise TapeInvariantError(
                f"{op_tag!r} takes {ARITY[op_tag]} operand(s), got {len(parents)}"
            )
        idx = len(self.nodes)
        for p in parents:
            if not 0 <= p < idx:
                raise TapeInvariantError(
                    f"operand index {p} is not an earlier node of this tape (new index {idx})"
                )
        self.nodes.append(Node(op_tag=op_tag, data=np.float64(data), parents=parents,
                               grad=np.float64(0.0)))
        return idx

    def absorb(self, other: "Tape") -> int:
        """
        Move every node of `other` onto the end of this tape and return the
        index offset. Handles on `other` follow it through `forward_to`.
        """
        if other is self or other.forward_to is not None or self.forward_to is not None:
            raise TapeInvariantError("can only absorb a distinct, live tape")
        offset = len(self.nodes)
        for node in other.nodes:
            node.parents = tuple(p + offset for p in node.parents)
            self.nodes.append(node)
        logger.debug("absorbed %d nodes at offset %d", len(other.nodes), offset)
        other.nodes = []
        other.forward_to = (self, offset)
        return offset

    def value(self, x, *, name: Optional[str] = None):
        """Record a fresh leaf holding `x` and return its handle."""
        from .var import Var  # local import to avoid cycles
        idx = self.push_node(op_tag=LEAF, data=as_float64(x))
        return Var(self, idx, name=name)

    def var(self, index: int):
        """Handle for an existing node."""
        from .var import Var
        if not 0 <= index < len(self.nodes):
            raise IndexError(f"tape has no node {index}")
        return Var(self, index)


def merge_tapes(a: Tape, b: Tape) -> Tape:
    """
    Return the tape that holds the nodes of both `a` and `b`.

    An anonymous tape is absorbed into a named one; of two anonymous tapes
    the smaller is absorbed into the larger. Two named tapes never merge.
    """
    if a is b:
        return a
    if not a.anonymous and not b.anonymous:
        raise ValueError("operands live on different tapes; build them under one use_tape() block")
    if not a.anonymous:
        target, source = a, b
    elif not b.anonymous:
        target, source = b, a
    else:
        target, source = (a, b) if len(a) >= len(b) else (b, a)
    target.absorb(source)
    return target


# Tape bound by the innermost `use_tape()` block; None outside any block.
_active_tape: Optional[Tape] = None


def current_tape() -> Optional[Tape]:
    """The tape bound by the innermost `use_tape()` block, or None."""
    return _active_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to record leaves on one (by default fresh) tape:
        with use_tape() as t:
            x = value(2.0)
            y = x * x
            backward(y)
    """
    from . import tape as _tape_mod  # local import to rebind the module global
    prev = _tape_mod._active_tape
    try:
        _tape_mod._active_tape = tape if tape is not None else Tape()
        yield _tape_mod._active_tape
    finally:
        _tape_mod._active_tape = prev


def leaf_tape() -> Tape:
    """Tape for a new leaf: the active `use_tape()` tape, else a fresh anonymous one."""
    tape = current_tape()
    return tape if tape is not None else Tape(anonymous=True)
