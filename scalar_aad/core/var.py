# scalar_aad/core/var.py
from __future__ import annotations
from typing import Optional, Tuple

from .tape import Tape


class Var:
    """
    Handle to one node of a tape.

    A Var is just (tape, index), and any number of handles may name the same
    node. Node identity is the index, never the value, so two leaves holding
    equal numbers stay distinct. Handles are what keep a tape alive: once the
    last one is dropped, the tape and all its nodes are released.

    When the node's tape has been absorbed into another, the handle follows
    it and rewrites (tape, index) on first use.

    Attributes
    ----------
    tape : Tape
        Arena the node lives in.
    index : int
        Position of the node on `tape`.
    name : Optional[str]
        Optional debug/pretty-print name.
    """

    __array_priority__ = 1000  # make NumPy scalars defer to Var's reflected operators

    def __init__(self, tape: Tape, index: int, *, name: Optional[str] = None):
        self._tape = tape
        self._index = index
        self.name = name

    def _resolve(self):
        # follow absorbed tapes to the one that now holds the node
        tape = self._tape
        while tape.forward_to is not None:
            tape, offset = tape.forward_to
            self._index += offset
        self._tape = tape

    @property
    def tape(self) -> Tape:
        self._resolve()
        return self._tape

    @property
    def index(self) -> int:
        self._resolve()
        return self._index

    # ---- read accessors ----
    @property
    def data(self) -> float:
        return self.tape.nodes[self.index].data

    @property
    def grad(self) -> float:
        return self.tape.nodes[self.index].grad

    @property
    def op_tag(self) -> str:
        return self.tape.nodes[self.index].op_tag

    @property
    def parents(self) -> Tuple["Var", ...]:
        return tuple(Var(self.tape, p) for p in self.tape.nodes[self.index].parents)

    def __float__(self):
        return float(self.data)

    def __repr__(self):
        return f"Var(data={self.data:.4f}, grad={self.grad:.4f}, op={self.op_tag!r}, name={self.name!r})"

    # ---- engine entry points ----
    def backward(self):
        from .engine import backward
        backward(self)

    def zero_grad(self):
        from .engine import zero_grad
        zero_grad(self)

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    def sigmoid(self):
        from ..ops.special import sigmoid
        return sigmoid(self)
