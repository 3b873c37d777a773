# scalar_aad/core/__init__.py

"""
Core public API of the scalar AAD engine.

Exports:
    Var           : Handle to one node of a tape.
    Tape          : Arena of nodes addressed by integer index.
    use_tape      : Context manager binding the tape new leaves are recorded on.
    current_tape  : The tape bound by the innermost use_tape(), or None.
    backward      : Run one reverse pass from a root, accumulating into .grad.
    zero_grad     : Reset grads on the subgraph reachable from a node.
    zero_adjoints : Reset every grad on a tape.
    value         : Create a leaf.
    data, grad    : Read accessors.
"""

from .node import Node, TapeInvariantError
from .tape import Tape, use_tape, current_tape
from .var import Var
from .engine import backward, zero_grad, zero_adjoints
from .seeds import value, data, grad, derivative, grads, grads_list

__all__ = [
    "Node", "TapeInvariantError",
    "Tape", "use_tape", "current_tape",
    "Var",
    "backward", "zero_grad", "zero_adjoints",
    "value", "data", "grad",
    "derivative", "grads", "grads_list",
]
