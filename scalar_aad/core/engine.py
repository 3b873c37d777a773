# scalar_aad/core/engine.py
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Optional

import numpy as np

from ..config import AADConfig
from .graph_utils import reachable, topological_order
from .tape import Tape, current_tape
from .var import Var

logger = logging.getLogger(__name__)


def _check_var(v, what: str):
    if not isinstance(v, Var):
        raise TypeError(f"{what} expects a Var, got {type(v)}")


def backward(root: Var):
    """
    Run one reverse pass from `root`.

    The pass computes its own adjoints in a scratch buffer keyed by tape index,
    seeded with ∂root/∂root = 1, and replays the reversed post-order:
        p.adj += node.adj * (∂node/∂p)
    It then adds each reachable node's adjoint onto the stored `grad`. Starting
    from zeroed grads this leaves grad == ∂root/∂node; a second call without
    `zero_grad` adds a second copy.
    """
    from ..ops.rules import RULES  # local import: ops depends on core

    _check_var(root, "backward")
    nodes = root.tape.nodes
    order = topological_order(root.tape, root.index)

    adj = defaultdict(float)
    adj[root.index] = np.float64(1.0)

    with AADConfig.errstate():
        for i in reversed(order):
            node = nodes[i]
            if not node.parents:
                continue  # leaf: terminal
            xs = tuple(nodes[p].data for p in node.parents)
            incs = RULES[node.op_tag].backward(node.data, xs, adj[i])
            for p, inc in zip(node.parents, incs):
                adj[p] += inc

        for i in order:
            nodes[i].grad = nodes[i].grad + adj[i]

    logger.debug("backward from node %d: %d nodes visited", root.index, len(order))


def zero_grad(node: Var):
    """Set grad = 0 on `node` and on every node reachable from it. Nothing else changes."""
    _check_var(node, "zero_grad")
    nodes = node.tape.nodes
    visited = reachable(node.tape, node.index)
    for i in visited:
        nodes[i].grad = np.float64(0.0)
    logger.debug("zero_grad from node %d: %d nodes cleared", node.index, len(visited))


def zero_adjoints(tape: Optional[Tape] = None):
    """
    Set every grad on a tape to zero, reachable from anything or not.
    Uses the active `use_tape()` tape when `tape` is omitted.
    """
    tape = tape if tape is not None else current_tape()
    if tape is None:
        raise ValueError("zero_adjoints needs a tape outside a use_tape() block")
    for node in tape.nodes:
        node.grad = np.float64(0.0)
