# scalar_aad/__init__.py
# Scalar reverse-mode automatic differentiation on an index-addressed tape

from .core.node import Node, TapeInvariantError
from .core.var import Var
from .core.tape import Tape, use_tape, current_tape
from .core.engine import (
    backward,
    zero_grad,
    zero_adjoints,
)
from .core.seeds import value, data, grad, derivative, grads, grads_list

# Operators (importing ops also makes Var's operator overloads usable)
from .ops import apply, add, sub, mul, div, neg, pow, sigmoid

# Inspection and validation
from .core.graph_utils import topological_order, reachable, get_graph_stats, analyze_graph, format_graph
from .bumping import bump_grads, check_grads
from .config import AADConfig

__all__ = [
    # Core
    'Node',
    'TapeInvariantError',
    'Var',
    'Tape',
    'use_tape',
    'current_tape',
    # Engine
    'backward',
    'zero_grad',
    'zero_adjoints',
    # Leaves and accessors
    'value',
    'data',
    'grad',
    'derivative',
    'grads',
    'grads_list',
    # Operators
    'apply',
    'add',
    'sub',
    'mul',
    'div',
    'neg',
    'pow',
    'sigmoid',
    # Graph
    'topological_order',
    'reachable',
    'get_graph_stats',
    'analyze_graph',
    'format_graph',
    # Validation / config
    'bump_grads',
    'check_grads',
    'AADConfig',
]
