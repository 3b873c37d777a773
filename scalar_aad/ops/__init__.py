# scalar_aad/ops/__init__.py

# Convenience re-exports so users can do: from scalar_aad.ops import mul, sigmoid, ...
from .rules import RULES, OpRule
from .arithmetic import apply, add, sub, mul, div, neg, pow
from .special import sigmoid

__all__ = [
    "RULES", "OpRule", "apply",
    "add", "sub", "mul", "div", "neg", "pow",
    "sigmoid",
]
