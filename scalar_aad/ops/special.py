# scalar_aad/ops/special.py
from ..core.node import SIGMOID
from .arithmetic import apply


def sigmoid(x):
    """
    Logistic function σ(x) = 1 / (1 + e^(-x)).
    The backward rule reuses the stored output: ∂σ/∂x = σ(1 - σ).
    """
    return apply(SIGMOID, x)
