# scalar_aad/ops/rules.py
"""
Operator rule table.

Each op tag maps to an OpRule:
    forward(*xs)          -> output value from the operands' values
    backward(y, xs, g)    -> per-operand adjoint increments, given the node's
                             own value y, its operands' values xs and its
                             adjoint g = ∂root/∂node

All arithmetic is on np.float64, so division by zero, log of a non-positive
base and overflow give inf/nan rather than exceptions.
"""
from collections import namedtuple
from typing import Dict

import numpy as np

from ..core.node import ADD, ARITY, DIV, LEAF, MUL, NEG, POW, SIGMOID, SUB, TapeInvariantError

OpRule = namedtuple("OpRule", ["arity", "forward", "backward"])


# ---------- forward formulas ----------
def _leaf_forward():
    raise TypeError("leaf nodes are created from a literal, not computed")


def _sigmoid_forward(a):
    return 1.0 / (1.0 + np.exp(-a))


# ---------- backward rules ----------
def _leaf_backward(y, xs, g):
    return ()


def _add_backward(y, xs, g):
    return (g, g)


def _sub_backward(y, xs, g):
    return (g, -g)


def _mul_backward(y, xs, g):
    a, b = xs
    return (b * g, a * g)


def _div_backward(y, xs, g):
    a, b = xs
    return (g / b, -a * g / (b * b))


def _neg_backward(y, xs, g):
    return (-g,)


def _pow_backward(y, xs, g):
    # y = base ** expo; the exponent term is nan for base <= 0
    base, expo = xs
    d_base = expo * np.power(base, expo - 1.0) * g
    d_expo = np.log(base) * np.power(base, expo) * g
    return (d_base, d_expo)


def _sigmoid_backward(y, xs, g):
    # σ'(x) = σ(x)(1 − σ(x)), and y already holds σ(x)
    return (y * (1.0 - y) * g,)


RULES: Dict[str, OpRule] = {
    LEAF:    OpRule(0, _leaf_forward, _leaf_backward),
    ADD:     OpRule(2, lambda a, b: a + b, _add_backward),
    SUB:     OpRule(2, lambda a, b: a - b, _sub_backward),
    MUL:     OpRule(2, lambda a, b: a * b, _mul_backward),
    DIV:     OpRule(2, lambda a, b: a / b, _div_backward),
    NEG:     OpRule(1, lambda a: -a, _neg_backward),
    POW:     OpRule(2, np.power, _pow_backward),
    SIGMOID: OpRule(1, _sigmoid_forward, _sigmoid_backward),
}

if RULES.keys() != ARITY.keys() or any(RULES[tag].arity != ARITY[tag] for tag in ARITY):
    raise TapeInvariantError("operator rule table disagrees with ARITY")
