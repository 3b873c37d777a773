# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" leaves on a tape, grow the expression forward, then seed
# d(root)/d(root) = 1 and let gradients flow back to the leaves.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional

from .engine import backward
from .tape import Tape, leaf_tape, use_tape
from .var import Var


def value(x: float, *, tape: Optional[Tape] = None, name: Optional[str] = None) -> Var:
    """
    Create a leaf holding `x` on `tape`. Without one, the leaf goes on the
    active `use_tape()` tape, or outside any block on a tape of its own that
    lives exactly as long as the handles that reach it.
    """
    tape = tape if tape is not None else leaf_tape()
    return tape.value(x, name=name)


def data(x: Any) -> Any:
    """Return the forward value of a Var; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Var) else x


def grad(x: Var) -> float:
    """Return the accumulated gradient of a Var."""
    if not isinstance(x, Var):
        raise TypeError(f"grad expects a Var, got {type(x)}")
    return x.grad


def _run(y: Any):
    # A constant result (f ignored its inputs) leaves every grad at 0.
    if isinstance(y, Var):
        backward(y)


# ----------------------------- single-input ----------------------------- #
def derivative(f: Callable[[Var], Any], x0: float) -> float:
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape() as tape:
        x = tape.value(x0, name="x")
        _run(f(x))
        return x.grad


# ----------------------------- multi-input ----------------------------- #
def grads(f: Callable[[Dict[str, Var]], Any],
          inputs: Dict[str, float]) -> Dict[str, float]:
    """
    Gradient of y=f(vars) w.r.t. ALL inputs (dict form), from ONE reverse pass.

    Parameters
    ----------
    f       : function taking a dict {name: Var} and returning a Var
    inputs  : dict {name: number}

    Returns
    -------
    dict {name: float}  # gradients in the same key order as `inputs`
    """
    with use_tape() as tape:
        vars_ad: Dict[str, Var] = {k: tape.value(v, name=k) for k, v in inputs.items()}
        _run(f(vars_ad))
        return {k: vars_ad[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Var]], Any], x0_list: Iterable[float]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape() as tape:
        xs = [tape.value(v, name=f"x{i}") for i, v in enumerate(x0_list)]
        _run(f(xs))
        return [x.grad for x in xs]
