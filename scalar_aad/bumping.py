"""
Finite-difference (bumping) gradients, used to validate the reverse pass.

Formulas:
    ∂f/∂x_k ≈ [f(x + ε e_k) - f(x - ε e_k)] / (2ε)

Evaluations: 2n, each on its own throwaway tape (no reverse pass).
"""

import logging
from typing import Any, Callable, Dict, Optional

import numpy as np

from .config import AADConfig
from .core.seeds import data, grads
from .core.tape import use_tape
from .core.var import Var

logger = logging.getLogger(__name__)


def _evaluate(f: Callable[[Dict[str, Var]], Any], point: Dict[str, float]) -> float:
    with use_tape() as tape:
        vars_ad = {k: tape.value(v, name=k) for k, v in point.items()}
        return float(data(f(vars_ad)))


def bump_grads(f: Callable[[Dict[str, Var]], Any],
               inputs: Dict[str, float],
               eps: Optional[float] = None) -> Dict[str, float]:
    """Central-difference gradient of f at `inputs`, in the key order of `inputs`."""
    eps = AADConfig.BUMP_EPS if eps is None else eps
    out = {}
    for k in inputs:
        up = dict(inputs)
        dn = dict(inputs)
        up[k] = inputs[k] + eps
        dn[k] = inputs[k] - eps
        out[k] = (_evaluate(f, up) - _evaluate(f, dn)) / (2 * eps)
    return out


def check_grads(f: Callable[[Dict[str, Var]], Any],
                inputs: Dict[str, float],
                eps: Optional[float] = None,
                rtol: float = 1e-5,
                atol: float = 1e-7) -> Dict:
    """
    Compare reverse-mode gradients with bumping.

    Returns:
        {
          "aad": {name: float},
          "bumping": {name: float},
          "max_abs_err": float,
          "ok": bool,          # np.allclose(aad, bumping, rtol, atol)
        }
    """
    aad = grads(f, inputs)
    bump = bump_grads(f, inputs, eps)

    names = list(inputs.keys())
    a = np.array([aad[k] for k in names], dtype=float)
    b = np.array([bump[k] for k in names], dtype=float)
    max_abs_err = float(np.max(np.abs(a - b))) if names else 0.0
    ok = bool(np.allclose(a, b, rtol=rtol, atol=atol))

    if not ok:
        logger.warning("gradient check failed: max abs err %.3e over %s", max_abs_err, names)

    return {
        "aad": aad,
        "bumping": bump,
        "max_abs_err": max_abs_err,
        "ok": ok,
    }
