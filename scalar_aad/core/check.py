# scalar_aad/core/check.py
"""
Finite-difference cross-checks for reverse-mode gradients.

Each input is bumped up and down by `eps` and the function is re-evaluated
on an isolated tape:

    df/dx_i ≈ (f(x + eps e_i) - f(x - eps e_i)) / (2 eps)

Sign conventions of sub/div rules are the usual thing this catches.
"""
from __future__ import annotations
import logging
from typing import Callable, List, Sequence

import numpy as np

from .var import Node, Role
from .tape import use_tape
from .seeds import grads_list, value
from ..ops.arithmetic import leaf
from ..errors import GradientCheckError

logger = logging.getLogger(__name__)

EPSILON = 1e-6  # bump size for central differences


def _evaluate(f: Callable[[List[Node]], Node], x: Sequence[float]) -> float:
    with use_tape():
        return float(value(f([leaf(Role.INPUT, v) for v in x])))


def central_difference(f: Callable[[List[Node]], Node], x0_list: Sequence[float],
                       eps: float = EPSILON) -> np.ndarray:
    """Central-difference estimate of every partial of f at x0_list."""
    x0 = np.asarray(x0_list, dtype=np.float64)
    out = np.zeros_like(x0)
    for i in range(x0.size):
        x_up = x0.copy(); x_up[i] += eps
        x_dn = x0.copy(); x_dn[i] -= eps
        out[i] = (_evaluate(f, x_up) - _evaluate(f, x_dn)) / (2 * eps)
    return out


def check_gradients(f: Callable[[List[Node]], Node], x0_list: Sequence[float], *,
                    eps: float = EPSILON, rtol: float = 1e-5, atol: float = 1e-6) -> np.ndarray:
    """
    Compare reverse-mode partials of f against central differences.

    Returns the reverse-mode partials when all agree within (rtol, atol);
    otherwise raises GradientCheckError for the first disagreeing input.
    """
    analytic = np.asarray([float(g) for g in grads_list(f, x0_list)], dtype=np.float64)
    numeric = central_difference(f, x0_list, eps=eps)
    close = np.isclose(analytic, numeric, rtol=rtol, atol=atol)
    if not close.all():
        i = int(np.flatnonzero(~close)[0])
        raise GradientCheckError(i, analytic[i], numeric[i])
    logger.debug("gradient check passed for %d inputs", analytic.size)
    return analytic
