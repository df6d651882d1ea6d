# scalar_aad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List

from .var import Node, Role
from .tape import use_tape
from .engine import backward
from ..ops.arithmetic import leaf


def value(x: Any) -> Any:
    """Return the forward value of a Node; pass through plain numbers unchanged."""
    return x.value() if isinstance(x, Node) else x


def gradient(x: Node):
    """Return the gradient accumulated on `x` by the last backward pass."""
    return x.gradient()


def _ensure_node(y: Any) -> Node:
    # constant outputs still get a node so that backward has a root
    return y if isinstance(y, Node) else leaf(Role.INPUT, y)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Node], Any], x0: float):
    """
    Derivative of a scalar function y=f(x) at x0.
    Runs one backward pass within a fresh, isolated tape.
    """
    with use_tape():
        x = leaf(Role.INPUT, x0)
        y = _ensure_node(f(x))
        backward(y)
        return x.gradient()


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Node]], Any],
          inputs: Dict[str, float]) -> Dict[str, Any]:
    """
    Named partials of f at `inputs`, all taken from a single backward pass.

    `f` receives one Input leaf per key and returns the output node; the
    result maps each key to d(output)/d(leaf). Inputs f ignores get 0.0.
    """
    with use_tape():
        nodes = {k: leaf(Role.INPUT, v) for k, v in inputs.items()}
        y = _ensure_node(f(nodes))
        backward(y)
        return {k: nodes[k].gradient() for k in inputs.keys()}


def grads_list(f: Callable[[List[Node]], Any],
               x0_list: Iterable[float]) -> List[Any]:
    """
    Positional form of grads(): f takes a list of leaves.

        grads_list(lambda xs: xs[0] * xs[0] + 3 * xs[1], [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs = [leaf(Role.INPUT, v) for v in x0_list]
        y = _ensure_node(f(xs))
        backward(y)
        return [x.gradient() for x in xs]
