# scalar_aad/ops/arithmetic.py
"""
Operation registry: the closed set of binary primitives.

Each Operation pairs a forward rule on the operand values with a local
backward rule that maps (node gradient, left value, right value) to the
contributions added into the left and right gradient accumulators.
Backward rules use operand values only, never operand gradients.
"""
from dataclasses import dataclass
from typing import Callable, Dict, Tuple

import numpy as np

from ..core.node import ADD, SUB, MUL, DIV
from ..core.var import Node, Role, LEAF_ROLES
from ..core import tape as tape_mod  # Use module access for use_tape() compatibility
from ..errors import GraphError

REAL_TYPES = (int, float, np.integer, np.floating)


@dataclass(frozen=True)
class Operation:
    tag: str
    forward: Callable[[np.float64, np.float64], np.float64]
    backward: Callable[[np.float64, np.float64, np.float64], Tuple[np.float64, np.float64]]


OPERATIONS: Dict[str, Operation] = {
    ADD: Operation(ADD, lambda a, b: a + b, lambda g, a, b: (g, g)),
    SUB: Operation(SUB, lambda a, b: a - b, lambda g, a, b: (g, -g)),
    MUL: Operation(MUL, lambda a, b: a * b, lambda g, a, b: (b * g, a * g)),
    DIV: Operation(DIV, lambda a, b: a / b, lambda g, a, b: (g / b, -g * a / (b * b))),
}


def _check_real(value):
    if isinstance(value, bool) or not isinstance(value, REAL_TYPES):
        raise TypeError(
            f"graph nodes only accept real scalars (int, float, numpy scalar), "
            f"but got {type(value)}"
        )


def leaf(role, value, *, tape=None) -> Node:
    """
    Create a leaf node holding `value` with role Input, Weight or Bias.
    The leaf goes on `tape`, or on the active tape when omitted.
    """
    role = Role(role)
    if role not in LEAF_ROLES:
        raise ValueError(f"leaf role must be one of {[r.value for r in LEAF_ROLES]}, got {role.value!r}")
    _check_real(value)
    tape = tape if tape is not None else tape_mod.global_tape
    return Node(tape, tape.push_leaf(value), role)


def _as_node(x, tape) -> Node:
    """Ensure x is a Node; otherwise wrap a plain scalar as an Input leaf on `tape`."""
    return x if isinstance(x, Node) else leaf(Role.INPUT, x, tape=tape)


def _common_tape(left, right):
    tapes = [x.tape for x in (left, right) if isinstance(x, Node)]
    if not tapes:
        return tape_mod.global_tape
    if len(tapes) == 2 and tapes[0] is not tapes[1]:
        raise GraphError("cannot combine nodes recorded on different tapes")
    return tapes[0]


def combine(op_tag: str, left, right) -> Node:
    """
    Apply the registered operation `op_tag` to two operands and record the
    result as an Intermediate node whose children are the operands.

    The value is computed eagerly. Division by zero and overflow yield
    IEEE-754 inf/NaN instead of raising.
    """
    try:
        op = OPERATIONS[op_tag]
    except KeyError:
        raise GraphError(f"unknown operation tag {op_tag!r}") from None
    tape = _common_tape(left, right)
    left = _as_node(left, tape)
    right = _as_node(right, tape)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        out = op.forward(left.value(), right.value())
    idx = tape.push_node(op_tag=op_tag, value=out, left=left.index, right=right.index)
    return Node(tape, idx, Role.INTERMEDIATE)


def local_backward(tape, idx: int) -> None:
    """
    Distribute the (fully accumulated) gradient of node `idx` into its
    children's accumulators. Leaves are terminal.
    """
    node = tape.nodes[idx]
    if node.is_leaf:
        return
    op = OPERATIONS[node.op_tag]
    lv = tape.nodes[node.left].value
    rv = tape.nodes[node.right].value
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        d_left, d_right = op.backward(tape.grads[idx], lv, rv)
        tape.grads[node.left] = tape.grads[node.left] + d_left
        tape.grads[node.right] = tape.grads[node.right] + d_right


def add(x, y): return combine(ADD, x, y)
def sub(x, y): return combine(SUB, x, y)
def mul(x, y): return combine(MUL, x, y)
def div(x, y): return combine(DIV, x, y)
