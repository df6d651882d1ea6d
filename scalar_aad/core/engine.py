# scalar_aad/core/engine.py
from __future__ import annotations
import logging
from typing import List

import numpy as np

from .var import Node
from ..ops.arithmetic import local_backward

logger = logging.getLogger(__name__)


def topological_order(root: Node) -> List[int]:
    """
    Post-order depth-first traversal from `root`, iterative so that long
    expression chains cannot exhaust the interpreter stack.

    Each distinct node id appears once, after all of its children. The
    root is last.
    """
    root.check_alive()
    nodes = root.tape.nodes
    order: List[int] = []
    visited = set()
    stack = [(root.index, False)]
    while stack:
        idx, expanded = stack.pop()
        if expanded:
            order.append(idx)
            continue
        if idx in visited:
            continue
        visited.add(idx)
        stack.append((idx, True))
        # push right first so the left subtree is visited first
        for child in reversed(nodes[idx].children):
            if child not in visited:
                stack.append((child, False))
    return order


def zero_gradients(root: Node) -> None:
    """
    Set the gradient of every node reachable from `root` to zero.
    Required before running `backward` again on the same graph.
    """
    grads = root.tape.grads
    order = topological_order(root)
    for idx in order:
        grads[idx] = np.float64(0.0)
    logger.debug("zeroed %d gradients below node %d", len(order), root.index)


def backward(root: Node, seed=1.0) -> List[int]:
    """
    Reverse-mode pass: afterwards every node reachable from `root` holds
    d(root)/d(node) in its gradient accumulator.

    The root gradient is set to `seed` and the post-order is replayed in
    reverse, so a node's local rule only runs once every parent has
    contributed to it. Gradients are not reset here: running twice on the
    same graph without `zero_gradients` accumulates twice.

    Returns
    -------
    List[int]
        Node ids in the order their local rules ran (root first).
    """
    tape = root.tape
    order = topological_order(root)
    tape.grads[root.index] = np.float64(seed)
    order.reverse()
    for idx in order:
        local_backward(tape, idx)
    logger.debug("backward from node %d visited %d nodes", root.index, len(order))
    return order
