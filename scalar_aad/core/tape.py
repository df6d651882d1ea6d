# scalar_aad/core/tape.py
from __future__ import annotations
from typing import List, Optional
from contextlib import contextmanager

import numpy as np

from .node import GraphNode, LEAF, OP_TAGS
from ..errors import GraphError


def _as_float64(value) -> np.float64:
    # ints beyond float range round to +/-inf like any other overflow
    try:
        return np.float64(value)
    except OverflowError:
        return np.float64(np.inf if value > 0 else -np.inf)


class Tape:
    """
    Arena of graph nodes, recorded in construction order.

    `nodes[i]` is the immutable record of node i and `grads[i]` its gradient
    accumulator. Children are always pushed before their parents, so every
    child index is smaller than the index of any node that consumes it.

    `stamps[i]` is the generation the slot was filled in. `reset` and
    `truncate` start a new generation, so a handle to a dropped node no
    longer matches the stamp of whatever later takes its slot.
    """
    def __init__(self):
        self.nodes: List[GraphNode] = []
        self.grads: List[np.float64] = []
        self.stamps: List[int] = []
        self.generation = 0

    def __len__(self):
        return len(self.nodes)

    def reset(self):
        """Drop every recorded node; Nodes built on this tape become invalid."""
        self.truncate(0)

    def mark(self) -> int:
        """Current size of the tape, to be passed to `truncate` later."""
        return len(self.nodes)

    def truncate(self, mark: int):
        """
        Drop every node recorded after `mark`. Nodes below the mark (model
        parameters, typically) stay valid; handles to dropped ones raise
        GraphError from then on.
        """
        if not 0 <= mark <= len(self.nodes):
            raise GraphError(f"mark {mark!r} is outside the tape (size {len(self.nodes)})")
        del self.nodes[mark:]
        del self.grads[mark:]
        del self.stamps[mark:]
        self.generation += 1

    @contextmanager
    def scope(self):
        """
        Record one pass and release it on exit; nodes built before entering
        survive:
            with tape.scope():
                backward(neuron(xs))
                ... read gradients of neuron.parameters() ...
        """
        mark = self.mark()
        try:
            yield self
        finally:
            self.truncate(mark)

    def push_leaf(self, value) -> int:
        return self.push_node(op_tag=LEAF, value=value)

    def push_node(self, *, op_tag: str, value, left: Optional[int] = None,
                  right: Optional[int] = None) -> int:
        """
        Append a GraphNode with a zero gradient and return its index.
        Non-leaf nodes must name two children already on this tape.
        """
        if op_tag not in OP_TAGS:
            raise GraphError(f"unknown operation tag {op_tag!r}")
        if op_tag == LEAF:
            if left is not None or right is not None:
                raise GraphError("leaf nodes take no children")
        else:
            for child in (left, right):
                self.check_index(child)
        self.nodes.append(GraphNode(op_tag=op_tag, value=_as_float64(value),
                                    left=left, right=right))
        self.grads.append(np.float64(0.0))
        self.stamps.append(self.generation)
        return len(self.nodes) - 1

    def check_index(self, idx) -> None:
        if idx is None or not 0 <= idx < len(self.nodes):
            raise GraphError(f"node id {idx!r} is not on this tape (size {len(self.nodes)})")

    def check_handle(self, idx: int, stamp: int) -> None:
        """Raise GraphError unless slot `idx` still holds the node stamped `stamp`."""
        if not 0 <= idx < len(self.nodes) or self.stamps[idx] != stamp:
            raise GraphError(f"node id {idx} was released by reset() or truncate()")

    def value(self, idx: int) -> np.float64:
        return self.nodes[idx].value

    def grad(self, idx: int) -> np.float64:
        return self.grads[idx]

    def zero_grads(self):
        """Reset every gradient accumulator on the tape to 0.0."""
        for i in range(len(self.grads)):
            self.grads[i] = np.float64(0.0)


# Global singleton tape (simple and practical default)
global_tape = Tape()


def get_tape() -> Tape:
    """Return the currently active tape."""
    from . import tape as _tape_mod  # module access so use_tape() swaps are seen
    return _tape_mod.global_tape


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh tape:
        with use_tape():
            ... build computation ...
            backward(y)
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        _tape_mod.global_tape = prev
