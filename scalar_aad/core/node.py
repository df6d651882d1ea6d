# scalar_aad/core/node.py
from dataclasses import dataclass
from typing import Optional

import numpy as np

# Closed set of operation tags; "leaf" nodes have no children.
LEAF = "leaf"
ADD = "add"
SUB = "sub"
MUL = "mul"
DIV = "div"

OP_TAGS = (LEAF, ADD, SUB, MUL, DIV)


@dataclass(frozen=True)
class GraphNode:
    """
    One immutable record in the computation DAG.

    Attributes
    ----------
    op_tag : str
        Operation that produced this node ("leaf", "add", "sub", "mul", "div").
    value  : np.float64
        Result of the operation (or the leaf's raw scalar), fixed at construction.
    left   : Optional[int]
        Tape index of the left operand; None for leaves.
    right  : Optional[int]
        Tape index of the right operand; None for leaves.

    The gradient accumulator is not stored here: it lives in the tape's
    gradient table, indexed by the node's position on the tape.
    """
    op_tag: str
    value: np.float64
    left: Optional[int] = None
    right: Optional[int] = None

    @property
    def is_leaf(self) -> bool:
        return self.op_tag == LEAF

    @property
    def children(self):
        """(left, right) child indices, or () for a leaf."""
        if self.is_leaf:
            return ()
        return (self.left, self.right)
