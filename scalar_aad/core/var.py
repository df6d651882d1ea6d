# scalar_aad/core/var.py
from __future__ import annotations
from enum import Enum

from .tape import Tape


class Role(Enum):
    """What a node stands for. Only leaves carry Input/Weight/Bias."""
    INPUT = "input"
    WEIGHT = "weight"
    BIAS = "bias"
    INTERMEDIATE = "intermediate"


LEAF_ROLES = (Role.INPUT, Role.WEIGHT, Role.BIAS)


def _binary(op_name: str, reflected: bool = False):
    """Method forwarding to ops.arithmetic.<op_name>, operands swapped when reflected."""
    def method(self, other):
        from ..ops import arithmetic  # lazy: arithmetic imports this module
        op = getattr(arithmetic, op_name)
        return op(other, self) if reflected else op(self, other)
    method.__name__ = op_name
    return method


class Node:
    """
    Role-tagged handle on one graph node.

    Attributes
    ----------
    tape : Tape
        Arena holding the node's record and gradient accumulator.
    index : int
        Position of the node on `tape`.
    role : Role
        Input, Weight or Bias for leaves; Intermediate for every operation result.
    stamp : int
        Tape generation the node was recorded in; once the node is dropped by
        `Tape.reset` or `Tape.truncate`, every access raises GraphError.

    Nodes compare by identity, so the same leaf can be used as a dict key
    or collected into a set of parameters.
    """

    __slots__ = ("tape", "index", "role", "stamp")

    def __init__(self, tape: Tape, index: int, role: Role):
        tape.check_index(index)
        self.tape = tape
        self.index = index
        self.role = role
        self.stamp = tape.stamps[index]

    def check_alive(self) -> None:
        self.tape.check_handle(self.index, self.stamp)

    @property
    def record(self):
        self.check_alive()
        return self.tape.nodes[self.index]

    @property
    def op_tag(self) -> str:
        return self.record.op_tag

    @property
    def is_leaf(self) -> bool:
        return self.record.is_leaf

    def value(self):
        """Forward value, computed when the node was built."""
        return self.record.value

    def gradient(self):
        """Current content of the gradient accumulator."""
        self.check_alive()
        return self.tape.grads[self.index]

    def backward(self, seed=1.0):
        from .engine import backward
        return backward(self, seed=seed)

    def zero_grad(self):
        from .engine import zero_gradients
        zero_gradients(self)

    def __repr__(self):
        return (f"Node({self.role.value}, value={float(self.value())!r}, "
                f"grad={float(self.gradient())!r}, id={self.index})")

    add = __add__ = _binary("add")
    sub = __sub__ = _binary("sub")
    mul = __mul__ = _binary("mul")
    div = __truediv__ = _binary("div")
    __radd__ = _binary("add", reflected=True)
    __rsub__ = _binary("sub", reflected=True)
    __rmul__ = _binary("mul", reflected=True)
    __rtruediv__ = _binary("div", reflected=True)
