# scalar_aad/core/__init__.py

"""
Core public API for the scalar AAD package.

Exports:
    Node          : Role-tagged handle on a graph node.
    Role          : Input / Weight / Bias / Intermediate.
    Tape          : Arena of graph nodes and their gradient accumulators.
    global_tape   : The default tape new leaves are recorded on.
    use_tape      : Context manager to temporarily switch the active tape.
    backward      : Run one reverse pass from a root node.
    zero_gradients: Reset the gradients of every node reachable from a root.
    grad, grads   : Convenience: partials of a scalar function at a point.
    value         : Convenience: extract the forward value of a Node.
"""

from .var import Node, Role
from .tape import Tape, global_tape, use_tape, get_tape
from .engine import backward, zero_gradients, topological_order
from .seeds import grad, grads, grads_list, value, gradient
