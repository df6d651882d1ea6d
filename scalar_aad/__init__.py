# scalar_aad/__init__.py
# Scalar reverse-mode automatic differentiation

__version__ = "0.1.0"

from .core.var import Node, Role
from .core.tape import Tape, global_tape, use_tape, get_tape
from .core.engine import backward, zero_gradients, topological_order
from .core.seeds import grad, grads, grads_list, value, gradient
from .core.check import central_difference, check_gradients
from .core.graph_utils import get_graph_stats, format_graph_summary, log_graph_summary
from .ops.arithmetic import leaf, combine, add, sub, mul, div
from .nn.neuron import Neuron, NeuronConfig
from .errors import AADError, GraphError, ConstructionError, GradientCheckError

__all__ = [
    # Core
    'Node',
    'Role',
    'Tape',
    'global_tape',
    'use_tape',
    'get_tape',
    # Engine
    'backward',
    'zero_gradients',
    'topological_order',
    # Seeds
    'grad',
    'grads',
    'grads_list',
    'value',
    'gradient',
    'central_difference',
    'check_gradients',
    # Graph utilities
    'get_graph_stats',
    'format_graph_summary',
    'log_graph_summary',
    # Ops
    'leaf',
    'combine',
    'add',
    'sub',
    'mul',
    'div',
    # nn
    'Neuron',
    'NeuronConfig',
    # Errors
    'AADError',
    'GraphError',
    'ConstructionError',
    'GradientCheckError',
]
