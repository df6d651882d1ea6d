# scalar_aad/ops/__init__.py

# Convenience re-exports so users can do: from scalar_aad.ops import mul, ...
from .arithmetic import OPERATIONS, Operation, leaf, combine, local_backward
from .arithmetic import add, sub, mul, div

__all__ = [
    "OPERATIONS", "Operation",
    "leaf", "combine", "local_backward",
    "add", "sub", "mul", "div",
]
