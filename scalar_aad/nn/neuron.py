# scalar_aad/nn/neuron.py
"""
A single neuron built from graph nodes: sum_i (x_i * w_i) + bias.

No nonlinearity is applied; callers wrap the returned node themselves.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from ..core.var import Node, Role
from ..core import tape as tape_mod
from ..ops.arithmetic import leaf
from ..errors import ConstructionError

logger = logging.getLogger(__name__)

PER_INPUT = "per_input"
SHARED = "shared"
BIAS_MODES = (PER_INPUT, SHARED)


@dataclass
class NeuronConfig:
    """
    Attributes
    ----------
    dimension : int
        Number of inputs D.
    bias_mode : str
        "per_input": one bias leaf per input (D biases).
        "shared"   : a single bias leaf added once.
    seed : Optional[int]
        Seed for the uniform [0, 1) initialisation of missing parameters.
    """
    dimension: int
    bias_mode: str = PER_INPUT
    seed: Optional[int] = None

    def __post_init__(self):
        if isinstance(self.dimension, bool) or not isinstance(self.dimension, (int, np.integer)):
            raise TypeError(f"dimension must be an int, got {type(self.dimension)}")
        if self.dimension < 1:
            raise ValueError(f"dimension must be >= 1, got {self.dimension}")
        if self.bias_mode not in BIAS_MODES:
            raise ValueError(f"bias_mode must be one of {BIAS_MODES}, got {self.bias_mode!r}")

    @property
    def n_biases(self) -> int:
        return self.dimension if self.bias_mode == PER_INPUT else 1


class Neuron:
    """
    D weight leaves and one or D bias leaves on a single tape.

    Build the neuron first, then run each pass inside `tape.scope()` so the
    pass's intermediates are released while the parameters stay.

    Example:
        >>> n = Neuron(NeuronConfig(3), weights=[1.0] * 3, biases=[1.0] * 3)
        >>> y = n([10.0, 20.0, 30.0])
        >>> float(y.value())
        63.0
    """

    def __init__(self, config, weights: Optional[Sequence[float]] = None,
                 biases: Optional[Sequence[float]] = None,
                 rng: Optional[np.random.Generator] = None, tape=None):
        if not isinstance(config, NeuronConfig):
            config = NeuronConfig(dimension=config)
        self.config = config
        self.tape = tape if tape is not None else tape_mod.global_tape

        if weights is None or biases is None:
            rng = rng if rng is not None else np.random.default_rng(config.seed)
        if weights is None:
            weights = rng.random(config.dimension)
        if biases is None:
            biases = rng.random(config.n_biases)

        self.w = self._make_leaves(Role.WEIGHT, weights, config.dimension, "weights")
        self.b = self._make_leaves(Role.BIAS, biases, config.n_biases, "biases")
        logger.debug("neuron with %d weights and %d biases (%s)",
                     len(self.w), len(self.b), config.bias_mode)

    @property
    def dimension(self) -> int:
        return self.config.dimension

    def _make_leaves(self, role: Role, values, expected: int, what: str) -> List[Node]:
        values = list(values)
        if len(values) != expected:
            raise ConstructionError(what, expected, len(values))
        return [leaf(role, v, tape=self.tape) for v in values]

    def parameters(self) -> List[Node]:
        """Weights followed by biases."""
        return self.w + self.b

    def forward(self, inputs: Sequence) -> Node:
        inputs = [x if isinstance(x, Node) else leaf(Role.INPUT, x, tape=self.tape)
                  for x in inputs]
        if len(inputs) != self.dimension:
            raise ValueError(f"expected {self.dimension} inputs, got {len(inputs)}")

        acc = None
        if self.config.bias_mode == PER_INPUT:
            for x, w, b in zip(inputs, self.w, self.b):
                term = (x * w) + b
                acc = term if acc is None else acc + term
        else:
            for x, w in zip(inputs, self.w):
                term = x * w
                acc = term if acc is None else acc + term
            acc = acc + self.b[0]
        return acc

    def __call__(self, inputs: Sequence) -> Node:
        return self.forward(inputs)

    def __repr__(self):
        return f"Neuron(dimension={self.dimension}, bias_mode={self.config.bias_mode!r})"
