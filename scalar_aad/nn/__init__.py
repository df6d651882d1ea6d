# scalar_aad/nn/__init__.py
from .neuron import Neuron, NeuronConfig

__all__ = ["Neuron", "NeuronConfig"]
