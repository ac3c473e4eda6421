"""
feedforward - A minimal feed-forward neural network engine.

This package provides scalar activation functions with analytic derivatives,
single neurons, fully-connected layers and multi-layer networks, all trainable
by momentum-based gradient descent with manual backpropagation.

Main components:
- activations: Activation functions (PhiType, phi, phi_diff, softmax)
- phenotype:   Executable network components (Link, Neuron, NeuralLayer, NeuralNetwork)
- run:         Configuration and training loop

Example:
    >>> from feedforward import NeuralNetwork, PhiType
    >>> network = NeuralNetwork(weights=[[[0.5, -0.5]]], biases=[[0.0]],
    ...                         phi_types=[PhiType.LINEAR])
    >>> network.set_inputs([1.0, 1.0])
    >>> network.train([1.0], eta=0.1, mu=0.0)
    array([[-1., -1.]])
"""

__version__ = "0.1.0"

# Import main classes for convenient access
from feedforward.activations import PhiType, phi, phi_diff, softmax
from feedforward.phenotype   import Link, Neuron, NeuralLayer, NeuralNetwork
from feedforward.run         import Config, Trainer

__all__ = [
    "PhiType",
    "phi",
    "phi_diff",
    "softmax",
    "Link",
    "Neuron",
    "NeuralLayer",
    "NeuralNetwork",
    "Config",
    "Trainer",
]
