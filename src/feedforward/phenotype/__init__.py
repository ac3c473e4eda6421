"""
Phenotype Package

This package provides the executable network components.

Exported:
    Link:          Typed value source for a single neuron input
    Neuron:        Weighted sum plus activation, with momentum training
    NeuralLayer:   Ordered collection of neurons sharing their inputs
    NeuralNetwork: Feedforward composition of layers
"""

from feedforward.phenotype.link    import Link
from feedforward.phenotype.neuron  import Neuron
from feedforward.phenotype.layer   import NeuralLayer
from feedforward.phenotype.network import NeuralNetwork

__all__ = [
    'Link',
    'Neuron',
    'NeuralLayer',
    'NeuralNetwork',
]
