"""
Activations Package

This package provides the activation functions used by feedforward neurons.

Exported:
    PhiType:          Enumeration of the supported activation kinds
    phi, phi_diff:    Activation value and analytic derivative
    softmax:          Normalized exponentials of a sequence
    activations:      Dictionary mapping PhiType to (forward, derivative) pairs
    activation_codes: Dictionary mapping PhiType to a 3-letter identifier
"""

from feedforward.activations.basic_activations import (
    PhiType,
    phi,
    phi_diff,
    softmax,
    activations,
    activation_codes,
    DEFAULT_A,
    DEFAULT_K,
    DEFAULT_L,
)

__all__ = [
    'PhiType',
    'phi',
    'phi_diff',
    'softmax',
    'activations',
    'activation_codes',
    'DEFAULT_A',
    'DEFAULT_K',
    'DEFAULT_L',
]
