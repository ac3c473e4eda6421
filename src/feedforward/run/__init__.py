"""
Run Package

This package provides configuration and training utilities.

Exported:
    Config:  Configuration parameters parsed from an INI file
    Trainer: Epoch-based training loop for a NeuralNetwork
"""

from feedforward.run.config  import Config
from feedforward.run.trainer import Trainer

__all__ = [
    'Config',
    'Trainer',
]
