"""Pytest configuration and shared fixtures."""

import pytest
import random
import sys
import numpy as np
from pathlib import Path

# Add the project root (for 'examples') and the source directory to the Python path
root_dir = Path(__file__).parent.parent
sys.path.insert(0, str(root_dir))
sys.path.insert(0, str(root_dir / "src"))


@pytest.fixture(autouse=True)
def set_random_seeds():
    """Set random seeds for reproducibility."""
    np.random.seed(42)
    random.seed(42)
    yield
    np.random.seed(None)
    random.seed(None)


@pytest.fixture
def two_layer_weights():
    """Weights, biases and activations of a 2-input, 2-hidden, 2-output linear network."""
    from feedforward.activations import PhiType
    weights = [
        [[0.5, -0.25], [0.1, 0.2]],     # layer 0: 2 neurons x 2 inputs
        [[1.0,  2.0 ], [-1.0, 0.5]],    # layer 1: 2 neurons x 2 inputs
    ]
    biases    = [[0.0, 0.1], [0.0, 0.0]]
    phi_types = [PhiType.LINEAR, PhiType.LINEAR]
    return weights, biases, phi_types
