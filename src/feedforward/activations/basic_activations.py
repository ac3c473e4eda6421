"""
Activation Functions Module.

Scalar activation functions ("phi") and their analytic first derivatives.
Every activation kind is identified by a PhiType and accepts up to three
shape parameters (a, k, l). Both phi() and phi_diff() dispatch through a
closed registry, so an unregistered kind is a configuration error.

Functions:
    phi(z, phi_type, a, k, l):      Evaluate the activation at z
    phi_diff(z, phi_type, a, k, l): Evaluate its derivative at z
    softmax(values, p):             Normalized exponentials of a sequence
"""

import autograd.numpy        as np  # type: ignore
from autograd.scipy.special import erf  # type: ignore
from enum                   import Enum
from typing                 import Callable

class PhiType(Enum):
    """
    The closed set of activation kinds a neuron can use.
    """
    BINARY_STEP           = "binary_step"
    HEAVISIDE_BINARY_STEP = "heaviside_binary_step"
    LINEAR                = "linear"
    SIGMOID               = "sigmoid"
    TANH                  = "tanh"
    RELU                  = "relu"
    PARAMETRIC_RELU       = "parametric_relu"
    LEAKY_RELU            = "leaky_relu"
    PARAMETRIC_LEAKY_RELU = "parametric_leaky_relu"
    ELU                   = "elu"
    SWISH                 = "swish"
    GELU                  = "gelu"
    SELU                  = "selu"

# Default shape parameters
DEFAULT_A = 1.0
DEFAULT_K = 1.0
DEFAULT_L = 1.1

# Slope below zero of the (non-parametric) leaky ReLU
LEAKY_SLOPE = 0.1

# Standard normal density at 0, 1/sqrt(2*pi)
_INV_SQRT_2PI = 1.0 / np.sqrt(2.0 * np.pi)

# ===================
# Forward definitions
# ===================

def _binary_step(z, a, k, l):
    return 0.0 if z < 0 else 1.0

def _heaviside_binary_step(z, a, k, l):
    return 0.0 if z <= 0 else 1.0

def _linear(z, a, k, l):
    return z

def _sigmoid(z, a, k, l):
    return 1.0 / (1.0 + np.exp(-z))

def _tanh(z, a, k, l):
    return np.tanh(z)

def _relu(z, a, k, l):
    return np.maximum(0.0, z)

def _parametric_relu(z, a, k, l):
    return np.maximum(0.0, k * z + l)

def _leaky_relu(z, a, k, l):
    return np.maximum(LEAKY_SLOPE * z, z)

def _parametric_leaky_relu(z, a, k, l):
    return np.maximum(a * (k * z + l), k * z + l)

def _elu(z, a, k, l):
    return a * (np.exp(z) - 1.0) if z < 0 else z

def _swish(z, a, k, l):
    return z * _sigmoid(z, a, k, l)

def _gelu(z, a, k, l):
    return 0.5 * z * (1.0 + erf(z / np.sqrt(2.0)))

def _selu(z, a, k, l):
    return l * _elu(z, a, k, l)

# ======================
# Derivative definitions
# ======================

# The step derivatives are a Dirac impulse at the boundary and 0 elsewhere,
# approximated as 0 everywhere.
def _binary_step_diff(z, a, k, l):
    return 0.0

def _heaviside_binary_step_diff(z, a, k, l):
    return 0.0

def _linear_diff(z, a, k, l):
    return 1.0

def _sigmoid_diff(z, a, k, l):
    s = _sigmoid(z, a, k, l)
    return s * (1.0 - s)

def _tanh_diff(z, a, k, l):
    th = _tanh(z, a, k, l)
    return 1.0 - th**2

def _relu_diff(z, a, k, l):
    return 0.0 if z < 0 else 1.0

def _parametric_relu_diff(z, a, k, l):
    return 0.0 if z < -l / k else k

def _leaky_relu_diff(z, a, k, l):
    return LEAKY_SLOPE if z < 0 else 1.0

def _parametric_leaky_relu_diff(z, a, k, l):
    return a * k if z < -l / k else k

def _elu_diff(z, a, k, l):
    # a*e^z == elu(z) + a for z < 0
    return _elu(z, a, k, l) + a if z < 0 else 1.0

def _swish_diff(z, a, k, l):
    sw  = _swish(z, a, k, l)
    sig = _sigmoid(z, a, k, l)
    return sw + sig * (1.0 - sw)

def _gelu_diff(z, a, k, l):
    return 0.5 * (1.0 + erf(z / np.sqrt(2.0))) + z * np.exp(-0.5 * z**2) * _INV_SQRT_2PI

def _selu_diff(z, a, k, l):
    return l * _elu_diff(z, a, k, l)

Activation = Callable[[float, float, float, float], float]

# PhiType => (forward, derivative)
activations: dict[PhiType, tuple[Activation, Activation]] = {
    PhiType.BINARY_STEP          : (_binary_step,           _binary_step_diff),
    PhiType.HEAVISIDE_BINARY_STEP: (_heaviside_binary_step, _heaviside_binary_step_diff),
    PhiType.LINEAR               : (_linear,                _linear_diff),
    PhiType.SIGMOID              : (_sigmoid,               _sigmoid_diff),
    PhiType.TANH                 : (_tanh,                  _tanh_diff),
    PhiType.RELU                 : (_relu,                  _relu_diff),
    PhiType.PARAMETRIC_RELU      : (_parametric_relu,       _parametric_relu_diff),
    PhiType.LEAKY_RELU           : (_leaky_relu,            _leaky_relu_diff),
    PhiType.PARAMETRIC_LEAKY_RELU: (_parametric_leaky_relu, _parametric_leaky_relu_diff),
    PhiType.ELU                  : (_elu,                   _elu_diff),
    PhiType.SWISH                : (_swish,                 _swish_diff),
    PhiType.GELU                 : (_gelu,                  _gelu_diff),
    PhiType.SELU                 : (_selu,                  _selu_diff),
    }

# 3-letter identifiers for each activation function
activation_codes = {
    PhiType.BINARY_STEP          : "BST",
    PhiType.HEAVISIDE_BINARY_STEP: "HST",
    PhiType.LINEAR               : "LIN",
    PhiType.SIGMOID              : "SIG",
    PhiType.TANH                 : "TNH",
    PhiType.RELU                 : "RLU",
    PhiType.PARAMETRIC_RELU      : "PRL",
    PhiType.LEAKY_RELU           : "LRL",
    PhiType.PARAMETRIC_LEAKY_RELU: "PLR",
    PhiType.ELU                  : "ELU",
    PhiType.SWISH                : "SWI",
    PhiType.GELU                 : "GLU",
    PhiType.SELU                 : "SLU",
    }

def _lookup(phi_type: PhiType) -> tuple[Activation, Activation]:
    try:
        return activations[phi_type]
    except KeyError:
        raise ValueError(f"Unknown activation function: {phi_type!r}") from None

def phi(z         : float,
        phi_type  : PhiType,
        a         : float = DEFAULT_A,
        k         : float = DEFAULT_K,
        l         : float = DEFAULT_L) -> float:
    """
    Evaluate an activation function.

    Parameters:
        z:        The pre-activation value
        phi_type: The activation kind
        a, k, l:  Shape parameters (only some kinds use them)

    Returns:
        The activation value at z

    Raises:
        ValueError: If 'phi_type' is not a registered activation kind
    """
    forward, _ = _lookup(phi_type)
    return forward(z, a, k, l)

def phi_diff(z       : float,
             phi_type: PhiType,
             a       : float = DEFAULT_A,
             k       : float = DEFAULT_K,
             l       : float = DEFAULT_L) -> float:
    """
    Evaluate the analytic first derivative of an activation function.

    The same shape parameters as for phi() must be passed. Where possible the
    derivative reuses the forward value rather than recomputing exponentials.

    Parameters:
        z:        The pre-activation value
        phi_type: The activation kind
        a, k, l:  Shape parameters (only some kinds use them)

    Returns:
        d(phi)/dz at z

    Raises:
        ValueError: If 'phi_type' is not a registered activation kind
    """
    _, derivative = _lookup(phi_type)
    return derivative(z, a, k, l)

def softmax(values, p: float = 1.0) -> np.ndarray:
    """
    Normalized exponentials of a sequence: exp(v) / sum(exp(v)).

    When p != 1 every value is first raised to the power p. No max-subtraction
    is performed, so sufficiently large inputs overflow to non-finite results.
    """
    values = np.array(values, dtype=np.float64)
    if p == 1:
        ev = np.exp(values)
    else:
        ev = np.exp(values ** p)
    return ev / np.sum(ev)
