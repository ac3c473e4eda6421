"""
Neuron Module

This module implements the single computational unit of a feedforward network:
a weighted sum of its inputs plus a bias, passed through an activation function,
together with a momentum-based gradient-descent training step.

Classes:
    Neuron: Computational unit with its own weights, bias and momentum state
"""

import numpy as np
from typing import Sequence

from feedforward.activations         import PhiType, phi, phi_diff, activation_codes
from feedforward.activations         import DEFAULT_A, DEFAULT_K, DEFAULT_L
from feedforward.phenotype.link      import Link

class Neuron:
    """
    A computational node (neuron) in a feedforward neural network.

    The neuron computes its output as:
        z = bias + sum(w_i * x_i)   over the inputs whose link is set
        y = phi(z)

    Unset inputs contribute neither signal nor weight, which allows partially
    connected neurons without resizing the weight vector.

    Public Properties:
        weights:    Copy of the weight vector
        bias:       The bias added to the weighted sum
        z:          Most recent pre-activation value
        y:          Most recent output value
        num_inputs: Number of inputs (fixed at construction)
        phi_type:   The activation kind
        phi_params: The activation shape parameters (a, k, l)

    Public Methods:
        set_inputs(links):              Bind the input links
        set_phi_params(a, k, l):        Set the activation shape parameters
        forward():                      Compute and store the output
        backward(y_target, eta, mu, r): Update weights and bias, return the gradient
        train(y_target, eta, mu, r):    forward() followed by backward()
        output():                       A Link reading this neuron's output
    """

    def __init__(self, weights: Sequence[float], bias: float, phi_type: PhiType):
        """
        Parameters:
            weights:  Initial weights, one per input
            bias:     Initial bias
            phi_type: Activation kind (a PhiType or its name)
        """
        weights = np.array(weights, dtype=np.float64)
        if weights.ndim != 1:
            raise ValueError(f"Weights must be a 1D sequence, got {weights.ndim}D")

        self._weights : np.ndarray = weights
        self._bias    : float      = float(bias)
        self._phi_type: PhiType    = PhiType(phi_type)
        self._phi_a   : float      = DEFAULT_A
        self._phi_k   : float      = DEFAULT_K
        self._phi_l   : float      = DEFAULT_L

        self._z: float = 0.0
        self._y: float = 0.0

        self._inputs: list[Link] = [Link() for _ in range(len(weights))]

        # momentum state: the updates applied by the previous backward step
        self._weights_diff_prev: np.ndarray = np.zeros(len(weights))
        self._bias_diff_prev   : float      = 0.0

    @property
    def weights(self) -> np.ndarray:
        return self._weights.copy()

    @property
    def bias(self) -> float:
        return self._bias

    @property
    def z(self) -> float:
        """The most recent pre-activation value."""
        return self._z

    @property
    def y(self) -> float:
        """The most recent output value (0.0 before the first forward pass)."""
        return self._y

    @property
    def num_inputs(self) -> int:
        return len(self._weights)

    @property
    def phi_type(self) -> PhiType:
        return self._phi_type

    @property
    def phi_params(self) -> tuple[float, float, float]:
        return self._phi_a, self._phi_k, self._phi_l

    def set_inputs(self, links: Sequence) -> None:
        """
        Bind the input links.

        Parameters:
            links: one entry per weight; each a Link, a number (literal signal)
                   or None (unset input)
        """
        if len(links) != self.num_inputs:
            raise ValueError(f"Expected {self.num_inputs} inputs, got {len(links)}")
        self._inputs = [Link.coerce(link) for link in links]

    def set_phi_params(self, a: float, k: float, l: float) -> None:
        self._phi_a = float(a)
        self._phi_k = float(k)
        self._phi_l = float(l)

    def forward(self) -> float:
        """
        Compute the neuron output from the current input values.
        The pre-activation and output values are stored internally.

        Returns:
            The output value y
        """
        x, w = [], []
        for link, weight in zip(self._inputs, self._weights):
            value = link.get()
            if value is not None:
                x.append(value)
                w.append(weight)

        self._z = float(np.dot(x, w)) + self._bias
        self._y = float(phi(self._z, self._phi_type, *self.phi_params))
        return self._y

    def backward(self, y_target: float, eta: float = 0.1, mu: float = 0.5, r: float = 0.0) -> np.ndarray:
        """
        Perform one gradient-descent step using the most recent forward pass.

        With the cost derivative dC/dy = y - y_target:
            dC/dz = dC/dy * phi'(z)
            dC/dw = dC/dz * x            (x = 0 for unset inputs)
            dC/db = dC/dz
        and the applied updates are:
            diff  = eta * (-grad + mu * diff_prev + r)

        Parameters:
            y_target: Target output
            eta:      Learning rate
            mu:       Momentum coefficient
            r:        Perturbation added to every update (e.g. annealing noise)

        Returns:
            The raw gradient dC/dw, one entry per input (before momentum and learning rate)
        """
        dC_dy = self._y - y_target
        dy_dz = phi_diff(self._z, self._phi_type, *self.phi_params)
        dC_dz = dC_dy * dy_dz

        dz_dw = np.array([link.get(default=0.0) for link in self._inputs], dtype=np.float64)
        dC_dw = dC_dz * dz_dw
        dC_db = dC_dz

        weights_diff = eta * (-dC_dw + mu * self._weights_diff_prev + r)
        bias_diff    = eta * (-dC_db + mu * self._bias_diff_prev    + r)

        self._weights = self._weights + weights_diff
        self._bias   += bias_diff

        self._weights_diff_prev = weights_diff
        self._bias_diff_prev    = bias_diff

        return dC_dw

    def train(self, y_target: float, eta: float = 0.1, mu: float = 0.5, r: float = 0.0) -> np.ndarray:
        """Forward pass followed by a backward step; returns the raw gradient."""
        self.forward()
        return self.backward(y_target, eta, mu, r)

    update_forward  = forward
    update_backward = backward

    def output(self) -> Link:
        """A link reading this neuron's current output."""
        return Link.from_neuron(self)

    def __str__(self):
        code = activation_codes.get(self._phi_type, "???")
        weights = ", ".join(f"{w:+.2f}" for w in self._weights)
        return f"[{code},b={self._bias:+.2f},w=({weights})]"

    def __repr__(self):
        return (f"Neuron(weights={self._weights.tolist()}, bias={self._bias}, "
                f"phi_type=PhiType.{self._phi_type.name})")
