"""
Neural Layer Module

A layer is a fixed-size, ordered collection of neurons sharing the same
input links. Its neurons do not depend on each other, so a layer can run
them on a thread pool (joblib) when asked to.

Classes:
    NeuralLayer: Ordered collection of neurons with shared input wiring
"""

import numpy as np
from joblib import Parallel, delayed
from typing import Iterator, Sequence

from feedforward.activations      import PhiType
from feedforward.phenotype.link   import Link
from feedforward.phenotype.neuron import Neuron

class NeuralLayer:
    """
    A fully-connected layer of neurons.

    Every neuron receives the same input links; the layer output is one
    reference link per neuron.

    Public Properties:
        num_inputs:  Number of inputs shared by all neurons
        num_outputs: Number of neurons

    Public Methods:
        set_inputs(links):                        Bind the same input links to every neuron
        set_phi_params(a, k, l):                  Set the activation shape parameters of every neuron
        forward(num_jobs):                        Forward pass through every neuron
        backward(y_target, eta, mu, r, num_jobs): Backward step, returns the gradient matrix
        train(y_target, eta, mu, r, num_jobs):    forward() followed by backward()
        output():                                 One reference Link per neuron
        output_values():                          The neuron outputs as an array

    Parallelization of the neurons:
        num_jobs=1:  Serial (no parallelization)
        num_jobs>1:  Use specified number of threads
        num_jobs=-1: Use as many threads as CPU cores
    """

    def __init__(self,
                 weights : Sequence[Sequence[float]],
                 biases  : Sequence[float],
                 phi_type: PhiType):
        """
        Parameters:
            weights:  One weight sequence per neuron, all of the same length
            biases:   One bias per neuron
            phi_type: Activation kind shared by all neurons
        """
        if len(weights) == 0:
            raise ValueError("A layer needs at least one neuron")
        if len(biases) != len(weights):
            raise ValueError(f"Expected {len(weights)} biases, got {len(biases)}")

        widths = {len(w) for w in weights}
        if len(widths) != 1:
            raise ValueError(f"All neurons in a layer must have the same number of weights, got {sorted(widths)}")

        self._num_inputs : int          = widths.pop()
        self._neurons    : list[Neuron] = [Neuron(w, b, phi_type) for w, b in zip(weights, biases)]

    @property
    def num_inputs(self) -> int:
        return self._num_inputs

    @property
    def num_outputs(self) -> int:
        return len(self._neurons)

    @property
    def phi_type(self) -> PhiType:
        return self._neurons[0].phi_type

    def set_inputs(self, links: Sequence) -> None:
        if len(links) != self._num_inputs:
            raise ValueError(f"Expected {self._num_inputs} inputs, got {len(links)}")

        # all neurons share the same links
        links = [Link.coerce(link) for link in links]
        for neuron in self._neurons:
            neuron.set_inputs(links)

    def set_phi_params(self, a: float, k: float, l: float) -> None:
        for neuron in self._neurons:
            neuron.set_phi_params(a, k, l)

    def forward(self, num_jobs: int = 1) -> None:
        """
        Run the forward pass of every neuron.

        Parameters:
            num_jobs: Number of threads used to process the neurons
        """
        if num_jobs == 1:
            for neuron in self._neurons:
                neuron.forward()
        else:
            Parallel(n_jobs=num_jobs, prefer="threads")(delayed(neuron.forward)() for neuron in self._neurons)

    def backward(self,
                 y_target: Sequence[float],
                 eta     : float = 0.1,
                 mu      : float = 0.5,
                 r       : float = 0.0,
                 num_jobs: int   = 1) -> np.ndarray:
        """
        Run the backward step of every neuron, each against its own target.

        Parameters:
            y_target: One target per neuron
            eta:      Learning rate
            mu:       Momentum coefficient
            r:        Perturbation added to every update
            num_jobs: Number of threads used to process the neurons

        Returns:
            The gradient matrix, shape (num_outputs, num_inputs): row i is the
            raw gradient returned by neuron i
        """
        if len(y_target) != self.num_outputs:
            raise ValueError(f"Expected {self.num_outputs} targets, got {len(y_target)}")

        if num_jobs == 1:
            grads = [neuron.backward(target, eta, mu, r) for neuron, target in zip(self._neurons, y_target)]
        else:
            grads = Parallel(n_jobs=num_jobs, prefer="threads")(
                delayed(neuron.backward)(target, eta, mu, r) for neuron, target in zip(self._neurons, y_target))

        return np.array(grads, dtype=np.float64).reshape(self.num_outputs, self._num_inputs)

    def train(self,
              y_target: Sequence[float],
              eta     : float = 0.1,
              mu      : float = 0.5,
              r       : float = 0.0,
              num_jobs: int   = 1) -> np.ndarray:
        """Forward pass followed by a backward step; returns the gradient matrix."""
        self.forward(num_jobs)
        return self.backward(y_target, eta, mu, r, num_jobs)

    update_forward  = forward
    update_backward = backward

    def output(self) -> list[Link]:
        """One reference link per neuron, in neuron order."""
        return [neuron.output() for neuron in self._neurons]

    def output_values(self) -> np.ndarray:
        """The current outputs of the neurons."""
        return np.array([neuron.y for neuron in self._neurons], dtype=np.float64)

    def __getitem__(self, idx: int) -> Neuron:
        return self._neurons[idx]

    def __len__(self) -> int:
        return len(self._neurons)

    def __iter__(self) -> Iterator[Neuron]:
        return iter(self._neurons)

    def __str__(self):
        return "\n".join(f"  {neuron}" for neuron in self._neurons)

    def __repr__(self):
        return (f"NeuralLayer(inputs={self._num_inputs}, outputs={self.num_outputs}, "
                f"phi_type=PhiType.{self.phi_type.name})")
