"""
Neural Network Module

This module composes layers into a multi-layer feedforward network.
Layer i (i > 0) reads the outputs of layer i-1 through reference links,
bound once at construction; only the first layer's inputs are set by the caller.

Training propagates gradients from the last layer back to the first: the
gradient matrix of each layer is summed over its rows (one row per neuron)
and the resulting vector, sized to the layer's inputs, becomes the target
passed to the backward step of the preceding layer.

Classes:
    NeuralNetwork: Feedforward network of fully-connected layers
"""

import numpy    as np
import graphviz  # type: ignore
from typing import Iterator, Sequence, TYPE_CHECKING

if TYPE_CHECKING:
    from feedforward.run.config import Config
from feedforward.activations      import PhiType, activation_codes
from feedforward.phenotype.layer  import NeuralLayer
from feedforward.phenotype.link   import Link

class NeuralNetwork:
    """
    A feedforward neural network made of fully-connected layers.

    Public Properties:
        num_inputs:  Number of inputs of the first layer
        num_outputs: Number of neurons in the last layer
        num_layers:  Number of layers

    Public Methods:
        from_config(config):                      Build a randomly initialized network
        set_inputs(links):                        Bind the inputs of the first layer
        set_phi_params(a, k, l):                  Set the activation shape parameters everywhere
        forward(num_jobs):                        Forward pass, layer by layer
        backward(y_target, eta, mu, r, num_jobs): Backward pass, returns the first layer's gradient matrix
        train(y_target, eta, mu, r, num_jobs):    forward() followed by backward()
        predict(inputs, num_jobs):                Set literal inputs, run forward, return outputs
        output():                                 Reference links to the last layer's neurons
        output_values():                          The last layer's outputs as an array
        visualize(view):                          Render the network with Graphviz
    """

    def __init__(self,
                 weights  : Sequence[Sequence[Sequence[float]]],
                 biases   : Sequence[Sequence[float]],
                 phi_types: Sequence[PhiType]):
        """
        Parameters:
            weights:   layers => neurons => weights
            biases:    layers => neurons => bias
            phi_types: One activation kind per layer
        """
        if len(weights) == 0:
            raise ValueError("A network needs at least one layer")
        if len(biases) != len(weights):
            raise ValueError(f"Expected biases for {len(weights)} layers, got {len(biases)}")
        if len(phi_types) != len(weights):
            raise ValueError(f"Expected activations for {len(weights)} layers, got {len(phi_types)}")

        self._layers: list[NeuralLayer] = [NeuralLayer(w, b, p) for w, b, p in zip(weights, biases, phi_types)]

        # Wire each layer to the outputs of the previous one (permanently)
        for prev_layer, layer in zip(self._layers, self._layers[1:]):
            layer.set_inputs(prev_layer.output())

    @classmethod
    def from_config(cls, config: "Config") -> "NeuralNetwork":
        """
        Build a network with random weights and biases.

        The layer sizes, activations and initialization distributions
        are taken from the configuration. Weights and biases are drawn from
        normal distributions and clipped to the configured bounds.

        Parameters:
            config: Configuration parameters

        Returns:
            A new NeuralNetwork
        """
        sizes = config.layer_sizes
        if len(sizes) < 2:
            raise ValueError(f"'layer_sizes' needs at least an input and an output size, got {sizes}")

        phi_types = config.activations
        if len(phi_types) == 1:
            phi_types = phi_types * (len(sizes) - 1)
        if len(phi_types) != len(sizes) - 1:
            raise ValueError(f"Expected {len(sizes) - 1} activations, got {len(phi_types)}")

        weights, biases = [], []
        for num_in, num_out in zip(sizes, sizes[1:]):
            w = np.random.normal(config.weight_init_mean, config.weight_init_stdev, (num_out, num_in))
            w = np.clip(w, config.min_weight, config.max_weight)
            b = np.random.normal(config.bias_init_mean, config.bias_init_stdev, num_out)
            b = np.clip(b, config.min_bias, config.max_bias)
            weights.append(w.tolist())
            biases.append(b.tolist())

        network = cls(weights, biases, phi_types)
        network.set_phi_params(config.phi_a, config.phi_k, config.phi_l)
        return network

    @property
    def num_inputs(self) -> int:
        return self._layers[0].num_inputs

    @property
    def num_outputs(self) -> int:
        return self._layers[-1].num_outputs

    @property
    def num_layers(self) -> int:
        return len(self._layers)

    def set_inputs(self, links: Sequence) -> None:
        """
        Bind the inputs of the first layer.

        Parameters:
            links: one entry per network input; each a Link, a number or None
        """
        self._layers[0].set_inputs(links)

    def set_phi_params(self, a: float, k: float, l: float) -> None:
        for layer in self._layers:
            layer.set_phi_params(a, k, l)

    def forward(self, num_jobs: int = 1) -> None:
        """
        Forward pass through all layers, strictly in order.

        Parameters:
            num_jobs: Number of threads used for the neurons of each layer
        """
        for layer in self._layers:
            layer.forward(num_jobs)

    def backward(self,
                 y_target: Sequence[float],
                 eta     : float = 0.1,
                 mu      : float = 0.5,
                 r       : float = 0.0,
                 num_jobs: int   = 1) -> np.ndarray:
        """
        Backward pass from the last layer to the first.

        The last layer is trained against 'y_target'. Each preceding layer is
        trained against the column sums of the gradient matrix returned by the
        layer after it.

        Parameters:
            y_target: One target per network output
            eta:      Learning rate
            mu:       Momentum coefficient
            r:        Perturbation added to every update
            num_jobs: Number of threads used for the neurons of each layer

        Returns:
            The gradient matrix of the first layer, shape (neurons, network inputs)
        """
        if len(y_target) != self.num_outputs:
            raise ValueError(f"Expected {self.num_outputs} targets, got {len(y_target)}")

        grad = self._layers[-1].backward(y_target, eta, mu, r, num_jobs)
        for layer in reversed(self._layers[:-1]):
            # sum each input position's contribution over the downstream neurons
            grad_flat = grad.sum(axis=0)
            grad = layer.backward(grad_flat, eta, mu, r, num_jobs)
        return grad

    def train(self,
              y_target: Sequence[float],
              eta     : float = 0.1,
              mu      : float = 0.5,
              r       : float = 0.0,
              num_jobs: int   = 1) -> np.ndarray:
        """Forward pass followed by a backward pass; returns the first layer's gradient matrix."""
        self.forward(num_jobs)
        return self.backward(y_target, eta, mu, r, num_jobs)

    update_forward  = forward
    update_backward = backward

    def predict(self, inputs: Sequence[float], num_jobs: int = 1) -> np.ndarray:
        """
        Evaluate the network on literal input values.

        Parameters:
            inputs: the network inputs (as many as the first layer's inputs)

        Returns:
            The network outputs as an array
        """
        self.set_inputs([Link.signal(x) for x in inputs])
        self.forward(num_jobs)
        return self.output_values()

    def output(self) -> list[Link]:
        return self._layers[-1].output()

    def output_values(self) -> np.ndarray:
        return self._layers[-1].output_values()

    def __getitem__(self, idx: int) -> NeuralLayer:
        return self._layers[idx]

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[NeuralLayer]:
        return iter(self._layers)

    def visualize(self, view: bool = False) -> graphviz.Digraph:
        """
        Visualize the network using Graphviz.

        Each layer is drawn as a cluster, preceded by a cluster for the network
        inputs; edges are labelled with the connection weights.

        Parameters:
            view: If True, automatically open the visualization after rendering

        Returns:
            graphviz.Digraph object representing the network
        """
        dot = graphviz.Digraph()
        dot.attr(rankdir='LR')  # Left to right layout
        dot.attr('graph', labelloc='t')

        node_attrs = {'color': 'black', 'style': 'filled', 'shape': 'circle', 'penwidth': '0.5',
                      'fontsize': '5', 'width': '0.5', 'height': '0.5', 'fixedsize': 'true'}

        with dot.subgraph(name='cluster_input') as input_cluster:
            input_cluster.attr(rank='source', label='Inputs', style='invisible')
            for i in range(self.num_inputs):
                input_cluster.node(f"x{i}", label=f"x{i}", fillcolor='lightgrey', **node_attrs)

        prev_names = [f"x{i}" for i in range(self.num_inputs)]
        for l_idx, layer in enumerate(self._layers):
            is_last   = l_idx == len(self._layers) - 1
            fillcolor = 'white' if is_last else 'lightblue'
            names     = [f"L{l_idx}N{n_idx}" for n_idx in range(layer.num_outputs)]

            with dot.subgraph(name=f'cluster_layer_{l_idx}') as cluster:
                cluster.attr(rank='same', label=f'Layer {l_idx}', style='invisible')
                for name, neuron in zip(names, layer):
                    code = activation_codes.get(neuron.phi_type, "???")
                    cluster.node(name, label=f"{name}\\n{code}\\nb={neuron.bias:.2f}",
                                 fillcolor=fillcolor, **node_attrs)

            for name, neuron in zip(names, layer):
                for prev_name, weight in zip(prev_names, neuron.weights):
                    dot.edge(prev_name, name, label=f"w={weight:.2f}", fontsize='5',
                             penwidth='0.5', arrowsize='0.5', labelfloat='false')
            prev_names = names

        if view:
            dot.view(cleanup=True)

        return dot

    def __str__(self):
        return "\n\n".join(f"Layer {idx}:\n{layer}" for idx, layer in enumerate(self._layers))

    def __repr__(self):
        sizes = [self.num_inputs] + [layer.num_outputs for layer in self._layers]
        return f"NeuralNetwork(layer_sizes={sizes})"
