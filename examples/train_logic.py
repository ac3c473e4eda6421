"""
Boolean Logic Problems for feedforward networks

This module trains small networks on two-input boolean functions:

    OR:  linearly separable, solvable by a single sigmoid neuron
    XOR: not linearly separable, needs a hidden layer

        Input (0, 0) → OR 0, XOR 0
        Input (0, 1) → OR 1, XOR 1
        Input (1, 0) → OR 1, XOR 1
        Input (1, 1) → OR 1, XOR 0

The error reported after each epoch is the mean squared error over the four cases.

Classes:
    LogicTrainer: Trainer that also prints the truth table of the trained network

Usage:
    config  = Config("examples/configs/config_xor.ini")
    network = NeuralNetwork.from_config(config)
    trainer = LogicTrainer(network, config)
    trainer.run(LOGIC_INPUTS, XOR_OUTPUTS)
"""

import numpy as np

from feedforward.run.config import Config
from feedforward.phenotype  import NeuralNetwork
from feedforward.run        import Trainer

LOGIC_INPUTS = np.array([[0.0, 0.0],
                         [0.0, 1.0],
                         [1.0, 0.0],
                         [1.0, 1.0]])

OR_OUTPUTS  = np.array([[0.0], [1.0], [1.0], [1.0]])
XOR_OUTPUTS = np.array([[0.0], [1.0], [1.0], [0.0]])

class LogicTrainer(Trainer):
    """
    Trainer for two-input boolean functions.

    Adds the truth table of the trained network to the final report.
    """

    def __init__(self, network: NeuralNetwork, config: Config, targets: np.ndarray,
                 suppress_output: bool = False, visualize: bool = False):
        super().__init__(network, config, suppress_output)
        self._targets   = targets
        self._visualize = visualize

    def _final_report(self):
        super()._final_report()

        s  = "\ninput         output   target  error\n"
        s += "------------------------------------\n"
        for inputs, target in zip(LOGIC_INPUTS, self._targets):
            output = self._network.predict(inputs)[0]
            s += f"{inputs.tolist()} -> {output:.4f}    {target[0]}   {abs(output - target[0]):.4f}\n"
        print(s)

        if self._visualize:
            try:
                self._network.visualize(view=True)
                print("Network visualization saved as 'Digraph.gv.pdf'")
            except Exception as e:
                print(f"Could not visualize network: {e}")

def train(problem: str, config: Config, visualize: bool = False) -> LogicTrainer:
    """
    Build a network from the configuration and train it on a boolean function.

    Parameters:
        problem:   'or' or 'xor'
        config:    Configuration parameters
        visualize: Whether to render the trained network

    Returns:
        The trainer, holding the trained network and its error history
    """
    targets = {'or': OR_OUTPUTS, 'xor': XOR_OUTPUTS}[problem]
    network = NeuralNetwork.from_config(config)
    trainer = LogicTrainer(network, config, targets, visualize=visualize)
    trainer.run(LOGIC_INPUTS, targets)
    return trainer
