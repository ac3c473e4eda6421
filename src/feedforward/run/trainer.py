"""
Trainer Module

This module drives the example-by-example training of a NeuralNetwork
over an in-memory set of (input, target) pairs.

Classes:
    Trainer: Epoch-based training loop with optional annealing noise
"""

import numpy as np
from typing import Sequence

from feedforward.phenotype  import NeuralNetwork
from feedforward.run.config import Config

class Trainer:
    """
    Train a NeuralNetwork on a fixed set of examples.

    Each epoch visits every example once (in random order if 'shuffle' is set):
    the network is evaluated on the example and then updated with the
    configured learning rate and momentum. When 'annealing_strength' is
    positive, the perturbation term 'r' of each update is drawn from
    N(0, strength), and the strength is multiplied by 'annealing_decay'
    after every epoch.

    Training stops after 'max_epochs' epochs, or as soon as the mean squared
    error of an epoch is at or below 'error_threshold'.

    Public Attributes:
        failed: True unless the error threshold was reached
        history: Mean squared error of each epoch

    Public Methods:
        run(inputs, targets): Train the network, return the error history

    Subclasses can override:
        _report_progress(): Display progress every 'report_interval' epochs
        _final_report():    Display the final results
    """

    def __init__(self, network: NeuralNetwork, config: Config, suppress_output: bool = False):
        """
        Parameters:
            network:         The network to train (updated in place)
            config:          Configuration parameters ([TRAINING] section)
            suppress_output: If True, suppress progress and final reports
        """
        self._network        : NeuralNetwork = network
        self._config         : Config        = config
        self._suppress_output: bool          = suppress_output
        self._epoch_counter  : int           = 0
        self._annealing      : float         = config.annealing_strength
        self.history         : list[float]   = []
        self.failed          : bool          = True

    @property
    def network(self) -> NeuralNetwork:
        return self._network

    def run(self, inputs: Sequence[Sequence[float]], targets: Sequence[Sequence[float]]) -> list[float]:
        """
        Train the network.

        Parameters:
            inputs:  One input vector per example
            targets: One target vector per example

        Returns:
            The mean squared error of each epoch
        """
        inputs  = np.array(inputs,  dtype=np.float64)
        targets = np.array(targets, dtype=np.float64)

        if inputs.ndim != 2 or targets.ndim != 2:
            raise ValueError("Inputs and targets must be 2D (one row per example)")
        if len(inputs) != len(targets):
            raise ValueError(f"Got {len(inputs)} inputs but {len(targets)} targets")
        if inputs.shape[1] != self._network.num_inputs:
            raise ValueError(f"Expected {self._network.num_inputs} inputs, got {inputs.shape[1]}")
        if targets.shape[1] != self._network.num_outputs:
            raise ValueError(f"Expected {self._network.num_outputs} targets, got {targets.shape[1]}")

        self._reset()

        while not self._terminate():
            self._epoch_counter += 1
            self.history.append(self._train_epoch(inputs, targets))
            self._annealing *= self._config.annealing_decay

            if not self._suppress_output and self._epoch_counter % self._config.report_interval == 0:
                self._report_progress()

        if not self._suppress_output:
            self._final_report()

        return self.history

    def _reset(self):
        self._epoch_counter = 0
        self._annealing     = self._config.annealing_strength
        self.history        = []
        self.failed         = True

    def _train_epoch(self, inputs: np.ndarray, targets: np.ndarray) -> float:
        """
        Train on every example once.

        Returns:
            The mean squared error of the outputs computed during the epoch
            (each measured before the update of its example)
        """
        order = np.random.permutation(len(inputs)) if self._config.shuffle else range(len(inputs))
        cfg   = self._config

        sq_errors = []
        for idx in order:
            r = np.random.normal(0.0, self._annealing) if self._annealing > 0 else 0.0

            outputs = self._network.predict(inputs[idx], cfg.num_jobs)
            self._network.backward(targets[idx], cfg.learning_rate, cfg.momentum, r, cfg.num_jobs)
            sq_errors.append(np.mean((outputs - targets[idx]) ** 2))

        return float(np.mean(sq_errors))

    def _terminate(self) -> bool:
        """
        Determine whether training should stop.

        Returns:
            bool: True if training should stop, False otherwise
        """
        terminate = self._epoch_counter >= self._config.max_epochs

        threshold = self._config.error_threshold
        if threshold is not None and self.history:
            success = self.history[-1] <= threshold
            terminate = terminate or success
            if terminate:
                self.failed = not success

        return terminate

    def _report_progress(self):
        """
        Print a report describing the current epoch.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        s  = f"EPOCH {self._epoch_counter:05d}  "
        s += f"mse = {self.history[-1]:.6f}  "
        s += f"annealing = {self._annealing:.4f}"
        print(s)

    def _final_report(self):
        """
        Print the final results.

        This method is suppressed by setting 'self._suppress_output' to 'True'.
        """
        s  = "===============\n"
        s += f"epochs     = {self._epoch_counter}\n"
        s += f"final mse  = {self.history[-1]:.6f}\n" if self.history else "final mse  = n/a\n"
        s += f"converged  = {not self.failed}\n"
        s += '\n'
        s += str(self._network)
        print(s)
