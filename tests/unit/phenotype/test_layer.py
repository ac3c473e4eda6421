"""
Unit tests for the NeuralLayer class.
"""

import pytest
import numpy as np

from feedforward.activations      import PhiType, phi
from feedforward.phenotype.layer  import NeuralLayer
from feedforward.phenotype.link   import Link
from feedforward.phenotype.neuron import Neuron


@pytest.fixture
def tanh_layer():
    """Layer of 3 tanh neurons with 2 inputs, inputs bound to [0.5, -1.0]."""
    layer = NeuralLayer(weights=[[0.2, -0.4], [1.0, 0.5], [-0.3, 0.9]],
                        biases=[0.1, -0.2, 0.0],
                        phi_type=PhiType.TANH)
    layer.set_inputs([0.5, -1.0])
    return layer


class TestLayerInit:
    """Test NeuralLayer construction."""

    def test_dimensions(self, tanh_layer):
        """Test input and output widths."""
        assert tanh_layer.num_inputs == 2
        assert tanh_layer.num_outputs == 3
        assert len(tanh_layer) == 3

    def test_neurons_share_activation(self, tanh_layer):
        """Test that all neurons use the layer activation."""
        assert tanh_layer.phi_type is PhiType.TANH
        assert all(neuron.phi_type is PhiType.TANH for neuron in tanh_layer)

    def test_neuron_parameters(self, tanh_layer):
        """Test that each neuron receives its own row of weights and its bias."""
        np.testing.assert_array_equal(tanh_layer[1].weights, [1.0, 0.5])
        assert tanh_layer[1].bias == -0.2
        assert isinstance(tanh_layer[0], Neuron)

    def test_ragged_weights_raise(self):
        """Test that rows of different lengths are rejected."""
        with pytest.raises(ValueError, match="same number of weights"):
            NeuralLayer([[1.0, 2.0], [1.0]], [0.0, 0.0], PhiType.LINEAR)

    def test_bias_count_mismatch_raises(self):
        """Test that there must be one bias per neuron."""
        with pytest.raises(ValueError, match="Expected 2 biases, got 1"):
            NeuralLayer([[1.0], [2.0]], [0.0], PhiType.LINEAR)

    def test_empty_layer_raises(self):
        """Test that a layer needs at least one neuron."""
        with pytest.raises(ValueError, match="at least one neuron"):
            NeuralLayer([], [], PhiType.LINEAR)


class TestLayerForward:
    """Test set_inputs(), forward() and output()."""

    def test_forward_values(self, tanh_layer):
        """Test that every neuron computes tanh(w.x + b)."""
        tanh_layer.forward()
        expected = [phi(0.2 * 0.5 - 0.4 * -1.0 + 0.1, PhiType.TANH),
                    phi(1.0 * 0.5 + 0.5 * -1.0 - 0.2, PhiType.TANH),
                    phi(-0.3 * 0.5 + 0.9 * -1.0 + 0.0, PhiType.TANH)]
        np.testing.assert_allclose(tanh_layer.output_values(), expected)

    def test_set_inputs_wrong_length_raises(self, tanh_layer):
        """Test that the number of links must match the layer's input width."""
        with pytest.raises(ValueError, match="Expected 2 inputs, got 1"):
            tanh_layer.set_inputs([1.0])

    def test_set_inputs_shared_by_all_neurons(self):
        """Test that an unset input is excluded by every neuron."""
        layer = NeuralLayer([[1.0, 10.0], [2.0, 20.0]], [0.0, 0.0], PhiType.LINEAR)
        layer.set_inputs([1.0, None])
        layer.forward()
        np.testing.assert_allclose(layer.output_values(), [1.0, 2.0])

    def test_output_links_reference_neurons(self, tanh_layer):
        """Test that output() gives one reference link per neuron, tracking its output."""
        links = tanh_layer.output()
        assert len(links) == 3
        assert all(isinstance(link, Link) and link.is_reference for link in links)

        tanh_layer.forward()
        np.testing.assert_allclose([link.get() for link in links], tanh_layer.output_values())

    def test_set_phi_params(self):
        """Test that shape parameters reach every neuron."""
        layer = NeuralLayer([[1.0], [1.0]], [0.0, 0.0], PhiType.SELU)
        layer.set_phi_params(1.0, 1.0, 3.0)
        assert all(neuron.phi_params == (1.0, 1.0, 3.0) for neuron in layer)

    def test_parallel_forward_matches_serial(self, tanh_layer):
        """Test that running the neurons on threads gives the same outputs."""
        serial = NeuralLayer([[0.2, -0.4], [1.0, 0.5], [-0.3, 0.9]], [0.1, -0.2, 0.0], PhiType.TANH)
        serial.set_inputs([0.5, -1.0])
        serial.forward()

        tanh_layer.forward(num_jobs=2)
        np.testing.assert_array_equal(tanh_layer.output_values(), serial.output_values())


class TestLayerBackward:
    """Test backward() and train()."""

    def test_gradient_matrix_shape(self, tanh_layer):
        """Test that the gradient matrix is (outputs x inputs)."""
        grad = tanh_layer.train([0.0, 0.5, -0.5])
        assert grad.shape == (3, 2)

    def test_rows_are_neuron_gradients(self):
        """Test that row i is the gradient returned by neuron i for target i."""
        layer = NeuralLayer([[0.5, 1.0], [-1.0, 0.25]], [0.0, 0.5], PhiType.LINEAR)
        layer.set_inputs([2.0, 4.0])
        grad = layer.train([1.0, 0.0], eta=0.1, mu=0.0)

        # y0 = 5.0 -> error 4.0; y1 = -0.5 -> error -0.5
        np.testing.assert_allclose(grad, [[8.0, 16.0], [-1.0, -2.0]])

    def test_target_length_mismatch_raises_before_update(self, tanh_layer):
        """Test that a wrong number of targets is rejected without touching the neurons."""
        tanh_layer.forward()
        weights_before = [neuron.weights for neuron in tanh_layer]

        with pytest.raises(ValueError, match="Expected 3 targets, got 2"):
            tanh_layer.backward([0.0, 0.0])

        for neuron, weights in zip(tanh_layer, weights_before):
            np.testing.assert_array_equal(neuron.weights, weights)

    def test_parallel_backward_matches_serial(self, tanh_layer):
        """Test that threaded backward gives the same gradients and updates."""
        serial = NeuralLayer([[0.2, -0.4], [1.0, 0.5], [-0.3, 0.9]], [0.1, -0.2, 0.0], PhiType.TANH)
        serial.set_inputs([0.5, -1.0])

        g_serial   = serial.train([0.3, 0.2, 0.1], eta=0.2, mu=0.5)
        g_parallel = tanh_layer.train([0.3, 0.2, 0.1], eta=0.2, mu=0.5, num_jobs=2)

        np.testing.assert_array_equal(g_parallel, g_serial)
        for n_par, n_ser in zip(tanh_layer, serial):
            np.testing.assert_array_equal(n_par.weights, n_ser.weights)

    def test_update_aliases(self, tanh_layer):
        """Test update_forward()/update_backward() aliases."""
        tanh_layer.update_forward()
        assert tanh_layer.update_backward([0.0, 0.0, 0.0]).shape == (3, 2)


class TestLayerRepresentation:
    """Test string representations."""

    def test_repr(self, tanh_layer):
        assert repr(tanh_layer) == "NeuralLayer(inputs=2, outputs=3, phi_type=PhiType.TANH)"

    def test_str_lists_neurons(self, tanh_layer):
        assert len(str(tanh_layer).splitlines()) == 3
