"""
Unit tests for the Link class.
"""

import gc
import pytest

from feedforward.activations      import PhiType
from feedforward.phenotype.link   import Link
from feedforward.phenotype.neuron import Neuron


@pytest.fixture
def identity_neuron():
    """Single-input identity neuron with weight 2 and bias 1."""
    neuron = Neuron([2.0], 1.0, PhiType.LINEAR)
    neuron.set_inputs([3.0])
    return neuron


class TestUnsetLink:
    """Test links carrying no value."""

    def test_default_is_unset(self):
        """Test that Link() is unset."""
        link = Link()
        assert not link.is_set
        assert not link.is_reference

    def test_get_returns_none(self):
        """Test that reading an unset link gives None."""
        assert Link().get() is None

    def test_get_returns_default(self):
        """Test that reading an unset link gives the supplied default."""
        assert Link().get(default=0.0) == 0.0


class TestSignalLink:
    """Test links carrying a literal value."""

    def test_signal_value(self):
        """Test that a signal link returns its value."""
        link = Link.signal(0.25)
        assert link.is_set
        assert not link.is_reference
        assert link.get() == 0.25

    def test_zero_signal_is_set(self):
        """Test that a zero signal is still a set link."""
        link = Link.signal(0.0)
        assert link.is_set
        assert link.get(default=5.0) == 0.0

    def test_signal_converted_to_float(self):
        """Test that integer signals are stored as floats."""
        assert isinstance(Link.signal(3).get(), float)


class TestReferenceLink:
    """Test links reading another neuron's output."""

    def test_reads_zero_before_forward(self, identity_neuron):
        """Test that a reference reads 0.0 before the neuron's first forward pass."""
        link = identity_neuron.output()
        assert link.is_set
        assert link.is_reference
        assert link.get() == 0.0

    def test_tracks_neuron_output(self, identity_neuron):
        """Test that a reference reads the neuron's current output."""
        link = Link.from_neuron(identity_neuron)
        identity_neuron.forward()
        assert link.get() == pytest.approx(7.0)

        identity_neuron.set_inputs([-1.0])
        identity_neuron.forward()
        assert link.get() == pytest.approx(-1.0)

    def test_does_not_keep_neuron_alive(self):
        """Test that a reference link does not own its neuron."""
        neuron = Neuron([1.0], 0.0, PhiType.LINEAR)
        link = neuron.output()
        del neuron
        gc.collect()
        with pytest.raises(ReferenceError):
            link.get()


class TestCoerce:
    """Test Link.coerce."""

    def test_link_returned_as_is(self):
        """Test that an existing Link is returned unchanged."""
        link = Link.signal(1.0)
        assert Link.coerce(link) is link

    def test_none_becomes_unset(self):
        """Test that None becomes an unset link."""
        assert not Link.coerce(None).is_set

    def test_number_becomes_signal(self):
        """Test that numbers become signal links."""
        assert Link.coerce(2).get() == 2.0
        assert Link.coerce(-0.5).get() == -0.5

    def test_invalid_source_raises(self):
        """Test that other types are rejected."""
        with pytest.raises(TypeError):
            Link.coerce("1.0")


class TestRepr:
    """Test string representations."""

    def test_repr_unset(self):
        assert repr(Link()) == "Link()"

    def test_repr_signal(self):
        assert repr(Link.signal(1.5)) == "Link(signal=1.5)"
