"""
Link Module

A Link is the value source feeding a single neuron input. It is one of:
    + unset:     contributes nothing to the neuron's weighted sum
    + signal:    a literal scalar value
    + reference: the current output of another (upstream) neuron

Reference links hold a weak reference to their neuron; they never keep
the neuron alive and never modify it.

Classes:
    Link: Typed value source for one neuron input
"""

import weakref
from numbers import Real
from typing  import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from feedforward.phenotype.neuron import Neuron

class Link:
    """
    A typed value source for a single neuron input.

    Public Properties:
        is_set:       Whether the link carries a value (signal or reference)
        is_reference: Whether the link reads another neuron's output

    Public Methods:
        get(default):        Current value, or 'default' if the link is unset
        signal(value):       Create a literal-valued link
        from_neuron(neuron): Create a link reading a neuron's current output
        coerce(source):      Convert a Link, number or None into a Link
    """

    __slots__ = ("_signal", "_neuron_ref")

    def __init__(self):
        """Create an unset link."""
        self._signal    : Optional[float]            = None
        self._neuron_ref: Optional[weakref.ref]      = None

    @classmethod
    def signal(cls, value: float) -> "Link":
        link = cls()
        link._signal = float(value)
        return link

    @classmethod
    def from_neuron(cls, neuron: "Neuron") -> "Link":
        link = cls()
        link._neuron_ref = weakref.ref(neuron)
        return link

    @classmethod
    def coerce(cls, source) -> "Link":
        """
        Convert 'source' into a Link.

        Parameters:
            source: a Link (returned as-is), a real number (literal signal)
                    or None (unset link)
        """
        if isinstance(source, Link):
            return source
        if source is None:
            return cls()
        if isinstance(source, Real):
            return cls.signal(source)
        raise TypeError(f"Cannot build a Link from {type(source).__name__}")

    @property
    def is_set(self) -> bool:
        return self._signal is not None or self._neuron_ref is not None

    @property
    def is_reference(self) -> bool:
        return self._neuron_ref is not None

    def get(self, default: Optional[float] = None) -> Optional[float]:
        """
        Read the value carried by the link.

        Parameters:
            default: value returned when the link is unset

        Returns:
            The literal signal, the referenced neuron's current output
            (0.0 before its first forward pass), or 'default' if unset

        Raises:
            ReferenceError: If the referenced neuron no longer exists
        """
        if self._neuron_ref is not None:
            neuron = self._neuron_ref()
            if neuron is None:
                raise ReferenceError("Link refers to a neuron that no longer exists")
            return neuron.y
        if self._signal is not None:
            return self._signal
        return default

    def __repr__(self):
        if self._neuron_ref is not None:
            return f"Link(neuron={self._neuron_ref()!r})"
        if self._signal is not None:
            return f"Link(signal={self._signal})"
        return "Link()"
