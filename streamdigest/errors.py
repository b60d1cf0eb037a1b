from __future__ import annotations


class StateError(ValueError):
    """A serialized digest state could not be restored."""


class InvalidStateIdentifier(StateError):
    """The state blob was produced by a different algorithm or variant."""


class InvalidStateSize(StateError):
    """The state blob does not have the fixed length of its algorithm."""


class PaddingInvariantError(RuntimeError):
    """Finalization left a partial block behind.

    Only a defect in the padding arithmetic can raise this; no input can.
    """


class UnknownAlgorithm(KeyError):
    """No algorithm is registered under the requested name."""
