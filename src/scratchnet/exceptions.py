"""Error hierarchy raised by the network engine."""
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Category of a failure, shared by guard results and exceptions."""

    CONFIGURATION = "configuration"
    VALIDATION = "validation"
    COMPUTATION = "computation"
    PERSISTENCE = "persistence"


class NeuralNetworkError(Exception):
    """Base class for every error raised by :mod:`scratchnet`."""

    kind: ErrorKind


class ConfigurationError(NeuralNetworkError, ValueError):
    """Invalid layer sizes, missing strategies or out-of-range parameters."""

    kind = ErrorKind.CONFIGURATION


class ValidationError(NeuralNetworkError, ValueError):
    """Input or target vectors that do not fit the network, or an empty network."""

    kind = ErrorKind.VALIDATION


class ComputationError(NeuralNetworkError, RuntimeError):
    """Unexpected failure during a forward or backward pass.

    ``layer_index`` and ``neuron_index`` identify where the failure happened
    when that is known.
    """

    kind = ErrorKind.COMPUTATION

    def __init__(
        self,
        message: str,
        *,
        layer_index: Optional[int] = None,
        neuron_index: Optional[int] = None,
    ) -> None:
        self.reason = message
        location = []
        if layer_index is not None:
            location.append(f"layer {layer_index}")
        if neuron_index is not None:
            location.append(f"neuron {neuron_index}")
        if location:
            message = f"{message} ({', '.join(location)})"
        super().__init__(message)
        self.layer_index = layer_index
        self.neuron_index = neuron_index


class PersistenceError(NeuralNetworkError, ValueError):
    """A saved model could not be read back."""

    kind = ErrorKind.PERSISTENCE


ERROR_TYPES: dict[ErrorKind, type[NeuralNetworkError]] = {
    ErrorKind.CONFIGURATION: ConfigurationError,
    ErrorKind.VALIDATION: ValidationError,
    ErrorKind.COMPUTATION: ComputationError,
    ErrorKind.PERSISTENCE: PersistenceError,
}


__all__ = [
    "ComputationError",
    "ConfigurationError",
    "ERROR_TYPES",
    "ErrorKind",
    "NeuralNetworkError",
    "PersistenceError",
    "ValidationError",
]
