"""Precondition guards evaluated before the network mutates any state.

Each ``check_*`` function returns ``None`` when the precondition holds and a
:class:`Violation` describing the failure otherwise. Callers decide what to do
with the result; :func:`ensure` turns a violation into the matching typed
exception.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import TYPE_CHECKING, Optional, Sequence

from .exceptions import ERROR_TYPES, ErrorKind, NeuralNetworkError

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .activation import ActivationFunction
    from .initialization import InitializationFunction
    from .network import NeuralNetwork


@dataclass(frozen=True, slots=True)
class Violation:
    """A failed precondition."""

    kind: ErrorKind
    message: str

    def to_error(self) -> NeuralNetworkError:
        return ERROR_TYPES[self.kind](self.message)


def ensure(violation: Optional[Violation]) -> None:
    """Raise the typed error for ``violation`` if there is one."""

    if violation is not None:
        raise violation.to_error()


def _is_count(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def check_learning_rate(learning_rate: float) -> Optional[Violation]:
    if not isinstance(learning_rate, (int, float)) or isinstance(learning_rate, bool):
        return Violation(ErrorKind.CONFIGURATION, f"Learning rate must be a number, got: {learning_rate!r}")
    if math.isnan(learning_rate) or not 0.0 < learning_rate <= 1.0:
        return Violation(ErrorKind.CONFIGURATION, f"Learning rate must be in range (0,1], got: {learning_rate}")
    return None


def check_layer_config(
    neuron_count: int,
    input_size: int,
    activation: Optional["ActivationFunction"],
    initialization: Optional["InitializationFunction"],
) -> Optional[Violation]:
    if not _is_count(neuron_count) or neuron_count <= 0:
        return Violation(ErrorKind.CONFIGURATION, f"Neuron count must be positive, got: {neuron_count}")
    if not _is_count(input_size) or input_size <= 0:
        return Violation(ErrorKind.CONFIGURATION, f"Input size must be positive, got: {input_size}")
    if activation is None:
        return Violation(ErrorKind.CONFIGURATION, "Activation function cannot be None")
    if initialization is None:
        return Violation(ErrorKind.CONFIGURATION, "Initialization function cannot be None")
    return None


def check_network_state(network: "NeuralNetwork") -> Optional[Violation]:
    if not network.layers:
        return Violation(ErrorKind.VALIDATION, "Neural network has no layers configured")
    return None


def check_input_vector(vector: Optional[Sequence[float]], expected_size: int) -> Optional[Violation]:
    if vector is None:
        return Violation(ErrorKind.VALIDATION, "Input vector cannot be None")
    if len(vector) != expected_size:
        return Violation(
            ErrorKind.VALIDATION,
            f"Input vector size mismatch. Expected: {expected_size}, Got: {len(vector)}",
        )
    return None


def check_training_data(
    inputs: Optional[Sequence[float]],
    targets: Optional[Sequence[float]],
    network: "NeuralNetwork",
) -> Optional[Violation]:
    if inputs is None or targets is None:
        return Violation(ErrorKind.VALIDATION, "Training data cannot be None")
    if len(inputs) != network.input_size:
        return Violation(
            ErrorKind.VALIDATION,
            f"Input size mismatch. Expected: {network.input_size}, Got: {len(inputs)}",
        )
    if len(targets) != network.output_size:
        return Violation(
            ErrorKind.VALIDATION,
            f"Target size mismatch. Expected: {network.output_size}, Got: {len(targets)}",
        )
    return None


__all__ = [
    "Violation",
    "check_input_vector",
    "check_layer_config",
    "check_learning_rate",
    "check_network_state",
    "check_training_data",
    "ensure",
]
