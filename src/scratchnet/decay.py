"""Learning-rate schedules consulted by the training loop once per epoch."""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math

from .exceptions import ConfigurationError, ValidationError


class DecayFunction(ABC):
    """Maps a zero-indexed epoch to a learning rate."""

    def get_learning_rate(self, epoch: int) -> float:
        if epoch < 0:
            raise ValidationError(f"epoch must be non-negative, got: {epoch}")
        return self._rate(epoch)

    @abstractmethod
    def _rate(self, epoch: int) -> float:
        ...

    def as_list(self, epochs: int) -> list[float]:
        """Materialise the first ``epochs`` rates for diagnostics or plotting."""

        return [self.get_learning_rate(epoch) for epoch in range(epochs)]


@dataclass(frozen=True, slots=True)
class ExponentialDecay(DecayFunction):
    """``r0 * exp(-decay_rate * epoch)``."""

    initial_learning_rate: float
    decay_rate: float

    def __post_init__(self) -> None:
        if self.initial_learning_rate < 0:
            raise ConfigurationError("Initial learning rate must be non-negative")
        if self.decay_rate < 0:
            raise ConfigurationError("Decay rate must be non-negative")

    def _rate(self, epoch: int) -> float:
        return self.initial_learning_rate * math.exp(-self.decay_rate * epoch)


@dataclass(frozen=True, slots=True)
class InverseTimeDecay(DecayFunction):
    """``r0 / (1 + decay_rate * epoch)``."""

    initial_learning_rate: float
    decay_rate: float

    def __post_init__(self) -> None:
        if self.initial_learning_rate < 0:
            raise ConfigurationError("Initial learning rate must be non-negative")
        if self.decay_rate < 0:
            raise ConfigurationError("Decay rate must be non-negative")

    def _rate(self, epoch: int) -> float:
        return self.initial_learning_rate / (1.0 + self.decay_rate * epoch)


@dataclass(frozen=True, slots=True)
class StepDecay(DecayFunction):
    """``r0 * decay_factor ** (epoch / drop_every)``.

    The exponent is not floored, so the rate shrinks smoothly and reaches each
    multiple of ``decay_factor`` exactly at multiples of ``drop_every``.
    """

    initial_learning_rate: float
    decay_factor: float
    drop_every: int

    def __post_init__(self) -> None:
        if self.initial_learning_rate <= 0:
            raise ConfigurationError("Initial learning rate must be positive")
        if not 0.0 < self.decay_factor < 1.0:
            raise ConfigurationError("Decay factor must be between 0 and 1")
        if self.drop_every <= 0:
            raise ConfigurationError("Drop interval must be positive")

    def _rate(self, epoch: int) -> float:
        return self.initial_learning_rate * math.pow(self.decay_factor, epoch / self.drop_every)


@dataclass(frozen=True, slots=True)
class PolynomialDecay(DecayFunction):
    """Polynomial ramp from ``initial_learning_rate`` down to ``end_learning_rate``.

    Parameters
    ----------
    initial_learning_rate:
        Rate at epoch ``0``.
    end_learning_rate:
        Floor reached at ``max_epochs`` and held afterwards. Must not exceed
        the initial rate.
    max_epochs:
        Length of the ramp.
    power:
        Curvature of the ramp; ``1`` is linear.
    """

    initial_learning_rate: float
    end_learning_rate: float
    max_epochs: int
    power: float = 1.0

    def __post_init__(self) -> None:
        if self.initial_learning_rate < 0:
            raise ConfigurationError("Initial learning rate must be non-negative")
        if self.end_learning_rate < 0:
            raise ConfigurationError("End learning rate must be non-negative")
        if self.end_learning_rate > self.initial_learning_rate:
            raise ConfigurationError("End learning rate must be less than initial rate")
        if self.max_epochs <= 0:
            raise ConfigurationError("Max epochs must be positive")
        if self.power <= 0:
            raise ConfigurationError("Power must be positive")

    def _rate(self, epoch: int) -> float:
        if epoch >= self.max_epochs:
            return self.end_learning_rate
        progress = 1.0 - epoch / self.max_epochs
        return (self.initial_learning_rate - self.end_learning_rate) * math.pow(progress, self.power) + self.end_learning_rate


__all__ = [
    "DecayFunction",
    "ExponentialDecay",
    "InverseTimeDecay",
    "PolynomialDecay",
    "StepDecay",
]
