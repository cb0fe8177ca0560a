"""Scalar activation functions and their derivatives.

Every activation exposes ``activate(x)`` and ``derivative(x)``. The argument
``derivative`` expects is not the same for every function: during training the
network always hands it the neuron's cached *activated output*, and each class
below states which quantity it interprets that argument as.

========================  ==========================================
Function                  ``derivative`` argument
========================  ==========================================
Sigmoid                   activated output ``y``; returns ``y(1-y)``
Tanh                      raw input ``x``; recomputes ``tanh(x)``
ReLU / LeakyReLU / ELU    raw input ``x``
Swish / BentIdentity      raw input ``x``
Linear                    ignored; always ``1``
========================  ==========================================
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
import math

from .exceptions import ConfigurationError


def _sigmoid(x: float) -> float:
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    # exp(-x) overflows for very negative x
    z = math.exp(x)
    return z / (1.0 + z)


class ActivationFunction(ABC):
    """Interface shared by all activation strategies."""

    @abstractmethod
    def activate(self, x: float) -> float:
        """Transform a neuron's weighted sum."""

    @abstractmethod
    def derivative(self, x: float) -> float:
        """Slope used to scale the back-propagated error."""

    def parameters(self) -> dict[str, float]:
        """Constructor arguments needed to rebuild this activation."""

        return {}


@dataclass(frozen=True)
class SigmoidActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return _sigmoid(x)

    def derivative(self, x: float) -> float:
        # x is already sigmoid(z)
        return x * (1.0 - x)


@dataclass(frozen=True)
class TanhActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return math.tanh(x)

    def derivative(self, x: float) -> float:
        tanh = math.tanh(x)
        return 1.0 - tanh * tanh


@dataclass(frozen=True)
class ReLUActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return max(0.0, x)

    def derivative(self, x: float) -> float:
        return 1.0 if x > 0 else 0.0


@dataclass(frozen=True)
class LeakyReLUActivation(ActivationFunction):
    """ReLU with a small slope ``alpha`` for negative inputs, ``0 <= alpha < 1``."""

    alpha: float = 0.01

    def __post_init__(self) -> None:
        if not 0.0 <= self.alpha < 1.0:
            raise ConfigurationError(f"Alpha must be between 0 and 1, got: {self.alpha}")

    def activate(self, x: float) -> float:
        return x if x > 0 else self.alpha * x

    def derivative(self, x: float) -> float:
        return 1.0 if x > 0 else self.alpha

    def parameters(self) -> dict[str, float]:
        return {"alpha": self.alpha}


@dataclass(frozen=True)
class ELUActivation(ActivationFunction):
    """Exponential linear unit with saturation level ``alpha > 0``."""

    alpha: float = 1.0

    def __post_init__(self) -> None:
        if not self.alpha > 0.0:
            raise ConfigurationError(f"Alpha must be positive, got: {self.alpha}")

    def activate(self, x: float) -> float:
        return x if x > 0 else self.alpha * (math.exp(x) - 1.0)

    def derivative(self, x: float) -> float:
        return 1.0 if x > 0 else self.alpha * math.exp(x)

    def parameters(self) -> dict[str, float]:
        return {"alpha": self.alpha}


@dataclass(frozen=True)
class SwishActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return x * _sigmoid(x)

    def derivative(self, x: float) -> float:
        sigmoid = _sigmoid(x)
        return sigmoid + x * sigmoid * (1.0 - sigmoid)


@dataclass(frozen=True)
class LinearActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return x

    def derivative(self, x: float) -> float:
        return 1.0


@dataclass(frozen=True)
class BentIdentityActivation(ActivationFunction):
    def activate(self, x: float) -> float:
        return (math.sqrt(x * x + 1.0) - 1.0) / 2.0 + x

    def derivative(self, x: float) -> float:
        return x / (2.0 * math.sqrt(x * x + 1.0)) + 1.0


__all__ = [
    "ActivationFunction",
    "BentIdentityActivation",
    "ELUActivation",
    "LeakyReLUActivation",
    "LinearActivation",
    "ReLUActivation",
    "SigmoidActivation",
    "SwishActivation",
    "TanhActivation",
]
