"""Weight initialisation strategies.

An initialiser turns a fan-in into a fresh weight vector. Randomness always
comes from an explicit :class:`random.Random`: either the one passed to
:meth:`InitializationFunction.init` (the network passes its own seeded
generator) or the initialiser's private generator, seeded through ``seed``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
import math
import random
from typing import Optional

from .exceptions import ConfigurationError

Vector = list[float]


class InitializationFunction(ABC):
    """Interface shared by all initialisation strategies."""

    def __init__(self, *, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self.rng = rng if rng is not None else random.Random(seed)

    def init(self, input_size: int, rng: Optional[random.Random] = None) -> Vector:
        """Return ``input_size`` freshly drawn weights."""

        if not isinstance(input_size, int) or isinstance(input_size, bool) or input_size < 1:
            raise ConfigurationError(f"Input size must be at least 1, got: {input_size}")
        return self._generate(input_size, rng if rng is not None else self.rng)

    @abstractmethod
    def _generate(self, input_size: int, rng: random.Random) -> Vector:
        ...

    def parameters(self) -> dict[str, object]:
        """Constructor arguments needed to rebuild this initialiser."""

        return {}

    def __repr__(self) -> str:
        args = ", ".join(f"{key}={value!r}" for key, value in self.parameters().items())
        return f"{type(self).__name__}({args})"


class XavierInitialization(InitializationFunction):
    """Uniform weights in ``[-limit, limit]`` with ``limit = sqrt(6 / (n + 1))``."""

    def _generate(self, input_size: int, rng: random.Random) -> Vector:
        limit = math.sqrt(6.0 / (input_size + 1))
        return [rng.uniform(-limit, limit) for _ in range(input_size)]


class _ScaledInitialization(InitializationFunction):
    """Weights scaled by ``sqrt(VARIANCE_SCALE / n)``.

    Parameters
    ----------
    distribution:
        ``"uniform"`` (default) scales a uniform ``[-1, 1]`` draw by the
        standard deviation, which is only an approximation of a normal
        distribution with that deviation. ``"normal"`` draws from a true
        Gaussian instead.
    """

    VARIANCE_SCALE = 1.0
    DISTRIBUTIONS = ("uniform", "normal")

    def __init__(
        self,
        distribution: str = "uniform",
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if distribution not in self.DISTRIBUTIONS:
            raise ConfigurationError(
                f"distribution must be one of {', '.join(self.DISTRIBUTIONS)}, got: {distribution!r}"
            )
        super().__init__(seed=seed, rng=rng)
        self.distribution = distribution

    def std_dev(self, input_size: int) -> float:
        return math.sqrt(self.VARIANCE_SCALE / input_size)

    def _generate(self, input_size: int, rng: random.Random) -> Vector:
        std = self.std_dev(input_size)
        if self.distribution == "normal":
            return [rng.gauss(0.0, std) for _ in range(input_size)]
        return [rng.uniform(-1.0, 1.0) * std for _ in range(input_size)]

    def parameters(self) -> dict[str, object]:
        return {"distribution": self.distribution}


class KaimingInitialization(_ScaledInitialization):
    """He initialisation, ``std = sqrt(2 / n)``."""

    VARIANCE_SCALE = 2.0


class LeCunInitialization(_ScaledInitialization):
    """``std = sqrt(1 / n)``."""

    VARIANCE_SCALE = 1.0


class ScalingInitialization(_ScaledInitialization):
    """``std = sqrt(SCALE / n)`` with a fixed ``SCALE`` of 0.2."""

    SCALE = 0.2
    VARIANCE_SCALE = SCALE


class SparseInitialization(InitializationFunction):
    """Keep each weight with probability ``sparsity_level``, zero it otherwise.

    Kept weights are uniform in ``[-1, 1]``.
    """

    DEFAULT_SPARSITY_LEVEL = 0.5

    def __init__(
        self,
        sparsity_level: float = DEFAULT_SPARSITY_LEVEL,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if not 0.0 < sparsity_level < 1.0:
            raise ConfigurationError(f"Sparsity level must be between 0 and 1, got: {sparsity_level}")
        super().__init__(seed=seed, rng=rng)
        self.sparsity_level = float(sparsity_level)

    def _generate(self, input_size: int, rng: random.Random) -> Vector:
        weights = []
        for _ in range(input_size):
            if rng.random() < self.sparsity_level:
                weights.append(rng.uniform(-1.0, 1.0))
            else:
                weights.append(0.0)
        return weights

    def parameters(self) -> dict[str, object]:
        return {"sparsity_level": self.sparsity_level}


__all__ = [
    "InitializationFunction",
    "KaimingInitialization",
    "LeCunInitialization",
    "ScalingInitialization",
    "SparseInitialization",
    "XavierInitialization",
]
