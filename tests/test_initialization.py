import math
import random

import pytest

from scratchnet import (
    ConfigurationError,
    KaimingInitialization,
    LeCunInitialization,
    ScalingInitialization,
    SparseInitialization,
    XavierInitialization,
)


@pytest.mark.parametrize("n", [1, 2, 5, 37, 100])
def test_xavier_weights_within_limit(n: int) -> None:
    limit = math.sqrt(6.0 / (n + 1))
    weights = XavierInitialization(seed=n).init(n)
    assert len(weights) == n
    assert all(-limit <= w <= limit for w in weights)


@pytest.mark.parametrize(
    "cls, scale",
    [
        (KaimingInitialization, 2.0),
        (LeCunInitialization, 1.0),
        (ScalingInitialization, 0.2),
    ],
)
def test_scaled_initializers_bounded_by_std(cls, scale: float) -> None:
    n = 16
    std = math.sqrt(scale / n)
    init = cls(seed=3)
    assert init.std_dev(n) == pytest.approx(std)
    weights = init.init(n)
    assert len(weights) == n
    assert all(-std <= w <= std for w in weights)


def test_scaled_initializer_matches_uniform_draw() -> None:
    weights = KaimingInitialization().init(4, random.Random(11))
    reference = random.Random(11)
    expected = [reference.uniform(-1.0, 1.0) * math.sqrt(2.0 / 4) for _ in range(4)]
    assert weights == pytest.approx(expected)


def test_normal_distribution_option() -> None:
    init = LeCunInitialization(distribution="normal", seed=5)
    weights = init.init(2000)
    mean = sum(weights) / len(weights)
    variance = sum((w - mean) ** 2 for w in weights) / len(weights)
    assert abs(mean) < 0.005
    assert variance == pytest.approx(1.0 / 2000, rel=0.15)
    with pytest.raises(ConfigurationError):
        LeCunInitialization(distribution="laplace")


def test_sparse_initialization_zeroes_about_half() -> None:
    init = SparseInitialization(seed=1)
    assert init.sparsity_level == 0.5
    weights = init.init(4000)
    zeros = sum(1 for w in weights if w == 0.0)
    assert 1700 < zeros < 2300
    assert all(-1.0 <= w <= 1.0 for w in weights)


def test_sparse_level_controls_density() -> None:
    weights = SparseInitialization(0.9, seed=2).init(2000)
    nonzero = sum(1 for w in weights if w != 0.0)
    assert nonzero > 1700


@pytest.mark.parametrize("level", [0.0, 1.0, -0.5, 2.0])
def test_sparse_rejects_invalid_level(level: float) -> None:
    with pytest.raises(ConfigurationError):
        SparseInitialization(level)


@pytest.mark.parametrize(
    "init",
    [XavierInitialization(), KaimingInitialization(), LeCunInitialization(), ScalingInitialization(), SparseInitialization()],
)
def test_input_size_must_be_positive(init) -> None:
    with pytest.raises(ConfigurationError):
        init.init(0)
    with pytest.raises(ConfigurationError):
        init.init(-3)


def test_explicit_rng_makes_draws_reproducible() -> None:
    first = XavierInitialization().init(8, random.Random(42))
    second = XavierInitialization().init(8, random.Random(42))
    assert first == second
    assert XavierInitialization(seed=7).init(8) == XavierInitialization(seed=7).init(8)
