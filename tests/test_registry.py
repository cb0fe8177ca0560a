import pytest

from scratchnet import (
    ConfigurationError,
    ELUActivation,
    KaimingInitialization,
    LeakyReLUActivation,
    SigmoidActivation,
    SparseInitialization,
    TanhActivation,
    XavierInitialization,
)
from scratchnet.activation import ActivationFunction
from scratchnet.registry import (
    ACTIVATIONS,
    INITIALIZATIONS,
    activation_from_tag,
    initialization_from_tag,
    register_activation,
    strategy_tag,
)


def test_all_strategies_are_registered() -> None:
    assert len(ACTIVATIONS) >= 8
    assert len(INITIALIZATIONS) >= 5
    for name, cls in ACTIVATIONS.items():
        assert isinstance(activation_from_tag(name), cls)
    for name, cls in INITIALIZATIONS.items():
        assert isinstance(initialization_from_tag(name), cls)


def test_default_strategies_use_bare_class_name() -> None:
    assert strategy_tag(SigmoidActivation()) == "SigmoidActivation"
    assert strategy_tag(LeakyReLUActivation()) == "LeakyReLUActivation"
    assert strategy_tag(XavierInitialization(seed=3)) == "XavierInitialization"
    assert strategy_tag(SparseInitialization()) == "SparseInitialization"


def test_parameters_survive_a_tag_round_trip() -> None:
    tag = strategy_tag(LeakyReLUActivation(0.2))
    assert tag == "LeakyReLUActivation(alpha=0.2)"
    assert activation_from_tag(tag) == LeakyReLUActivation(0.2)
    assert activation_from_tag(strategy_tag(ELUActivation(0.5))) == ELUActivation(0.5)

    sparse = initialization_from_tag(strategy_tag(SparseInitialization(0.25)))
    assert isinstance(sparse, SparseInitialization)
    assert sparse.sparsity_level == 0.25

    kaiming = initialization_from_tag(strategy_tag(KaimingInitialization(distribution="normal")))
    assert kaiming.distribution == "normal"


@pytest.mark.parametrize("tag", ["SoftmaxActivation", "", "Sigmoid Activation", "LeakyReLUActivation(alpha)"])
def test_bad_activation_tags(tag: str) -> None:
    with pytest.raises(ConfigurationError):
        activation_from_tag(tag)


def test_unknown_keyword_and_invalid_values() -> None:
    with pytest.raises(ConfigurationError):
        activation_from_tag("TanhActivation(alpha=0.1)")
    with pytest.raises(ConfigurationError):
        activation_from_tag("LeakyReLUActivation(alpha=2.0)")
    with pytest.raises(ConfigurationError):
        initialization_from_tag("GlorotInitialization")


def test_register_custom_activation() -> None:
    class SoftsignActivation(ActivationFunction):
        def activate(self, x: float) -> float:
            return x / (1.0 + abs(x))

        def derivative(self, x: float) -> float:
            return 1.0 / (1.0 + abs(x)) ** 2

    register_activation(SoftsignActivation)
    try:
        assert isinstance(activation_from_tag("SoftsignActivation"), SoftsignActivation)
    finally:
        ACTIVATIONS.pop("SoftsignActivation")
    assert isinstance(activation_from_tag("TanhActivation"), TanhActivation)


def test_tag_for_strategy_without_default_constructor() -> None:
    class ScaledLinearActivation(ActivationFunction):
        def __init__(self, slope: float) -> None:
            self.slope = slope

        def activate(self, x: float) -> float:
            return self.slope * x

        def derivative(self, x: float) -> float:
            return self.slope

        def parameters(self) -> dict[str, float]:
            return {"slope": self.slope}

    register_activation(ScaledLinearActivation)
    try:
        tag = strategy_tag(ScaledLinearActivation(3.0))
        assert tag == "ScaledLinearActivation(slope=3.0)"
        assert activation_from_tag(tag).slope == 3.0
    finally:
        ACTIVATIONS.pop("ScaledLinearActivation")
