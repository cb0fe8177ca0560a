import copy
import math

import numpy as np
import pytest

from scratchnet import (
    ComputationError,
    ConfigurationError,
    LinearActivation,
    NeuralNetwork,
    Neuron,
    SigmoidActivation,
    TanhActivation,
    ValidationError,
    XavierInitialization,
)


def make_network(sizes, activation=SigmoidActivation, learning_rate=0.5, seed=0) -> NeuralNetwork:
    network = NeuralNetwork(learning_rate, seed=seed)
    for size in sizes:
        network.add_layer(size, activation(), XavierInitialization())
    return network


def snapshot(network: NeuralNetwork):
    return [[(list(n.weights), n.bias) for n in layer.neurons] for layer in network.layers]


def test_single_step_linear_update_matches_closed_form() -> None:
    network = NeuralNetwork(0.1)
    network.add_layer(1, LinearActivation(), XavierInitialization())
    neuron = network.layers[0].neurons[0]
    neuron.weights = [0.5]
    neuron.bias = 0.0

    assert network.predict([1.0]) == [pytest.approx(0.5)]
    network.train([1.0], [1.0])

    assert neuron.delta == pytest.approx(0.5)
    assert neuron.weights == [pytest.approx(0.55)]
    assert neuron.bias == pytest.approx(0.05)


def test_hidden_error_uses_updated_downstream_weights() -> None:
    network = NeuralNetwork(0.1)
    network.add_layer(1, LinearActivation(), XavierInitialization())
    network.add_layer(1, LinearActivation(), XavierInitialization())
    hidden = network.layers[0].neurons[0]
    output = network.layers[1].neurons[0]
    hidden.weights, hidden.bias = [0.5], 0.0
    output.weights, output.bias = [2.0], 0.0

    network.train([1.0], [0.0])

    assert output.delta == pytest.approx(-1.0)
    assert output.weights == [pytest.approx(1.95)]
    assert output.bias == pytest.approx(-0.1)
    # Propagated error is 1.95 * -1.0, taken after the output weight moved.
    assert hidden.delta == pytest.approx(-1.95)
    assert hidden.weights == [pytest.approx(0.305)]
    assert hidden.bias == pytest.approx(-0.195)


def test_derivative_is_evaluated_at_cached_output() -> None:
    network = NeuralNetwork(1.0)
    network.add_layer(1, SigmoidActivation(), XavierInitialization())
    neuron = network.layers[0].neurons[0]
    neuron.weights, neuron.bias = [0.0], 0.0
    network.train([1.0], [1.0])
    assert neuron.delta == pytest.approx(0.5 * 0.25)
    assert neuron.weights == [pytest.approx(0.125)]

    network = NeuralNetwork(1.0)
    network.add_layer(1, TanhActivation(), XavierInitialization())
    neuron = network.layers[0].neurons[0]
    neuron.weights, neuron.bias = [0.5], 0.0
    network.train([1.0], [1.0])
    output = math.tanh(0.5)
    assert neuron.output == pytest.approx(output)
    assert neuron.delta == pytest.approx((1.0 - output) * (1.0 - math.tanh(output) ** 2))


def test_first_layer_fan_in_equals_its_width() -> None:
    network = make_network([3, 5, 2])
    assert network.architecture == (3, 5, 2)
    assert network.input_size == 3
    assert network.output_size == 2
    assert [layer.input_size for layer in network.layers] == [3, 3, 5]
    assert all(n.fan_in == 5 for n in network.layers[2].neurons)
    assert len(network.predict([0.1, 0.2, 0.3])) == 2


def test_predict_is_deterministic() -> None:
    network = make_network([4, 6, 3], seed=12)
    x = [0.3, -0.1, 0.8, 0.0]
    assert network.predict(x) == network.predict(x)


def test_predict_accepts_numpy_vectors() -> None:
    network = make_network([2, 1])
    assert network.predict(np.array([0.5, -0.5])) == network.predict([0.5, -0.5])


def test_same_seed_gives_same_weights() -> None:
    assert snapshot(make_network([3, 4, 2], seed=9)) == snapshot(make_network([3, 4, 2], seed=9))
    assert snapshot(make_network([3, 4, 2], seed=9)) != snapshot(make_network([3, 4, 2], seed=10))


def test_biases_start_at_zero() -> None:
    network = make_network([3, 4])
    assert all(n.bias == 0.0 for layer in network.layers for n in layer.neurons)


@pytest.mark.parametrize("count", [0, -1])
def test_add_layer_rejects_non_positive_neuron_count(count: int) -> None:
    network = NeuralNetwork(0.5)
    with pytest.raises(ConfigurationError):
        network.add_layer(count, SigmoidActivation(), XavierInitialization())
    assert network.layers == []


def test_add_layer_rejects_missing_strategies() -> None:
    network = NeuralNetwork(0.5)
    with pytest.raises(ConfigurationError):
        network.add_layer(2, None, XavierInitialization())  # type: ignore[arg-type]
    with pytest.raises(ConfigurationError):
        network.add_layer(2, SigmoidActivation(), None)  # type: ignore[arg-type]
    assert network.layers == []


@pytest.mark.parametrize("rate", [0.0, -0.1, 1.01, float("nan")])
def test_learning_rate_must_be_in_unit_interval(rate: float) -> None:
    with pytest.raises(ConfigurationError):
        NeuralNetwork(rate)


def test_learning_rate_is_mutable_but_initial_rate_is_kept() -> None:
    network = NeuralNetwork(0.5)
    network.learning_rate = 0.1
    assert network.initial_learning_rate == 0.5
    with pytest.raises(AttributeError):
        network.initial_learning_rate = 0.2  # type: ignore[misc]


def test_empty_network_rejects_predict_and_train() -> None:
    network = NeuralNetwork(0.5)
    with pytest.raises(ValidationError):
        network.predict([1.0])
    with pytest.raises(ValidationError):
        network.train([1.0], [1.0])


def test_predict_rejects_wrong_input_length() -> None:
    network = make_network([3, 2])
    with pytest.raises(ValidationError):
        network.predict([1.0, 2.0])
    with pytest.raises(ValidationError):
        network.predict(None)  # type: ignore[arg-type]


def test_rejected_train_leaves_weights_unchanged() -> None:
    network = make_network([3, 2])
    before = copy.deepcopy(snapshot(network))
    with pytest.raises(ValidationError):
        network.train([1.0, 0.0, 1.0], [1.0])
    with pytest.raises(ValidationError):
        network.train([1.0, 0.0], [1.0, 0.0])
    assert snapshot(network) == before


def test_missing_activation_raises_computation_error_with_location() -> None:
    network = make_network([2, 3])
    network.layers[1].neurons[2].activation = None
    with pytest.raises(ComputationError) as info:
        network.predict([0.1, 0.2])
    assert info.value.layer_index == 1
    assert info.value.neuron_index == 2
    assert "layer 1" in str(info.value)


def test_neuron_checks_input_length() -> None:
    neuron = Neuron([0.1, 0.2], 0.0, LinearActivation())
    assert neuron.activate([1.0, 1.0]) == pytest.approx(0.3)
    assert neuron.output == pytest.approx(0.3)
    with pytest.raises(ValidationError):
        neuron.activate([1.0])


def test_layer_forward_caches_outputs() -> None:
    network = make_network([2, 3])
    outputs = network.layers[1].forward([0.4, 0.6])
    assert network.layers[1].outputs == outputs
    assert len(outputs) == 3


def test_linear_network_fits_linear_map() -> None:
    network = make_network([2], activation=LinearActivation, learning_rate=0.1, seed=4)
    samples = [
        ([1.0, 0.0], [1.0, 1.0]),
        ([0.0, 1.0], [1.0, -1.0]),
        ([1.0, 1.0], [2.0, 0.0]),
        ([-1.0, 0.5], [-0.5, -1.5]),
    ]
    for _ in range(500):
        for x, y in samples:
            network.train(x, y)
    for x, y in samples:
        assert network.predict(x) == pytest.approx(y, abs=1e-3)


def test_sigmoid_network_learns_or() -> None:
    network = make_network([2, 4, 1], learning_rate=0.5, seed=1)
    samples = [([0.0, 0.0], [0.0]), ([0.0, 1.0], [1.0]), ([1.0, 0.0], [1.0]), ([1.0, 1.0], [1.0])]

    def total_error() -> float:
        return sum((y[0] - network.predict(x)[0]) ** 2 for x, y in samples)

    initial = total_error()
    for _ in range(3000):
        for x, y in samples:
            network.train(x, y)
    assert total_error() < initial * 0.5
    assert [round(network.predict(x)[0]) for x, _ in samples] == [0, 1, 1, 1]


def test_predict_and_train_on_saturating_input() -> None:
    network = NeuralNetwork(0.5)
    network.add_layer(1, SigmoidActivation(), XavierInitialization())
    neuron = network.layers[0].neurons[0]
    neuron.weights, neuron.bias = [1.0], 0.0

    assert network.predict([-1000.0]) == [0.0]
    network.train([-1000.0], [0.0])
    assert neuron.weights == [1.0]
    assert neuron.bias == 0.0
