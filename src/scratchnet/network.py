"""Dense feed-forward network trained one sample at a time."""
from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, List, Optional, Sequence

from .activation import ActivationFunction
from .exceptions import ComputationError, NeuralNetworkError, ValidationError
from .initialization import InitializationFunction
from .validation import (
    check_input_vector,
    check_layer_config,
    check_learning_rate,
    check_network_state,
    check_training_data,
    ensure,
)

if TYPE_CHECKING:  # pragma: no cover - import-time hinting only
    from .config import NetworkConfig

logger = logging.getLogger(__name__)

Vector = List[float]


def _as_vector(values: Sequence[float]) -> Vector:
    return [float(value) for value in values]


class Neuron:
    """A weight vector, a bias and the activation applied to their weighted sum.

    ``output`` and ``delta`` are scratch values written by the most recent
    forward and backward pass respectively.
    """

    def __init__(
        self,
        weights: Sequence[float],
        bias: float = 0.0,
        activation: Optional[ActivationFunction] = None,
    ) -> None:
        self.weights: Vector = _as_vector(weights)
        self.bias = float(bias)
        self.activation = activation
        self.output = 0.0
        self.delta = 0.0

    @property
    def fan_in(self) -> int:
        return len(self.weights)

    def activate(self, inputs: Sequence[float]) -> float:
        if len(inputs) != len(self.weights):
            raise ValidationError(
                f"Neuron expects {len(self.weights)} inputs, got: {len(inputs)}"
            )
        if self.activation is None:
            raise ComputationError("Neuron activation function is not set")
        total = self.bias
        for weight, value in zip(self.weights, inputs):
            total += weight * value
        self.output = self.activation.activate(total)
        return self.output

    def __repr__(self) -> str:
        return f"Neuron(fan_in={self.fan_in}, bias={self.bias!r}, activation={self.activation!r})"


class Layer:
    """A fixed number of neurons sharing one activation and one initialiser."""

    def __init__(
        self,
        neuron_count: int,
        input_size: int,
        activation: ActivationFunction,
        initialization: InitializationFunction,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.activation = activation
        self.initialization = initialization
        self._input_size = input_size
        self.neurons = [
            Neuron(initialization.init(input_size, rng), 0.0, activation)
            for _ in range(neuron_count)
        ]
        self.outputs: Optional[Vector] = None

    @property
    def size(self) -> int:
        return len(self.neurons)

    @property
    def input_size(self) -> int:
        return self._input_size

    def forward(self, inputs: Sequence[float]) -> Vector:
        """Activate every neuron on ``inputs`` and cache the result."""

        outputs: Vector = []
        for index, neuron in enumerate(self.neurons):
            try:
                outputs.append(neuron.activate(inputs))
            except ComputationError as exc:
                raise ComputationError(exc.reason, neuron_index=index) from exc
            except NeuralNetworkError:
                raise
            except Exception as exc:
                raise ComputationError(f"Activation failed: {exc}", neuron_index=index) from exc
        self.outputs = outputs
        return outputs

    def __repr__(self) -> str:
        return (
            f"Layer(size={self.size}, input_size={self.input_size}, "
            f"activation={self.activation!r}, initialization={self.initialization!r})"
        )


class NeuralNetwork:
    """Ordered stack of :class:`Layer` objects with online back-propagation.

    Parameters
    ----------
    learning_rate:
        Step size for weight updates, in ``(0, 1]``. The value is kept as
        :pyattr:`initial_learning_rate`; :pyattr:`learning_rate` itself may be
        reassigned between epochs, typically from a
        :class:`~scratchnet.decay.DecayFunction`.
    seed:
        Seed of the generator handed to every initialiser, so a seed fully
        determines the initial weights.

    The network is not thread-safe. Neuron outputs and deltas and layer output
    caches are only meaningful between a forward pass and the backward pass
    that immediately follows it.
    """

    def __init__(self, learning_rate: float, *, seed: Optional[int] = None) -> None:
        ensure(check_learning_rate(learning_rate))
        self.learning_rate = float(learning_rate)
        self._initial_learning_rate = float(learning_rate)
        self.seed = seed
        self.rng = random.Random(seed)
        self.layers: List[Layer] = []

    @classmethod
    def from_config(cls, config: "NetworkConfig") -> "NeuralNetwork":
        """Build a network from a validated :class:`~scratchnet.config.NetworkConfig`."""

        network = cls(config.learning_rate, seed=config.seed)
        for layer in config.layers:
            network.add_layer(layer.neuron_count, layer.build_activation(), layer.build_initialization())
        return network

    @property
    def initial_learning_rate(self) -> float:
        return self._initial_learning_rate

    @property
    def input_size(self) -> int:
        ensure(check_network_state(self))
        return self.layers[0].input_size

    @property
    def output_size(self) -> int:
        ensure(check_network_state(self))
        return self.layers[-1].size

    @property
    def architecture(self) -> tuple[int, ...]:
        return tuple(layer.size for layer in self.layers)

    def add_layer(
        self,
        neuron_count: int,
        activation: ActivationFunction,
        initialization: InitializationFunction,
    ) -> Layer:
        """Append a layer fed by the current last layer.

        The first layer's fan-in equals its own neuron count, so the network's
        input dimensionality is the width of its first layer.
        """

        input_size = self.layers[-1].size if self.layers else neuron_count
        ensure(check_layer_config(neuron_count, input_size, activation, initialization))
        layer = Layer(neuron_count, input_size, activation, initialization, self.rng)
        self.layers.append(layer)
        logger.debug(
            "Added layer %d: %d neurons, fan-in %d, %s, %s",
            len(self.layers) - 1,
            neuron_count,
            input_size,
            type(activation).__name__,
            type(initialization).__name__,
        )
        return layer

    def predict(self, inputs: Sequence[float]) -> Vector:
        """Feed ``inputs`` through every layer and return the last layer's output."""

        ensure(check_network_state(self))
        ensure(check_input_vector(inputs, self.input_size))
        return list(self._forward(_as_vector(inputs)))

    def train(self, inputs: Sequence[float], targets: Sequence[float]) -> None:
        """Run one forward pass and one back-propagation update on a single sample.

        The output error is the signed residual ``target - output``. Layers are
        visited from last to first; each neuron's delta is its propagated error
        times the activation derivative evaluated at the neuron's cached
        output, and weights move by ``learning_rate * delta * input``. The
        error handed to the layer below is accumulated from the already
        updated weights and is not yet scaled by that layer's derivative.
        """

        ensure(check_network_state(self))
        ensure(check_training_data(inputs, targets, self))
        inputs = _as_vector(inputs)
        targets = _as_vector(targets)

        outputs = self._forward(inputs)
        errors = [target - output for target, output in zip(targets, outputs)]

        for layer_index in range(len(self.layers) - 1, -1, -1):
            layer = self.layers[layer_index]
            layer_inputs = inputs if layer_index == 0 else self.layers[layer_index - 1].outputs
            if layer_inputs is None:
                raise ComputationError("Layer inputs are missing during backpropagation", layer_index=layer_index)
            next_errors = [0.0] * layer.input_size

            for neuron_index, neuron in enumerate(layer.neurons):
                if neuron.activation is None:
                    raise ComputationError(
                        "Neuron activation function is not set",
                        layer_index=layer_index,
                        neuron_index=neuron_index,
                    )
                try:
                    neuron.delta = errors[neuron_index] * neuron.activation.derivative(neuron.output)
                except Exception as exc:
                    raise ComputationError(
                        f"Derivative failed: {exc}",
                        layer_index=layer_index,
                        neuron_index=neuron_index,
                    ) from exc

                weights = neuron.weights
                for k in range(len(weights)):
                    weights[k] += self.learning_rate * neuron.delta * layer_inputs[k]
                    next_errors[k] += weights[k] * neuron.delta
                neuron.bias += self.learning_rate * neuron.delta

            errors = next_errors

    def _forward(self, inputs: Vector) -> Vector:
        outputs = inputs
        for index, layer in enumerate(self.layers):
            try:
                outputs = layer.forward(outputs)
            except ComputationError as exc:
                if exc.layer_index is not None:
                    raise
                raise ComputationError(exc.reason, layer_index=index, neuron_index=exc.neuron_index) from exc
        return outputs

    def __repr__(self) -> str:
        return f"NeuralNetwork(architecture={self.architecture}, learning_rate={self.learning_rate!r})"


__all__ = ["Layer", "NeuralNetwork", "Neuron"]
