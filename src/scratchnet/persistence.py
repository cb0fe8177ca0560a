"""Human-readable text format for saving and restoring networks.

Layout::

    LearningRate: 0.5

    InitLayer 0 - Size: 2, Activation: SwishActivation, Init: XavierInitialization
    InitLayer 1 - Size: 1, Activation: SigmoidActivation, Init: XavierInitialization

    Layer 0
    Neuron 0
    Weights:0.12,-0.5,
    Bias:0.0
    ...

The ``InitLayer`` block alone determines the topology; the second block then
overwrites every neuron's weights and bias in order. Loading builds a complete
network before anything is handed back, so a failed load never leaves a
half-populated network behind.
"""
from __future__ import annotations

import io
import logging
from pathlib import Path
import re
from typing import BinaryIO, Optional, TextIO, Union

from .exceptions import NeuralNetworkError, PersistenceError
from .network import NeuralNetwork
from .registry import activation_from_tag, initialization_from_tag, strategy_tag

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_LEARNING_RATE = re.compile(r"^LearningRate:\s*(?P<value>\S+)\s*$")
_INIT_LAYER = re.compile(
    r"^InitLayer\s+(?P<index>\d+)\s+-\s+Size:\s*(?P<size>\d+),\s*"
    r"Activation:\s*(?P<activation>\S+),\s*Init:\s*(?P<init>\S+)\s*$"
)
_LAYER = re.compile(r"^Layer\s+(?P<index>\d+)\s*$")
_NEURON = re.compile(r"^Neuron\s+(?P<index>\d+)\s*$")


def export_state(network: NeuralNetwork) -> str:
    """Serialise ``network`` to the text format."""

    buffer = io.StringIO()
    write_state(network, buffer)
    return buffer.getvalue()


def write_state(network: NeuralNetwork, stream: TextIO) -> None:
    stream.write(f"LearningRate: {network.initial_learning_rate!r}\n\n")
    for index, layer in enumerate(network.layers):
        stream.write(
            f"InitLayer {index} - Size: {layer.size}, "
            f"Activation: {strategy_tag(layer.activation)}, "
            f"Init: {strategy_tag(layer.initialization)}\n"
        )
    stream.write("\n")
    for index, layer in enumerate(network.layers):
        stream.write(f"Layer {index}\n")
        for neuron_index, neuron in enumerate(layer.neurons):
            stream.write(f"Neuron {neuron_index}\n")
            stream.write("Weights:" + "".join(f"{weight!r}," for weight in neuron.weights) + "\n")
            stream.write(f"Bias:{neuron.bias!r}\n")
        stream.write("\n")


def _parse_float(text: str, line_number: int) -> float:
    try:
        return float(text)
    except ValueError as exc:
        raise PersistenceError(f"Line {line_number}: invalid number {text!r}") from exc


class _Lines:
    """Cursor over the non-blank lines of a document, keeping line numbers."""

    def __init__(self, text: str) -> None:
        self._items = [
            (number, line.strip())
            for number, line in enumerate(text.splitlines(), start=1)
            if line.strip()
        ]
        self._position = 0

    def peek(self) -> Optional[tuple[int, str]]:
        if self._position < len(self._items):
            return self._items[self._position]
        return None

    def next(self, expected: str) -> tuple[int, str]:
        item = self.peek()
        if item is None:
            raise PersistenceError(f"Unexpected end of model data, expected {expected}")
        self._position += 1
        return item


def _parse(text: str) -> NeuralNetwork:
    lines = _Lines(text)

    number, line = lines.next("'LearningRate:' header")
    match = _LEARNING_RATE.match(line)
    if match is None:
        raise PersistenceError(f"Line {number}: expected 'LearningRate: <value>', got {line!r}")
    network = NeuralNetwork(_parse_float(match.group("value"), number))

    while (item := lines.peek()) is not None and item[1].startswith("InitLayer"):
        number, line = lines.next("layer definition")
        match = _INIT_LAYER.match(line)
        if match is None:
            raise PersistenceError(f"Line {number}: malformed layer definition {line!r}")
        if int(match.group("index")) != len(network.layers):
            raise PersistenceError(f"Line {number}: layer definitions must be numbered consecutively from 0")
        network.add_layer(
            int(match.group("size")),
            activation_from_tag(match.group("activation")),
            initialization_from_tag(match.group("init")),
        )
    if not network.layers:
        raise PersistenceError("Model data defines no layers")

    for layer_index, layer in enumerate(network.layers):
        number, line = lines.next(f"'Layer {layer_index}'")
        match = _LAYER.match(line)
        if match is None or int(match.group("index")) != layer_index:
            raise PersistenceError(f"Line {number}: expected 'Layer {layer_index}', got {line!r}")
        for neuron_index, neuron in enumerate(layer.neurons):
            number, line = lines.next(f"'Neuron {neuron_index}'")
            match = _NEURON.match(line)
            if match is None or int(match.group("index")) != neuron_index:
                raise PersistenceError(f"Line {number}: expected 'Neuron {neuron_index}', got {line!r}")

            number, line = lines.next("'Weights:' line")
            if not line.startswith("Weights:"):
                raise PersistenceError(f"Line {number}: expected 'Weights:', got {line!r}")
            values = [value for value in line[len("Weights:"):].split(",") if value.strip()]
            if len(values) != neuron.fan_in:
                raise PersistenceError(
                    f"Line {number}: expected {neuron.fan_in} weights for layer {layer_index} "
                    f"neuron {neuron_index}, got {len(values)}"
                )
            neuron.weights = [_parse_float(value.strip(), number) for value in values]

            number, line = lines.next("'Bias:' line")
            if not line.startswith("Bias:"):
                raise PersistenceError(f"Line {number}: expected 'Bias:', got {line!r}")
            neuron.bias = _parse_float(line[len("Bias:"):].strip(), number)

    leftover = lines.peek()
    if leftover is not None:
        raise PersistenceError(f"Line {leftover[0]}: unexpected content {leftover[1]!r}")
    return network


def import_state(
    source: Union[str, bytes, TextIO, BinaryIO],
    network: Optional[NeuralNetwork] = None,
) -> NeuralNetwork:
    """Rebuild a network from text produced by :func:`export_state`.

    ``source`` is the document itself, as text or UTF-8 bytes, or a readable
    text or binary stream. When ``network`` is given its layers and current
    learning rate are replaced by the loaded ones and it is returned;
    otherwise a new network is returned.
    Any problem raises :class:`PersistenceError` and leaves ``network``
    untouched.
    """

    data = source if isinstance(source, (str, bytes)) else source.read()
    if isinstance(data, bytes):
        try:
            data = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PersistenceError(f"Model data is not valid UTF-8: {exc}") from exc
    if not isinstance(data, str):
        raise PersistenceError(f"Model data must be text or bytes, got {type(data).__name__}")
    text = data
    try:
        loaded = _parse(text)
    except PersistenceError:
        raise
    except NeuralNetworkError as exc:
        raise PersistenceError(f"Invalid model data: {exc}") from exc

    if network is None:
        return loaded
    network.layers = loaded.layers
    network.learning_rate = loaded.learning_rate
    return network


def model_file_name(network: NeuralNetwork) -> str:
    """Conventional file name derived from the layer sizes and initial learning rate."""

    sizes = "-".join(str(size) for size in network.architecture)
    return f"model_{sizes}_{network.initial_learning_rate!r}.txt"


def save_model(path: PathLike, network: NeuralNetwork) -> Path:
    path = Path(path)
    try:
        with path.open("w", encoding="utf-8") as handle:
            write_state(network, handle)
    except OSError as exc:
        raise PersistenceError(f"Could not write model to {path}: {exc}") from exc
    logger.info("Model saved to %s", path)
    return path


def load_model(path: PathLike, network: Optional[NeuralNetwork] = None) -> NeuralNetwork:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PersistenceError(f"Could not read model from {path}: {exc}") from exc
    loaded = import_state(text, network)
    logger.info("Model loaded from %s", path)
    return loaded


__all__ = [
    "export_state",
    "import_state",
    "load_model",
    "model_file_name",
    "save_model",
    "write_state",
]
