"""Configuration dataclasses for building and training networks."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence, Union

from .activation import ActivationFunction
from .exceptions import ConfigurationError
from .initialization import InitializationFunction
from .registry import activation_from_tag, initialization_from_tag
from .validation import check_learning_rate, ensure


@dataclass(slots=True)
class LayerConfig:
    """Description of a single dense layer.

    Parameters
    ----------
    neuron_count:
        Width of the layer. For the first layer this is also the number of
        inputs the network accepts.
    activation:
        Either a strategy instance or a registry tag such as
        ``"SigmoidActivation"`` or ``"LeakyReLUActivation(alpha=0.2)"``.
    initialization:
        Either a strategy instance or a registry tag such as
        ``"XavierInitialization"``.
    """

    neuron_count: int
    activation: Union[str, ActivationFunction] = "SigmoidActivation"
    initialization: Union[str, InitializationFunction] = "XavierInitialization"

    def __post_init__(self) -> None:
        if not isinstance(self.neuron_count, int) or isinstance(self.neuron_count, bool) or self.neuron_count <= 0:
            raise ConfigurationError(f"Neuron count must be positive, got: {self.neuron_count}")
        # Resolve tags eagerly so typos surface at configuration time.
        self.build_activation()
        self.build_initialization()

    def build_activation(self) -> ActivationFunction:
        if isinstance(self.activation, str):
            return activation_from_tag(self.activation)
        return self.activation

    def build_initialization(self) -> InitializationFunction:
        if isinstance(self.initialization, str):
            return initialization_from_tag(self.initialization)
        return self.initialization


@dataclass(slots=True)
class NetworkConfig:
    """Layers in data-flow order plus optimisation settings.

    ``seed`` makes weight initialisation reproducible.
    """

    layers: Sequence[LayerConfig]
    learning_rate: float = 0.5
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.layers:
            raise ConfigurationError("A network needs at least one layer")
        ensure(check_learning_rate(self.learning_rate))


@dataclass(slots=True)
class EarlyStoppingConfig:
    """Stop once the epoch loss has not improved by ``min_delta`` for ``patience`` epochs."""

    patience: int = 20
    min_delta: float = 1e-4

    def __post_init__(self) -> None:
        if self.patience <= 0:
            raise ConfigurationError("patience must be positive")
        if self.min_delta < 0:
            raise ConfigurationError("min_delta must be non-negative")


@dataclass(slots=True)
class TrainerConfig:
    """Options for :class:`~scratchnet.training.OnlineTrainer`.

    Parameters
    ----------
    epochs:
        Number of passes over the dataset.
    log_every:
        Emit an INFO log line every ``log_every`` epochs. ``0`` disables
        periodic logging.
    show_progress:
        Wrap the epoch loop in a ``tqdm`` progress bar.
    shuffle:
        Visit samples in a new random order each epoch.
    seed:
        Seed for the shuffling generator.
    early_stopping:
        Default early-stopping rule for :meth:`~scratchnet.training.OnlineTrainer.fit`
        when none is passed to it. ``None`` trains for all ``epochs``.
    """

    epochs: int = 1000
    log_every: int = 1000
    show_progress: bool = False
    shuffle: bool = False
    seed: Optional[int] = None
    early_stopping: Optional[EarlyStoppingConfig] = field(default=None)

    def __post_init__(self) -> None:
        if self.epochs <= 0:
            raise ConfigurationError("epochs must be positive")
        if self.log_every < 0:
            raise ConfigurationError("log_every must be non-negative")


__all__ = [
    "EarlyStoppingConfig",
    "LayerConfig",
    "NetworkConfig",
    "TrainerConfig",
]
