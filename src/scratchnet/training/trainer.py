"""Epoch loop driving per-sample training with a learning-rate schedule."""
from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np
from tqdm.auto import tqdm

from ..config import EarlyStoppingConfig, TrainerConfig
from ..decay import DecayFunction
from ..network import NeuralNetwork

logger = logging.getLogger(__name__)

Sample = Tuple[Sequence[float], Sequence[float]]


@dataclass
class TrainingHistory:
    """Metrics collected by :meth:`OnlineTrainer.fit`, one entry per epoch."""

    losses: list[float] = field(default_factory=list)
    learning_rates: list[float] = field(default_factory=list)
    stopped_early: bool = False

    @property
    def epochs(self) -> int:
        return len(self.losses)


def squared_error(targets: Sequence[float], outputs: Sequence[float]) -> float:
    residual = np.asarray(targets, dtype=float) - np.asarray(outputs, dtype=float)
    return float(np.sum(residual * residual))


class OnlineTrainer:
    """Train a :class:`NeuralNetwork` one sample at a time.

    Before every epoch the network's learning rate is set from ``decay`` when
    one is given; otherwise the network keeps whatever rate it has. The loss
    reported for an epoch is the summed squared error of each sample measured
    right after the update on that sample.
    """

    def __init__(
        self,
        network: NeuralNetwork,
        *,
        decay: Optional[DecayFunction] = None,
        config: Optional[TrainerConfig] = None,
    ) -> None:
        self.network = network
        self.decay = decay
        self.config = config or TrainerConfig()
        self.rng = random.Random(self.config.seed)
        self.epoch = 0

    def train_epoch(self, samples: List[Sample]) -> float:
        order = list(range(len(samples)))
        if self.config.shuffle:
            self.rng.shuffle(order)
        total = 0.0
        for index in order:
            inputs, targets = samples[index]
            self.network.train(inputs, targets)
            total += squared_error(targets, self.network.predict(inputs))
        return total

    def evaluate(self, samples: Iterable[Sample]) -> float:
        """Summed squared error over ``samples`` without updating the network."""

        return sum(squared_error(targets, self.network.predict(inputs)) for inputs, targets in samples)

    def fit(
        self,
        samples: Iterable[Sample],
        *,
        early_stopping: Optional[EarlyStoppingConfig] = None,
    ) -> TrainingHistory:
        """Run ``config.epochs`` epochs over ``samples``."""

        data = list(samples)
        early_stopping = early_stopping or self.config.early_stopping
        history = TrainingHistory()
        best_loss = float("inf")
        epochs_without_improvement = 0

        epochs: Iterable[int] = range(self.config.epochs)
        if self.config.show_progress:
            epochs = tqdm(epochs, desc="Training", unit="epoch")

        for epoch in epochs:
            self.epoch = epoch
            if self.decay is not None:
                self.network.learning_rate = self.decay.get_learning_rate(epoch)

            loss = self.train_epoch(data)
            history.losses.append(loss)
            history.learning_rates.append(self.network.learning_rate)

            if self.config.log_every and epoch % self.config.log_every == 0:
                logger.info("Epoch %d, Error: %.6f, learning rate: %.6g", epoch, loss, self.network.learning_rate)
            if self.config.show_progress:
                epochs.set_postfix(loss=f"{loss:.4f}")  # type: ignore[attr-defined]

            if early_stopping is not None:
                if loss + early_stopping.min_delta < best_loss:
                    best_loss = loss
                    epochs_without_improvement = 0
                else:
                    epochs_without_improvement += 1
                    if epochs_without_improvement >= early_stopping.patience:
                        logger.info("Stopping early after epoch %d, best error %.6f", epoch, best_loss)
                        history.stopped_early = True
                        break

        return history


__all__ = ["OnlineTrainer", "TrainingHistory", "squared_error"]
