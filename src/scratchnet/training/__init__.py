"""Training loop utilities."""

from .trainer import OnlineTrainer, TrainingHistory, squared_error

__all__ = ["OnlineTrainer", "TrainingHistory", "squared_error"]
