"""Feed-forward neural networks built from scratch in pure Python.

The package provides dense layers with pluggable activation and weight
initialisation strategies, learning-rate schedules, online back-propagation
and a plain-text model format.
"""

from .activation import (
    ActivationFunction,
    BentIdentityActivation,
    ELUActivation,
    LeakyReLUActivation,
    LinearActivation,
    ReLUActivation,
    SigmoidActivation,
    SwishActivation,
    TanhActivation,
)
from .config import EarlyStoppingConfig, LayerConfig, NetworkConfig, TrainerConfig
from .decay import DecayFunction, ExponentialDecay, InverseTimeDecay, PolynomialDecay, StepDecay
from .exceptions import (
    ComputationError,
    ConfigurationError,
    ErrorKind,
    NeuralNetworkError,
    PersistenceError,
    ValidationError,
)
from .initialization import (
    InitializationFunction,
    KaimingInitialization,
    LeCunInitialization,
    ScalingInitialization,
    SparseInitialization,
    XavierInitialization,
)
from .network import Layer, NeuralNetwork, Neuron
from .persistence import export_state, import_state, load_model, model_file_name, save_model

__all__ = [
    "ActivationFunction",
    "BentIdentityActivation",
    "ComputationError",
    "ConfigurationError",
    "DecayFunction",
    "EarlyStoppingConfig",
    "ELUActivation",
    "ErrorKind",
    "ExponentialDecay",
    "InitializationFunction",
    "InverseTimeDecay",
    "KaimingInitialization",
    "Layer",
    "LayerConfig",
    "LeakyReLUActivation",
    "LeCunInitialization",
    "LinearActivation",
    "NetworkConfig",
    "NeuralNetwork",
    "NeuralNetworkError",
    "Neuron",
    "PersistenceError",
    "PolynomialDecay",
    "ReLUActivation",
    "ScalingInitialization",
    "SigmoidActivation",
    "SparseInitialization",
    "StepDecay",
    "SwishActivation",
    "TanhActivation",
    "TrainerConfig",
    "ValidationError",
    "XavierInitialization",
    "export_state",
    "import_state",
    "load_model",
    "model_file_name",
    "save_model",
]
