"""Name-based lookup of activation and initialisation strategies.

The in-memory object graph never needs names; tags only exist where a network
is described as text, i.e. in saved models and in :mod:`scratchnet.config`.

A tag is the strategy's class name, optionally followed by the constructor
arguments that differ from their defaults, e.g. ``SigmoidActivation`` or
``LeakyReLUActivation(alpha=0.2)``. Several arguments are separated by ``;``.
"""
from __future__ import annotations

import re
from typing import Optional, TypeVar

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
from .exceptions import ConfigurationError
from .initialization import (
    InitializationFunction,
    KaimingInitialization,
    LeCunInitialization,
    ScalingInitialization,
    SparseInitialization,
    XavierInitialization,
)

T = TypeVar("T")

_TAG_PATTERN = re.compile(r"^(?P<name>[A-Za-z_]\w*)(?:\((?P<args>[^()]*)\))?$")

ACTIVATIONS: dict[str, type[ActivationFunction]] = {
    cls.__name__: cls
    for cls in (
        SigmoidActivation,
        TanhActivation,
        ReLUActivation,
        LeakyReLUActivation,
        ELUActivation,
        SwishActivation,
        LinearActivation,
        BentIdentityActivation,
    )
}

INITIALIZATIONS: dict[str, type[InitializationFunction]] = {
    cls.__name__: cls
    for cls in (
        XavierInitialization,
        KaimingInitialization,
        LeCunInitialization,
        ScalingInitialization,
        SparseInitialization,
    )
}


def register_activation(cls: type[ActivationFunction], name: Optional[str] = None) -> type[ActivationFunction]:
    """Make ``cls`` loadable under ``name`` (defaults to the class name)."""

    ACTIVATIONS[name or cls.__name__] = cls
    return cls


def register_initialization(
    cls: type[InitializationFunction], name: Optional[str] = None
) -> type[InitializationFunction]:
    """Make ``cls`` loadable under ``name`` (defaults to the class name)."""

    INITIALIZATIONS[name or cls.__name__] = cls
    return cls


def _format_value(value: object) -> str:
    if isinstance(value, float):
        return repr(value)
    return str(value)


def _parse_value(text: str) -> object:
    try:
        return float(text)
    except ValueError:
        return text


def strategy_tag(strategy: ActivationFunction | InitializationFunction) -> str:
    """Render the tag that :func:`activation_from_tag` or
    :func:`initialization_from_tag` turns back into an equivalent strategy."""

    cls = type(strategy)
    params = strategy.parameters()
    if not params:
        return cls.__name__
    try:
        defaults: Optional[dict[str, object]] = cls().parameters()
    except TypeError:
        # No default construction, so every argument has to be written out.
        defaults = None
    if params == defaults:
        return cls.__name__
    args = ";".join(f"{key}={_format_value(value)}" for key, value in params.items())
    return f"{cls.__name__}({args})"


def _parse_tag(tag: str) -> tuple[str, dict[str, object]]:
    match = _TAG_PATTERN.match(tag.strip())
    if match is None:
        raise ConfigurationError(f"Malformed strategy tag: {tag!r}")
    kwargs: dict[str, object] = {}
    args = match.group("args")
    if args:
        for item in args.split(";"):
            key, sep, value = item.partition("=")
            if not sep or not key.strip():
                raise ConfigurationError(f"Malformed argument {item!r} in strategy tag {tag!r}")
            kwargs[key.strip()] = _parse_value(value.strip())
    return match.group("name"), kwargs


def _build(registry: dict[str, type[T]], tag: str, family: str) -> T:
    name, kwargs = _parse_tag(tag)
    cls = registry.get(name)
    if cls is None:
        raise ConfigurationError(f"Unknown {family} function: {name}")
    try:
        return cls(**kwargs)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid arguments for {name}: {exc}") from exc


def activation_from_tag(tag: str) -> ActivationFunction:
    return _build(ACTIVATIONS, tag, "activation")


def initialization_from_tag(tag: str) -> InitializationFunction:
    return _build(INITIALIZATIONS, tag, "initialization")


__all__ = [
    "ACTIVATIONS",
    "INITIALIZATIONS",
    "activation_from_tag",
    "initialization_from_tag",
    "register_activation",
    "register_initialization",
    "strategy_tag",
]
