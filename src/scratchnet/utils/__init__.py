"""Utility helpers."""

from __future__ import annotations

from importlib import import_module

__all__ = ["plot_loss_history"]


def __getattr__(name: str):  # pragma: no cover - small wrapper
    if name == "plot_loss_history":
        return getattr(import_module("scratchnet.utils.visualization"), name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
