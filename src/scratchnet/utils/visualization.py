"""Plotting utilities for training curves."""

from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
from matplotlib.figure import Figure


def plot_loss_history(losses: Sequence[float], learning_rates: Optional[Sequence[float]] = None) -> Figure:
    """Plot the per-epoch error, with the learning rate on a second axis when given."""

    fig, ax = plt.subplots()
    ax.plot(losses, label="Error")
    ax.set_xlabel("Epoch")
    ax.set_ylabel("Summed squared error")
    if learning_rates is not None:
        rate_ax = ax.twinx()
        rate_ax.plot(learning_rates, color="tab:orange", label="Learning rate")
        rate_ax.set_ylabel("Learning rate")
    ax.set_title("Training Error")
    fig.legend(loc="upper right")
    fig.tight_layout()
    return fig
