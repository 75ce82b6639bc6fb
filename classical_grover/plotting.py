# plotting.py
from __future__ import annotations

from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np


def plot_probabilities(probabilities: Sequence[float], target: Optional[int] = None,
                       title: Optional[str] = None, ax=None):
    """Bar chart of basis-state probabilities; the target bar is drawn in red."""
    probs = np.asarray(probabilities, dtype=float)
    if ax is None:
        _, ax = plt.subplots(figsize=(12, 6))
    colors = ['red' if i == target else 'blue' for i in range(len(probs))]
    ax.bar(range(len(probs)), probs, color=colors, alpha=0.7)
    ax.set_xlabel('State (decimal)')
    ax.set_ylabel('Probability')
    ax.set_ylim(0, 1)
    ax.set_title(title or f'Amplitude amplification (N={len(probs)})')
    ax.grid(True, alpha=0.3)
    return ax


def save_probability_plot(probabilities: Sequence[float], path: str,
                          target: Optional[int] = None, title: Optional[str] = None) -> str:
    fig, ax = plt.subplots(figsize=(12, 6))
    try:
        plot_probabilities(probabilities, target=target, title=title, ax=ax)
        fig.tight_layout()
        fig.savefig(path)
    finally:
        plt.close(fig)
    return path
