"""Plotting utilities."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .metrics import summarize_pair_scores
from .utils import ARROW

logger = logging.getLogger(__name__)

_REQUIRED = ["pair", "cellpair", "lr_score"]


def _check_columns(scored: pd.DataFrame) -> None:
    missing = [c for c in _REQUIRED if c not in scored.columns]
    if missing:
        raise ValueError(f"scored table is missing column(s): {missing}")


def plot_lr_heatmap(
    scored: pd.DataFrame,
    ax: Optional[plt.Axes] = None,
    title: str = "Active ligand-receptor scores",
) -> plt.Figure:
    """
    Tile heatmap of ligand-receptor pair (x) vs sender-receiver pair (y).

    Duplicate catalog entries falling on the same tile show their maximum score.
    """
    _check_columns(scored)
    grid = scored.pivot_table(
        index="cellpair", columns="pair", values="lr_score", aggfunc="max"
    )

    if ax is None:
        width = max(6.0, 0.6 * grid.shape[1] + 3)
        height = max(4.0, 0.5 * grid.shape[0] + 2)
        fig, ax = plt.subplots(figsize=(width, height))
    else:
        fig = ax.figure

    if grid.empty:
        ax.text(0.5, 0.5, "No active ligand-receptor pairs", ha="center")
        ax.set_title(title)
        return fig

    sns.heatmap(
        grid,
        ax=ax,
        cmap="viridis",
        linewidths=0.3,
        linecolor="white",
        cbar_kws={"label": "Score"},
    )
    ax.set_title(title)
    ax.set_xlabel(f"Ligand{ARROW}Receptor")
    ax.set_ylabel(f"Sender{ARROW}Receiver")
    ax.tick_params(axis="x", labelrotation=45)
    for label in ax.get_xticklabels():
        label.set_horizontalalignment("right")
    return fig


def plot_top_pairs(
    scored: pd.DataFrame,
    top_n_pairs: int = 8,
    ax: Optional[plt.Axes] = None,
) -> plt.Figure:
    """Horizontal bars of the top ligand-receptor pairs by summed score."""
    _check_columns(scored)
    agg = summarize_pair_scores(scored, top_n=top_n_pairs)

    if ax is None:
        fig, ax = plt.subplots(figsize=(7, max(3.0, 0.45 * len(agg) + 1.5)))
    else:
        fig = ax.figure

    sns.barplot(data=agg, x="lr_score", y="pair", orient="h", color="C0", ax=ax)
    ax.set_title(f"Top {top_n_pairs} ligand-receptor pairs (sum of scores)")
    ax.set_xlabel("Sum score")
    ax.set_ylabel("")
    return fig


def plot_lr_results(
    scored: pd.DataFrame, top_n_pairs: int = 8
) -> Optional[Dict[str, plt.Figure]]:
    """
    Heatmap and top-pair bar chart for a scoring result.

    Returns
    -------
    dict or None
        ``{"heatmap": Figure, "top_pairs": Figure}``, or ``None`` when the
        table has no rows.
    """
    _check_columns(scored)
    if scored.empty:
        logger.info("No active ligand-receptor pairs under the current cutoffs.")
        return None

    return {
        "heatmap": plot_lr_heatmap(scored),
        "top_pairs": plot_top_pairs(scored, top_n_pairs=top_n_pairs),
    }
