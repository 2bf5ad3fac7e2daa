"""
Ligand-receptor scoring demo for lrdemo.

This script performs three main tasks:
1. Builds the seeded toy dataset and scores it with both score policies.
2. Sweeps the expression cutoff to show how many interactions stay active.
3. Saves the heatmap and top-pair figures for the product scores.

Usage:
    python examples/run_demo.py
"""

from __future__ import annotations

import logging
import os

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from lrdemo import ScorePolicy, make_example_data, score_active_lr
from lrdemo.plots import plot_lr_results

OUTPUT_DIR = "figures"
os.makedirs(OUTPUT_DIR, exist_ok=True)

sns.set_theme(style="whitegrid", context="paper", font_scale=1.2)
plt.rcParams["figure.dpi"] = 300
plt.rcParams["savefig.bbox"] = "tight"


def cutoff_sweep(data, cutoffs=(0.5, 1.0, 1.5, 2.0, 2.5)) -> pd.DataFrame:
    """Count active interactions per cutoff (same cutoff on both sides)."""
    rows = []
    for cutoff in cutoffs:
        scored = score_active_lr(
            data.expr_sender,
            data.expr_receiver,
            data.lr_network,
            sender_cutoff=cutoff,
            receiver_cutoff=cutoff,
        )
        rows.append(
            {
                "cutoff": cutoff,
                "n_interactions": len(scored),
                "n_cellpairs": scored["cellpair"].nunique(),
            }
        )
    return pd.DataFrame(rows)


def main() -> None:
    logging.basicConfig(
        level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
    )

    print("=== 1. Scoring Example Data ===")
    data = make_example_data(seed=1)
    results = {}
    for policy in ScorePolicy:
        print(f"\n--- Score: {policy.value} ---")
        scored = score_active_lr(
            data.expr_sender,
            data.expr_receiver,
            data.lr_network,
            sender_cutoff=1.0,
            receiver_cutoff=1.0,
            score=policy,
        )
        print(scored.to_string(index=False, float_format="%.3f"))
        results[policy] = scored

    output_file = os.path.join(OUTPUT_DIR, "lr_scores.csv")
    results[ScorePolicy.PRODUCT].to_csv(output_file, index=False)
    print(f"\nScores saved to {output_file}")

    print("\n=== 2. Cutoff Sweep ===")
    print(cutoff_sweep(data).to_string(index=False))

    print("\n=== 3. Generating Figures ===")
    figures = plot_lr_results(results[ScorePolicy.PRODUCT], top_n_pairs=8)
    if figures is not None:
        for name, fig in figures.items():
            fig.savefig(os.path.join(OUTPUT_DIR, f"lr_{name}.png"))
            plt.close(fig)

    print(f"All figures saved to {OUTPUT_DIR}/")


if __name__ == "__main__":
    main()
