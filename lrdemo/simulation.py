"""Simulation utilities."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import numpy as np
import pandas as pd

LR_PAIRS: List[Tuple[str, str]] = [
    ("Tgfb1", "Tgfbr2"),
    ("Il6", "Il6ra"),
    ("Ccl2", "Ccr2"),
    ("Cxcl10", "Cxcr3"),
    ("Igf1", "Igf1r"),
    ("Spp1", "Cd44"),
]

SENDER_CELLS = ["Microglia", "Astrocyte"]
RECEIVER_CELLS = ["Neuron", "Endothelial", "OPC"]
BACKGROUND_GENES = ["Apoe", "Trem2", "Gfap", "Pdgfra", "Pecam1"]

# Structured signals added on top of the background, (gene, cell type) -> boost.
SENDER_SIGNALS: Dict[Tuple[str, str], float] = {
    ("Il6", "Microglia"): 2.5,
    ("Tgfb1", "Astrocyte"): 2.0,
    ("Ccl2", "Microglia"): 1.8,
    ("Spp1", "Microglia"): 2.2,
}
RECEIVER_SIGNALS: Dict[Tuple[str, str], float] = {
    ("Il6ra", "Endothelial"): 2.2,
    ("Tgfbr2", "Neuron"): 1.8,
    ("Ccr2", "Endothelial"): 1.5,
    ("Cd44", "OPC"): 2.0,
    ("Igf1r", "Neuron"): 1.2,
}


@dataclass
class ExampleData:
    """
    Toy ligand-receptor network with sender and receiver expression.

    Attributes
    ----------
    lr_network : pd.DataFrame
        Columns ``ligand`` and ``receptor``.
    expr_sender : pd.DataFrame
        Genes x sender cell types.
    expr_receiver : pd.DataFrame
        Genes x receiver cell types.
    """

    lr_network: pd.DataFrame
    expr_sender: pd.DataFrame
    expr_receiver: pd.DataFrame


def _gene_universe() -> List[str]:
    """LR genes first (ligand, receptor order), then background genes, unique."""
    genes: List[str] = []
    for gene in [lig for lig, _ in LR_PAIRS] + [rec for _, rec in LR_PAIRS]:
        if gene not in genes:
            genes.append(gene)
    genes.extend(g for g in BACKGROUND_GENES if g not in genes)
    return genes


def _background(
    genes: List[str], cells: List[str], rate: float, rng: np.random.Generator
) -> pd.DataFrame:
    values = rng.exponential(scale=1.0 / rate, size=(len(genes), len(cells)))
    return pd.DataFrame(values, index=genes, columns=cells)


def _add_signals(expr: pd.DataFrame, signals: Dict[Tuple[str, str], float]) -> None:
    for (gene, cell), boost in signals.items():
        expr.loc[gene, cell] += boost


def make_example_data(seed: Optional[int] = 1, rate: float = 1.2) -> ExampleData:
    """
    Generate a small ligand-receptor dataset for demos and testing.

    Background expression is exponential with the given ``rate``; a few
    ligands and receptors get a fixed boost in specific cell types so that
    scoring and plots show clear structure (e.g. Il6 in Microglia with
    Il6ra in Endothelial cells).

    Parameters
    ----------
    seed
        Seed for ``numpy.random.default_rng``; the same seed gives the same data.
    rate
        Rate of the exponential background distribution.
    """
    rng = np.random.default_rng(seed)

    lr_network = pd.DataFrame(LR_PAIRS, columns=["ligand", "receptor"])
    genes = _gene_universe()

    expr_sender = _background(genes, SENDER_CELLS, rate, rng)
    expr_receiver = _background(genes, RECEIVER_CELLS, rate, rng)

    _add_signals(expr_sender, SENDER_SIGNALS)
    _add_signals(expr_receiver, RECEIVER_SIGNALS)

    return ExampleData(
        lr_network=lr_network,
        expr_sender=expr_sender,
        expr_receiver=expr_receiver,
    )
