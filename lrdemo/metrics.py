"""Core metrics."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .catalog import CatalogLike, as_catalog, filter_catalog
from .utils import (
    InvalidScorePolicyError,
    format_pair,
    resolve_rows,
    validate_expression,
)

logger = logging.getLogger(__name__)

RESULT_COLUMNS = [
    "sender",
    "receiver",
    "ligand",
    "receptor",
    "ligand_expr",
    "receptor_expr",
    "lr_score",
    "pair",
    "cellpair",
]

_STRING_COLUMNS = {"sender", "receiver", "ligand", "receptor", "pair", "cellpair"}


def _product(ligand_expr: np.ndarray, receptor_expr: np.ndarray) -> np.ndarray:
    return ligand_expr * receptor_expr


def _geometric_mean(ligand_expr: np.ndarray, receptor_expr: np.ndarray) -> np.ndarray:
    return np.sqrt(ligand_expr * receptor_expr)


class ScorePolicy(Enum):
    """How ligand and receptor expression are combined into one score."""

    PRODUCT = "product"
    GEOMETRIC_MEAN = "geometric_mean"

    @classmethod
    def from_name(cls, score: Union[str, "ScorePolicy"]) -> "ScorePolicy":
        if isinstance(score, cls):
            return score
        try:
            return cls(score)
        except ValueError:
            raise InvalidScorePolicyError(
                f"Unknown score '{score}'. Choose from {[p.value for p in cls]}"
            ) from None

    def score(self, ligand_expr, receptor_expr) -> np.ndarray:
        """Score paired expression values (array-like, non-negative)."""
        fn = _SCORE_FUNCTIONS[self]
        return fn(
            np.asarray(ligand_expr, dtype=float),
            np.asarray(receptor_expr, dtype=float),
        )


_SCORE_FUNCTIONS = {
    ScorePolicy.PRODUCT: _product,
    ScorePolicy.GEOMETRIC_MEAN: _geometric_mean,
}


@dataclass
class ScoringConfig:
    """
    Parameters of a scoring run.

    Attributes
    ----------
    sender_cutoff : float
        Minimum ligand expression (inclusive) for a sender to count as active.
    receiver_cutoff : float
        Minimum receptor expression (inclusive) for a receiver to count as active.
    score : ScorePolicy
        Scoring function; strings such as ``"geometric_mean"`` are accepted.
    """

    sender_cutoff: float = 1.0
    receiver_cutoff: float = 1.0
    score: ScorePolicy = ScorePolicy.PRODUCT

    def __post_init__(self) -> None:
        self.score = ScorePolicy.from_name(self.score)
        for field_name in ("sender_cutoff", "receiver_cutoff"):
            value = getattr(self, field_name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"{field_name} must be a real number") from None
            if not np.isfinite(value):
                raise ValueError(f"{field_name} must be finite, got {value}")
            setattr(self, field_name, value)


@dataclass(frozen=True)
class ScoredInteraction:
    """One active ligand-receptor pair between one sender and one receiver type."""

    sender: str
    receiver: str
    ligand: str
    receptor: str
    ligand_expr: float
    receptor_expr: float
    lr_score: float
    pair: str
    cellpair: str


def empty_result() -> pd.DataFrame:
    """Result table with the full column schema and no rows."""
    return pd.DataFrame(
        {
            col: pd.Series(dtype=object if col in _STRING_COLUMNS else float)
            for col in RESULT_COLUMNS
        }
    )


def iter_cell_type_pairs(
    senders: Iterable[str], receivers: Iterable[str]
) -> Iterator[Tuple[str, str]]:
    """Yield every (sender, receiver) cell type combination, senders outermost."""
    receivers = list(receivers)
    for sender in senders:
        for receiver in receivers:
            yield sender, receiver


def _score_cell_pair(
    sender: str,
    receiver: str,
    catalog: pd.DataFrame,
    ligand_expr: np.ndarray,
    receptor_expr: np.ndarray,
    config: ScoringConfig,
) -> Optional[pd.DataFrame]:
    """Score the active catalog entries for one (sender, receiver) combination."""
    active = (ligand_expr >= config.sender_cutoff) & (
        receptor_expr >= config.receiver_cutoff
    )
    if not active.any():
        return None

    lig = ligand_expr[active]
    rec = receptor_expr[active]
    return pd.DataFrame(
        {
            "sender": sender,
            "receiver": receiver,
            "ligand": catalog["ligand"].to_numpy()[active],
            "receptor": catalog["receptor"].to_numpy()[active],
            "ligand_expr": lig,
            "receptor_expr": rec,
            "lr_score": config.score.score(lig, rec),
            "_order": np.flatnonzero(active),
        }
    )


def score_interactions(
    expr_sender: pd.DataFrame,
    expr_receiver: pd.DataFrame,
    filtered_catalog: CatalogLike,
    config: Optional[ScoringConfig] = None,
) -> pd.DataFrame:
    """
    Score every catalog entry for every sender x receiver cell type pair.

    The catalog is expected to be filtered already (see
    :func:`lrdemo.catalog.filter_catalog`); a gene that is missing from its
    matrix raises :class:`~lrdemo.utils.UnknownGeneOrCellTypeError`.

    Rows are ordered by ``cellpair`` (ascending) and then ``lr_score``
    (descending). Equal scores within a cellpair keep catalog order.

    Returns
    -------
    DataFrame
        Columns ``RESULT_COLUMNS``. Empty, but with all columns, when no
        entry passes both cutoffs.
    """
    config = config or ScoringConfig()
    return _score_validated(
        validate_expression(expr_sender, "sender"),
        validate_expression(expr_receiver, "receiver"),
        as_catalog(filtered_catalog),
        config,
    )


def _score_validated(
    expr_sender: pd.DataFrame,
    expr_receiver: pd.DataFrame,
    catalog: pd.DataFrame,
    config: ScoringConfig,
) -> pd.DataFrame:
    """Scoring loop over matrices and a catalog that were already checked."""
    ligand_expr = pd.DataFrame(
        resolve_rows(expr_sender, catalog["ligand"], "sender"),
        columns=expr_sender.columns,
    )
    receptor_expr = pd.DataFrame(
        resolve_rows(expr_receiver, catalog["receptor"], "receiver"),
        columns=expr_receiver.columns,
    )

    parts: List[pd.DataFrame] = []
    for sender, receiver in iter_cell_type_pairs(
        expr_sender.columns, expr_receiver.columns
    ):
        part = _score_cell_pair(
            sender,
            receiver,
            catalog,
            ligand_expr[sender].to_numpy(),
            receptor_expr[receiver].to_numpy(),
            config,
        )
        if part is not None:
            parts.append(part)

    if not parts:
        logger.debug(
            "No active pairs at sender_cutoff=%s, receiver_cutoff=%s",
            config.sender_cutoff,
            config.receiver_cutoff,
        )
        return empty_result()

    res = pd.concat(parts, ignore_index=True)
    res["pair"] = [
        format_pair(lig, rec) for lig, rec in zip(res["ligand"], res["receptor"])
    ]
    res["cellpair"] = [
        format_pair(s, r) for s, r in zip(res["sender"], res["receiver"])
    ]

    res = res.sort_values(
        ["cellpair", "lr_score", "_order"],
        ascending=[True, False, True],
        kind="mergesort",
    )
    res = res.loc[:, RESULT_COLUMNS].reset_index(drop=True)

    logger.debug(
        "Scored %d active interactions across %d cell type pairs",
        len(res),
        res["cellpair"].nunique(),
    )
    return res


def score_active_lr(
    expr_sender: pd.DataFrame,
    expr_receiver: pd.DataFrame,
    lr_network: CatalogLike,
    sender_cutoff: float = 1.0,
    receiver_cutoff: float = 1.0,
    score: Union[str, ScorePolicy] = "product",
) -> pd.DataFrame:
    """
    Score active ligand-receptor pairs across sender/receiver cell types.

    This is the main entry point.

    Parameters
    ----------
    expr_sender
        Genes x sender cell types, already normalised.
    expr_receiver
        Genes x receiver cell types, already normalised.
    lr_network
        Ligand-receptor catalog with ``ligand`` and ``receptor`` columns.
    sender_cutoff
        Minimum ligand expression to be considered active (inclusive).
    receiver_cutoff
        Minimum receptor expression to be considered active (inclusive).
    score
        ``"product"`` (L * R) or ``"geometric_mean"`` (sqrt(L * R)).

    Returns
    -------
    DataFrame
        One row per active (sender, receiver, catalog entry) with columns:

        ['sender', 'receiver', 'ligand', 'receptor',
         'ligand_expr', 'receptor_expr', 'lr_score',
         'pair', 'cellpair']

    Raises
    ------
    InvalidScorePolicyError
        For an unknown ``score``.
    EmptyCatalogError
        If no catalog entry has its ligand in ``expr_sender`` and its
        receptor in ``expr_receiver``.
    """
    config = ScoringConfig(
        sender_cutoff=sender_cutoff, receiver_cutoff=receiver_cutoff, score=score
    )
    expr_sender = validate_expression(expr_sender, "sender")
    expr_receiver = validate_expression(expr_receiver, "receiver")

    lr = filter_catalog(lr_network, expr_sender.index, expr_receiver.index)
    return _score_validated(expr_sender, expr_receiver, lr, config)


def to_interactions(scored: pd.DataFrame) -> List[ScoredInteraction]:
    """Convert a result table into immutable records, in table order."""
    return [
        ScoredInteraction(**row)
        for row in scored.loc[:, RESULT_COLUMNS].to_dict("records")
    ]


def summarize_pair_scores(scored: pd.DataFrame, top_n: int = 8) -> pd.DataFrame:
    """
    Rank ligand-receptor pairs by their summed score over all cellpairs.

    Ties keep the alphabetical order of the pair labels.

    Returns
    -------
    DataFrame
        Columns ``pair`` and ``lr_score``, at most ``top_n`` rows.
    """
    if top_n < 1:
        raise ValueError("top_n must be at least 1")
    missing = [c for c in ("pair", "lr_score") if c not in scored.columns]
    if missing:
        raise ValueError(f"scored table is missing column(s): {missing}")

    agg = scored.groupby("pair", sort=True)["lr_score"].sum().reset_index()
    agg = agg.sort_values("lr_score", ascending=False, kind="mergesort")
    return agg.head(top_n).reset_index(drop=True)
