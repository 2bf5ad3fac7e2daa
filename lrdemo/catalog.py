"""Ligand-receptor catalog handling."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Sequence, Union

import pandas as pd

from .utils import EmptyCatalogError

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = ["ligand", "receptor"]

CatalogLike = Union[pd.DataFrame, Sequence[Sequence[str]], Sequence[Mapping[str, str]]]


def as_catalog(lr_network: CatalogLike) -> pd.DataFrame:
    """
    Normalise a ligand-receptor network to a two-column table.

    Parameters
    ----------
    lr_network
        A DataFrame with ``ligand`` and ``receptor`` columns, a sequence of
        ``(ligand, receptor)`` tuples, or a sequence of dicts with those keys.

    Returns
    -------
    DataFrame
        Columns ``ligand`` and ``receptor`` as strings, input order kept,
        duplicates kept, fresh integer index.
    """
    if isinstance(lr_network, pd.DataFrame):
        df = lr_network
    else:
        records = list(lr_network)
        if records and isinstance(records[0], Mapping):
            df = pd.DataFrame.from_records(records)
        else:
            df = pd.DataFrame(records, columns=CATALOG_COLUMNS)

    missing = [c for c in CATALOG_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"lr_network is missing required column(s): {missing}")

    out = df.loc[:, CATALOG_COLUMNS]
    nulls = out.isna().any(axis=1)
    if nulls.any():
        raise ValueError(
            f"lr_network has missing ligand/receptor values in "
            f"{int(nulls.sum())} row(s), e.g. row {out.index[nulls][0]}"
        )

    out = out.astype(str)
    return out.reset_index(drop=True)


def filter_catalog(
    lr_network: CatalogLike,
    sender_genes: Iterable[str],
    receiver_genes: Iterable[str],
) -> pd.DataFrame:
    """
    Keep catalog entries whose ligand is measured by the senders and whose
    receptor is measured by the receivers.

    Raises
    ------
    EmptyCatalogError
        If no entry survives; scoring cannot proceed without usable pairs.
    """
    catalog = as_catalog(lr_network)
    keep = catalog["ligand"].isin(pd.Index(sender_genes).astype(str)) & catalog[
        "receptor"
    ].isin(pd.Index(receiver_genes).astype(str))
    filtered = catalog.loc[keep].reset_index(drop=True)

    if filtered.empty:
        raise EmptyCatalogError(
            "No ligand/receptor genes found in the provided expression matrices."
        )

    logger.debug(
        "Kept %d of %d ligand-receptor entries", len(filtered), len(catalog)
    )
    return filtered
