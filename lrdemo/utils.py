"""Utility functions."""

from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd

ARROW = " → "


class LRScoringError(Exception):
    """Base class for errors raised by lrdemo."""


class EmptyCatalogError(LRScoringError, ValueError):
    """No ligand-receptor pair has both genes measured in the expression matrices."""


class InvalidScorePolicyError(LRScoringError, ValueError):
    """An unrecognised scoring method was requested."""


class InvalidExpressionError(LRScoringError, ValueError):
    """An expression matrix is malformed (NaN, negative, duplicated labels, ...)."""


class UnknownGeneOrCellTypeError(LRScoringError, KeyError):
    """
    A gene or cell type was looked up in a matrix that does not contain it.

    Attributes
    ----------
    missing : list of str
        Identifiers that could not be resolved.
    matrix : str
        Which matrix was queried (e.g. "sender" or "receiver").
    """

    def __init__(self, missing: Iterable[str], matrix: str = "expression"):
        self.missing = [str(m) for m in missing]
        self.matrix = matrix
        super().__init__(
            f"{len(self.missing)} identifier(s) not found in the {matrix} matrix: "
            f"{', '.join(self.missing[:10])}"
        )

    def __str__(self) -> str:
        return self.args[0]


def format_pair(left: str, right: str) -> str:
    """Label an ordered pair, e.g. ``"Il6 → Il6ra"``."""
    return f"{left}{ARROW}{right}"


def validate_expression(
    matrix: pd.DataFrame, name: str = "expression"
) -> pd.DataFrame:
    """
    Check an expression matrix and return it as a float DataFrame.

    Parameters
    ----------
    matrix
        Genes as rows (index), cell types as columns. Values must already be
        normalised by the caller.
    name
        Label used in error messages ("sender", "receiver", ...).

    Returns
    -------
    DataFrame
        The same table with float values and string labels.

    Raises
    ------
    InvalidExpressionError
        If labels are duplicated or values are non-numeric, NaN, infinite
        or negative.
    """
    if not isinstance(matrix, pd.DataFrame):
        raise InvalidExpressionError(
            f"{name} matrix must be a pandas DataFrame (genes x cell types), "
            f"got {type(matrix).__name__}"
        )

    if matrix.index.has_duplicates:
        dups = matrix.index[matrix.index.duplicated()].unique().tolist()
        raise InvalidExpressionError(f"{name} matrix has duplicated genes: {dups}")
    if matrix.columns.has_duplicates:
        dups = matrix.columns[matrix.columns.duplicated()].unique().tolist()
        raise InvalidExpressionError(
            f"{name} matrix has duplicated cell types: {dups}"
        )

    non_numeric = [
        col
        for col in matrix.columns
        if not pd.api.types.is_numeric_dtype(matrix[col])
        or pd.api.types.is_bool_dtype(matrix[col])
    ]
    if non_numeric:
        raise InvalidExpressionError(
            f"{name} matrix must contain numeric values only; "
            f"non-numeric cell types: {non_numeric}"
        )
    values = matrix.to_numpy(dtype=float)

    if not np.isfinite(values).all():
        raise InvalidExpressionError(
            f"NaN or infinite values detected in {name} matrix; "
            "please handle missing values before scoring."
        )
    if (values < 0).any():
        raise InvalidExpressionError(
            f"Negative values detected in {name} matrix; "
            "expression is expected to be non-negative."
        )

    return pd.DataFrame(
        values,
        index=matrix.index.astype(str),
        columns=matrix.columns.astype(str),
    )


def lookup_expression(
    matrix: pd.DataFrame,
    gene: str,
    cell_type: str,
    name: Optional[str] = None,
) -> float:
    """Return one expression value, failing loudly if either label is absent."""
    name = name or "expression"
    missing = []
    if gene not in matrix.index:
        missing.append(gene)
    if cell_type not in matrix.columns:
        missing.append(cell_type)
    if missing:
        raise UnknownGeneOrCellTypeError(missing, matrix=name)
    return float(matrix.at[gene, cell_type])


def resolve_rows(matrix: pd.DataFrame, genes, name: str) -> np.ndarray:
    """Pull the rows for ``genes`` (in order, duplicates kept) as a 2D array."""
    genes = pd.Index(genes)
    absent = genes[~genes.isin(matrix.index)].unique()
    if len(absent) > 0:
        raise UnknownGeneOrCellTypeError(absent, matrix=name)
    return matrix.loc[genes].to_numpy(dtype=float)
