from .catalog import as_catalog, filter_catalog
from .metrics import (
    RESULT_COLUMNS,
    ScoredInteraction,
    ScorePolicy,
    ScoringConfig,
    iter_cell_type_pairs,
    score_active_lr,
    score_interactions,
    summarize_pair_scores,
    to_interactions,
)
from .utils import (
    EmptyCatalogError,
    InvalidExpressionError,
    InvalidScorePolicyError,
    LRScoringError,
    UnknownGeneOrCellTypeError,
    lookup_expression,
    validate_expression,
)
from .simulation import ExampleData, make_example_data

__all__ = [
    "as_catalog",
    "filter_catalog",
    "RESULT_COLUMNS",
    "ScoredInteraction",
    "ScorePolicy",
    "ScoringConfig",
    "iter_cell_type_pairs",
    "score_active_lr",
    "score_interactions",
    "summarize_pair_scores",
    "to_interactions",
    "EmptyCatalogError",
    "InvalidExpressionError",
    "InvalidScorePolicyError",
    "LRScoringError",
    "UnknownGeneOrCellTypeError",
    "lookup_expression",
    "validate_expression",
    "ExampleData",
    "make_example_data",
]
