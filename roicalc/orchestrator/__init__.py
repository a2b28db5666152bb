from .merge import MergeEntry, merge_inputs, merge_suggestions
from .query_classifier import build_lookup_request, classify_query
from .session import CalculatorSession

__all__ = [
    "CalculatorSession",
    "MergeEntry",
    "build_lookup_request",
    "classify_query",
    "merge_inputs",
    "merge_suggestions",
]
