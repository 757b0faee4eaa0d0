"""
Core service modules for the Resource Search Service
"""
from .request_normalizer import normalize_search_params
from .predicate_builder import build_predicates
from .query_compiler import compile_query, select_strategy, to_vector_literal
from .search_service import search_resources

__all__ = [
    "normalize_search_params",
    "build_predicates",
    "compile_query",
    "select_strategy",
    "to_vector_literal",
    "search_resources",
]
