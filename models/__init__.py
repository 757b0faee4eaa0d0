"""
Data models for the Resource Search Service
"""
from .requests import SearchRequest, SearchStrategy, SortDirection, SortField
from .responses import SearchResponse, ResourceHit, ErrorResponse
from .plan import PredicateSet, QueryPlan

__all__ = [
    # Request
    "SearchRequest",
    "SearchStrategy",
    "SortDirection",
    "SortField",
    # Response
    "SearchResponse",
    "ResourceHit",
    "ErrorResponse",
    # Compiled query
    "PredicateSet",
    "QueryPlan",
]
