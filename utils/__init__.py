"""
Utility modules for the Resource Search Service
"""
from .database import fetch_rows, get_db_pool, close_pool
from .embeddings import get_embedding
from .errors import (
    SearchError,
    InvalidRequest,
    EmbeddingServiceFailure,
    StoreQueryFailure,
)

__all__ = [
    "fetch_rows",
    "get_db_pool",
    "close_pool",
    "get_embedding",
    "SearchError",
    "InvalidRequest",
    "EmbeddingServiceFailure",
    "StoreQueryFailure",
]
