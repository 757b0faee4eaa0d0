"""
Search error types

Client-caused failures (InvalidRequest) are kept apart from server-caused
ones (EmbeddingServiceFailure, StoreQueryFailure) so the HTTP layer can map
them to distinct status codes.
"""
from typing import Optional


class SearchError(Exception):
    """Base class for all search failures."""

    code = "SEARCH_FAILED"
    status_code = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class InvalidRequest(SearchError):
    """Raised when a search request is malformed or unsafe."""

    code = "INVALID_REQUEST"
    status_code = 400

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message, "field": self.field}


class EmbeddingServiceFailure(SearchError):
    """Raised when the query embedding cannot be generated."""

    code = "EMBEDDING_SERVICE_FAILURE"
    status_code = 502


class StoreQueryFailure(SearchError):
    """Raised when the data store rejects or times out a compiled query."""

    code = "STORE_QUERY_FAILURE"
    status_code = 500

    def __init__(self, message: str, sql: Optional[str] = None, params: tuple = ()):
        self.sql = sql
        self.params = params
        super().__init__(message)
