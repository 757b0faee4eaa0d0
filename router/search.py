"""
Search API Router
Handles the resource search endpoint
"""
from fastapi import APIRouter, Query
from typing import Optional
import uuid
import logging

from models.responses import SearchResponse, ErrorResponse
from services.search_service import search_resources

logger = logging.getLogger(__name__)

router = APIRouter(tags=["search"])


@router.get(
    "/search",
    response_model=SearchResponse,
    response_model_exclude_unset=True,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
    },
)
async def search(
    query: Optional[str] = Query(None, description="Search text; empty for filter-only listing"),
    tags: Optional[str] = Query(None, description="Comma-separated tags, all required"),
    subject: Optional[str] = None,
    examboard: Optional[str] = None,
    level: Optional[str] = None,
    type: Optional[str] = None,
    limit: Optional[str] = Query(None, description="Page size (non-negative, clamped to the maximum)"),
    offset: Optional[str] = Query(None, description="Rows to skip"),
    sort: Optional[str] = Query(None, description="field[:asc|desc], e.g. averagerating:desc"),
    fuzzy: Optional[str] = Query(None, description='"true" to OR in trigram title matching'),
    semantic: Optional[str] = Query(None, description='"true" for embedding similarity search'),
):
    """
    Resource search endpoint

    Selects one of three strategies:
    1. Semantic (semantic=true and a query)
    2. Full-text with optional fuzzy title matching (a query)
    3. Filter-only (no query)

    Numeric parameters are taken as strings and validated by the normalizer
    so malformed values surface as INVALID_REQUEST rather than a framework error.
    """
    request_id = uuid.uuid4().hex[:8]

    params = {
        "query": query,
        "tags": tags,
        "subject": subject,
        "examboard": examboard,
        "level": level,
        "type": type,
        "limit": limit,
        "offset": offset,
        "sort": sort,
        "fuzzy": fuzzy,
        "semantic": semantic,
    }

    return await search_resources(params, request_id=request_id)
