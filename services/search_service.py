"""
Search Service
Runs one search request end to end:

1. Normalize raw parameters
2. Select strategy and build filter predicates
3. Generate the query embedding (semantic strategy only)
4. Compile and execute the query
5. Assemble the result envelope
"""
from typing import Any, Mapping, Optional
import logging
import time
import uuid

from models.requests import SearchStrategy
from models.responses import ResourceHit, SearchResponse
from services.request_normalizer import normalize_search_params
from services.predicate_builder import build_predicates
from services.query_compiler import compile_query, select_strategy
from utils.database import fetch_rows
from utils.embeddings import get_embedding

logger = logging.getLogger(__name__)


async def search_resources(params: Mapping[str, Any], request_id: Optional[str] = None) -> SearchResponse:
    """
    Execute a resource search

    Args:
        params: Raw query parameters as received at the request boundary
        request_id: Identifier used to correlate log lines

    Returns:
        SearchResponse envelope

    Raises:
        InvalidRequest: Malformed or unsafe parameters (nothing is executed)
        EmbeddingServiceFailure: Query embedding failed (no fallback strategy)
        StoreQueryFailure: The data store rejected or timed out the query
    """
    start_time = time.time()
    request_id = request_id or uuid.uuid4().hex[:8]

    request = normalize_search_params(params)
    strategy = select_strategy(request)
    predicates = build_predicates(request)

    logger.info(
        f"[{request_id}] Search strategy={strategy.value} query={request.query!r} "
        f"filters={len(predicates.values)} limit={request.limit} offset={request.offset}"
    )

    query_vector = None
    if strategy == SearchStrategy.SEMANTIC:
        query_vector = await get_embedding(request.query)

    plan = compile_query(request, predicates, query_vector=query_vector)
    logger.debug(f"[{request_id}] SQL:\n{plan.sql}")

    rows = await fetch_rows(plan.sql, plan.params)
    hits = [ResourceHit.model_validate(row) for row in rows]

    processing_time_ms = int((time.time() - start_time) * 1000)

    logger.info(
        f"[{request_id}] Search completed in {processing_time_ms}ms: "
        f"{len(hits)} hits, strategy={plan.strategy.value}"
    )

    return SearchResponse(
        hits=hits,
        totalHits=len(hits),
        processingTimeMs=processing_time_ms,
        fuzzyEnabled=request.fuzzy_enabled,
        semanticEnabled=request.semantic_enabled,
    )
