"""
Strategy Selector / Query Compiler

Chooses one of three mutually exclusive search strategies and compiles it
into a single parameterized PostgreSQL query:

1. Semantic     - pgvector distance against the query embedding
2. Full-text    - tsvector match, optionally OR'd with a pg_trgm title match
3. Filter-only  - filter predicates and the caller's sort

Placeholders are numbered strictly in bind order. The compiler is pure:
the same request always compiles to the same SQL text and parameters.
"""
from typing import Optional, Sequence
import logging
import re

from models.plan import PredicateSet, QueryPlan
from models.requests import SearchRequest, SearchStrategy
from services.predicate_builder import build_predicates
from config import settings

logger = logging.getLogger(__name__)

RESOURCE_TABLE = '"resources"'
RESOURCE_COLUMNS = 'id, title, description, "averagerating", subject, "examboard", level, type'

_LANGUAGE = re.compile(r"^[a-z_]+$")
_PLACEHOLDER = re.compile(r"\$(\d+)")


def select_strategy(request: SearchRequest) -> SearchStrategy:
    """Semantic wins over full-text; an empty query is always filter-only"""
    if not request.query:
        return SearchStrategy.FILTER_ONLY
    if request.semantic_enabled:
        return SearchStrategy.SEMANTIC
    return SearchStrategy.FULL_TEXT


def to_vector_literal(embedding: Sequence[float]) -> str:
    """Encode an embedding as a pgvector literal, e.g. [0.1,0.2,0.3]"""
    return "[" + ",".join(str(float(x)) for x in embedding) + "]"


def _render(score_columns: Sequence[str], predicates: PredicateSet, order_keys: Sequence[str]) -> str:
    """Assemble the final statement, binding limit and offset after every other value"""
    lines = [f"SELECT {', '.join((RESOURCE_COLUMNS, *score_columns))}", f"FROM {RESOURCE_TABLE}"]
    if predicates.where_clause:
        lines.append(predicates.where_clause)
    lines.append(f"ORDER BY {', '.join(order_keys)}")
    lines.append(f"LIMIT {predicates.placeholder()} OFFSET {predicates.placeholder(1)}")
    return "\n".join(lines)


def _check_placeholders(sql: str, params: tuple) -> None:
    numbers = {int(n) for n in _PLACEHOLDER.findall(sql)}
    if numbers != set(range(1, len(params) + 1)):
        raise ValueError(
            f"Placeholder mismatch: query references {sorted(numbers)} "
            f"but {len(params)} parameters are bound"
        )


def _compile_semantic(request, predicates, query_vector) -> tuple:
    if query_vector is None:
        raise ValueError("Semantic strategy requires a query embedding")

    vector_slot = predicates.placeholder()
    score = f"1 - (embedding <-> {vector_slot}::vector) AS semantic_score"
    order_keys = ("semantic_score DESC", request.order_by)

    bound = predicates.bind(to_vector_literal(query_vector))
    return [score], bound, order_keys


def _compile_full_text(request, predicates, language) -> tuple:
    text_slot = predicates.placeholder()
    tsquery = f"plainto_tsquery('{language}', {text_slot})"
    condition = f'"search_tsv" @@ {tsquery}'
    columns = [f'ts_rank("search_tsv", {tsquery}) AS rank']

    if request.fuzzy_enabled:
        # Query text is bound a second time for the trigram match
        fuzzy_slot = predicates.placeholder(1)
        condition = f'({condition} OR "title" % {fuzzy_slot})'
        columns.append(f'similarity("title", {fuzzy_slot}) AS fuzzy_score')
        bound = predicates.append(condition, request.query, request.query)
    else:
        columns.append("0 AS fuzzy_score")
        bound = predicates.append(condition, request.query)

    order_keys = ("rank DESC", "fuzzy_score DESC", request.order_by)
    return columns, bound, order_keys


def compile_query(
    request: SearchRequest,
    predicates: Optional[PredicateSet] = None,
    query_vector: Optional[Sequence[float]] = None,
    language: Optional[str] = None
) -> QueryPlan:
    """
    Compile a search request into a QueryPlan

    Args:
        request: Canonical search request
        predicates: Filter predicates (built from the request when omitted)
        query_vector: Query embedding, required for the semantic strategy
        language: Text search configuration for plainto_tsquery/ts_rank

    Returns:
        Immutable QueryPlan with SQL text, ordered parameters, strategy and
        tie-break chain

    Raises:
        ValueError: If the semantic strategy has no vector, the language is not
            a plain identifier, or placeholders and parameters disagree
    """
    if predicates is None:
        predicates = build_predicates(request)
    language = language or settings.text_search_language
    if not _LANGUAGE.match(language):
        raise ValueError(f"Invalid text search language: {language!r}")

    strategy = select_strategy(request)

    if strategy == SearchStrategy.SEMANTIC:
        columns, bound, order_keys = _compile_semantic(request, predicates, query_vector)
    elif strategy == SearchStrategy.FULL_TEXT:
        columns, bound, order_keys = _compile_full_text(request, predicates, language)
    else:
        columns, bound, order_keys = [], predicates, (request.order_by,)

    sql = _render(columns, bound, order_keys)
    params = bound.values + (request.limit, request.offset)
    _check_placeholders(sql, params)

    logger.debug(f"Compiled {strategy.value} query with {len(params)} parameters")

    return QueryPlan(
        sql=sql,
        params=params,
        strategy=strategy,
        tie_break_chain=tuple(order_keys),
    )
