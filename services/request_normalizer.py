"""
Request Normalizer
Parses raw (string-valued) query parameters into a canonical SearchRequest
"""
from typing import Any, Mapping, Optional
import logging
import re

from models.requests import SearchRequest, SortDirection, SortField
from utils.errors import InvalidRequest
from config import settings

logger = logging.getLogger(__name__)

DEFAULT_SORT = "averagerating:desc"

# PostgreSQL bigint upper bound for LIMIT/OFFSET
MAX_PAGINATION_VALUE = 2 ** 63 - 1

_NON_NEGATIVE_INT = re.compile(r"^[0-9]{1,19}$")
_SORT_FIELDS = {field.value: field for field in SortField}


def _text(params: Mapping[str, Any], key: str) -> str:
    value = params.get(key)
    if value is None:
        return ""
    return str(value)


def _optional(params: Mapping[str, Any], key: str) -> Optional[str]:
    return _text(params, key) or None


def parse_tags(raw: str) -> tuple:
    """Split a comma-delimited tag list, keeping each element verbatim"""
    if not raw:
        return ()
    return tuple(raw.split(","))


def parse_non_negative_int(raw: str, field: str, default: int) -> int:
    """
    Parse a pagination value as a non-negative base-10 integer

    Raises:
        InvalidRequest: If the value is non-numeric, negative or above the
            bigint range
    """
    if raw == "":
        return default
    if not _NON_NEGATIVE_INT.match(raw):
        raise InvalidRequest(field, f"{field} must be a non-negative integer, got {raw[:32]!r}")

    value = int(raw)
    if value > MAX_PAGINATION_VALUE:
        raise InvalidRequest(field, f"{field} must not exceed {MAX_PAGINATION_VALUE}")
    return value


def parse_sort(raw: str) -> tuple:
    """
    Parse `field[:direction]` into an allow-listed (SortField, SortDirection)

    An empty field falls back to averagerating DESC. Any direction other than
    exactly "asc" or "desc" collapses to DESC.

    Raises:
        InvalidRequest: If the field is not a sortable attribute
    """
    field_name, _, direction = (raw or DEFAULT_SORT).partition(":")

    if not field_name:
        return SortField.AVERAGE_RATING, SortDirection.DESC

    sort_field = _SORT_FIELDS.get(field_name)
    if sort_field is None:
        raise InvalidRequest(
            "sort",
            f"Cannot sort by {field_name!r}; allowed fields: {', '.join(sorted(_SORT_FIELDS))}"
        )

    if direction == SortDirection.ASC.value:
        return sort_field, SortDirection.ASC
    return sort_field, SortDirection.DESC


def normalize_search_params(
    params: Mapping[str, Any],
    default_limit: Optional[int] = None,
    max_limit: Optional[int] = None
) -> SearchRequest:
    """
    Build a canonical SearchRequest from raw query parameters

    Args:
        params: Raw query parameters (query, tags, subject, examboard, level,
            type, limit, offset, sort, fuzzy, semantic)
        default_limit: Page size used when limit is absent
        max_limit: Upper bound that limit is clamped to

    Returns:
        Validated, immutable SearchRequest

    Raises:
        InvalidRequest: On non-numeric/negative pagination or a disallowed sort field
    """
    if default_limit is None:
        default_limit = settings.default_page_size
    if max_limit is None:
        max_limit = settings.max_page_size

    limit = parse_non_negative_int(_text(params, "limit"), "limit", default_limit)
    if limit > max_limit:
        logger.debug(f"Clamping limit {limit} to {max_limit}")
        limit = max_limit

    offset = parse_non_negative_int(_text(params, "offset"), "offset", 0)
    sort_field, sort_direction = parse_sort(_text(params, "sort"))

    fuzzy = _text(params, "fuzzy") or "true"
    semantic = _text(params, "semantic") or "false"

    return SearchRequest(
        query=_text(params, "query"),
        tags=parse_tags(_text(params, "tags")),
        subject=_optional(params, "subject"),
        exam_board=_optional(params, "examboard"),
        level=_optional(params, "level"),
        type=_optional(params, "type"),
        limit=limit,
        offset=offset,
        sort_field=sort_field,
        sort_direction=sort_direction,
        fuzzy_enabled=fuzzy == "true",
        semantic_enabled=semantic == "true",
    )
