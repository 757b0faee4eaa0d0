"""
Predicate Builder
Turns canonical filters into positionally-parameterized WHERE predicates
"""
from models.plan import PredicateSet
from models.requests import SearchRequest

# Exact-match filters, in bind order: (request attribute, column)
SCALAR_FILTERS = (
    ("subject", '"subject"'),
    ("exam_board", '"examboard"'),
    ("level", '"level"'),
    ("type", '"type"'),
)


def add_tag_predicates(predicates: PredicateSet, tags) -> PredicateSet:
    """Require every tag via array containment, AND'ed into a single fragment"""
    if not tags:
        return predicates

    checks = [
        f'"tags" @> ARRAY[{predicates.placeholder(i)}]'
        for i in range(len(tags))
    ]
    return predicates.append(" AND ".join(checks), *tags)


def add_equality_predicate(predicates: PredicateSet, column: str, value) -> PredicateSet:
    if not value:
        return predicates
    return predicates.append(f"{column} = {predicates.placeholder()}", value)


def build_predicates(request: SearchRequest, start_index: int = 1) -> PredicateSet:
    """
    Build filter predicates for a search request

    Tags come first (one slot per tag, input order kept), then subject,
    examboard, level and type, one slot each when present.

    Args:
        request: Canonical search request
        start_index: First free positional parameter number

    Returns:
        PredicateSet whose next_index is start_index + number of bound values
    """
    predicates = PredicateSet(next_index=start_index)
    predicates = add_tag_predicates(predicates, request.tags)

    for attribute, column in SCALAR_FILTERS:
        predicates = add_equality_predicate(predicates, column, getattr(request, attribute))

    return predicates
