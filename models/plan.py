"""
Compiled query artifacts

PredicateSet and QueryPlan are immutable: every append on a PredicateSet
returns a new instance, so the positional parameter cursor can never drift
away from the values it numbers.
"""
from dataclasses import dataclass
from typing import Any, Tuple

from models.requests import SearchStrategy


@dataclass(frozen=True)
class PredicateSet:
    """Filter predicates with their bound values and the next free `$n` slot"""
    fragments: Tuple[str, ...] = ()
    values: Tuple[Any, ...] = ()
    next_index: int = 1

    def placeholder(self, offset: int = 0) -> str:
        return f"${self.next_index + offset}"

    def append(self, fragment: str, *values: Any) -> "PredicateSet":
        """Return a new set with `fragment` added and `values` bound after the existing ones"""
        return PredicateSet(
            fragments=self.fragments + (fragment,),
            values=self.values + tuple(values),
            next_index=self.next_index + len(values),
        )

    def bind(self, *values: Any) -> "PredicateSet":
        """Return a new set with extra values bound but no predicate added"""
        return PredicateSet(
            fragments=self.fragments,
            values=self.values + tuple(values),
            next_index=self.next_index + len(values),
        )

    @property
    def condition(self) -> str:
        return " AND ".join(self.fragments)

    @property
    def where_clause(self) -> str:
        if not self.fragments:
            return ""
        return f"WHERE {self.condition}"


@dataclass(frozen=True)
class QueryPlan:
    """Final parameterized query plus its execution contract"""
    sql: str
    params: Tuple[Any, ...]
    strategy: SearchStrategy
    tie_break_chain: Tuple[str, ...]

    @property
    def param_count(self) -> int:
        return len(self.params)
