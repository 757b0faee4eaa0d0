"""
Request models for the resource search API
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class SortField(str, Enum):
    """Sortable resource attributes, mapped to their quoted column reference"""
    SUBJECT = "subject"
    EXAM_BOARD = "examboard"
    LEVEL = "level"
    TYPE = "type"
    AVERAGE_RATING = "averagerating"
    TITLE = "title"

    @property
    def column(self) -> str:
        return f'"{self.value}"'


class SortDirection(str, Enum):
    """Sort directions"""
    ASC = "asc"
    DESC = "desc"


class SearchStrategy(str, Enum):
    """Mutually exclusive query construction paths"""
    SEMANTIC = "semantic"
    FULL_TEXT = "full_text"
    FILTER_ONLY = "filter_only"


@dataclass(frozen=True)
class SearchRequest:
    """Canonical, validated search request"""
    query: str = ""
    tags: Tuple[str, ...] = ()
    subject: Optional[str] = None
    exam_board: Optional[str] = None
    level: Optional[str] = None
    type: Optional[str] = None
    limit: int = 20
    offset: int = 0
    sort_field: SortField = SortField.AVERAGE_RATING
    sort_direction: SortDirection = SortDirection.DESC
    fuzzy_enabled: bool = True
    semantic_enabled: bool = False

    @property
    def order_by(self) -> str:
        """Caller-requested ORDER BY term, rendered from the allow-list only"""
        return f"{self.sort_field.column} {self.sort_direction.value.upper()}"
