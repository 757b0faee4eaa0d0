"""
Response models for the resource search API
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List, Union
from uuid import UUID


class ResourceHit(BaseModel):
    """A catalogued resource returned by a search"""

    model_config = ConfigDict(extra="ignore")

    id: Union[UUID, int, str]
    title: Optional[str] = None
    description: Optional[str] = None
    averagerating: Optional[float] = None
    subject: Optional[str] = None
    examboard: Optional[str] = None
    level: Optional[str] = None
    type: Optional[str] = None

    # Strategy-specific ranking columns, omitted from responses when not selected
    rank: Optional[float] = None
    fuzzy_score: Optional[float] = None
    semantic_score: Optional[float] = None


class SearchResponse(BaseModel):
    """Result envelope for the search endpoint"""

    hits: List[ResourceHit] = Field(default_factory=list, description="Matching resources")
    totalHits: int = Field(..., description="Number of returned hits (not a total match count)")
    processingTimeMs: int = Field(..., description="Processing time in milliseconds")
    fuzzyEnabled: bool
    semanticEnabled: bool

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "hits": [
                    {
                        "id": "3f1c0a52-6b0e-4c9e-9d4e-2f6a1e7c8b11",
                        "title": "Quadratic equations revision sheet",
                        "description": "Worked examples and practice questions",
                        "averagerating": 4.6,
                        "subject": "Maths",
                        "examboard": "AQA",
                        "level": "GCSE",
                        "type": "worksheet",
                        "rank": 0.0759,
                        "fuzzy_score": 0.31
                    }
                ],
                "totalHits": 1,
                "processingTimeMs": 42,
                "fuzzyEnabled": True,
                "semanticEnabled": False
            }
        }
    )


class ErrorResponse(BaseModel):
    """Error body returned for failed searches"""

    error: str = Field(..., description="Error kind")
    message: str = Field(..., description="Human readable message")
    field: Optional[str] = Field(None, description="Offending request field, if any")
