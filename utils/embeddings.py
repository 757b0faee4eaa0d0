"""
Embedding generation utilities
"""
import httpx
from typing import Optional
from config import settings
from utils.errors import EmbeddingServiceFailure
import logging
import math

logger = logging.getLogger(__name__)


def _is_finite_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


async def get_embedding(text: str, client: Optional[httpx.AsyncClient] = None) -> list[float]:
    """
    Generate embedding for text using OpenAI API

    Args:
        text: Text to embed
        client: Optional shared HTTP client (a short-lived one is created otherwise)

    Returns:
        Embedding vector as list of floats

    Raises:
        EmbeddingServiceFailure: On HTTP errors, timeouts or malformed responses
    """
    if client is None:
        async with httpx.AsyncClient() as owned_client:
            return await get_embedding(text, client=owned_client)

    try:
        response = await client.post(
            f"{settings.openai_base_url.rstrip('/')}/embeddings",
            headers={
                "Authorization": f"Bearer {settings.openai_api_key}",
                "Content-Type": "application/json"
            },
            json={
                "input": text,
                "model": settings.embedding_model
            },
            timeout=settings.embedding_timeout
        )
        response.raise_for_status()
        data = response.json()
        embedding = data["data"][0]["embedding"]

    except httpx.HTTPError as e:
        logger.error(f"HTTP error generating embedding: {e}")
        raise EmbeddingServiceFailure("Embedding service request failed") from e
    except (KeyError, IndexError, TypeError, ValueError) as e:
        logger.error(f"Malformed embedding response: {e}")
        raise EmbeddingServiceFailure("Embedding service returned an invalid response") from e

    if not isinstance(embedding, list) or not embedding:
        raise EmbeddingServiceFailure("Embedding service returned an empty vector")

    if not all(_is_finite_number(x) for x in embedding):
        logger.error("Embedding response contains non-numeric or non-finite values")
        raise EmbeddingServiceFailure("Embedding service returned an invalid response")

    # Validate dimensions
    if len(embedding) != settings.embedding_dimensions:
        logger.warning(
            f"Embedding dimension mismatch: got {len(embedding)}, "
            f"expected {settings.embedding_dimensions}"
        )

    return embedding
