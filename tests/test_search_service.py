"""
Search Service Tests
=====================

End-to-end orchestration with the embedding service and data store mocked.
"""

import pytest
from unittest.mock import AsyncMock, patch

from services.search_service import search_resources
from utils.errors import EmbeddingServiceFailure, InvalidRequest, StoreQueryFailure


# Mark all tests in this file as async
pytestmark = pytest.mark.asyncio


class TestSearchResources:
    """Test search orchestration per strategy."""

    async def test_filter_only_search(self, mock_fetch_rows, mock_get_embedding):
        response = await search_resources({"subject": "Physics", "limit": "10"})

        mock_get_embedding.assert_not_awaited()
        sql, params = mock_fetch_rows.await_args.args
        assert 'WHERE "subject" = $1' in sql
        assert params == ("Physics", 10, 0)

        assert response.totalHits == 2
        assert len(response.hits) == 2
        assert response.hits[0].title == "Forces and motion revision"
        assert response.fuzzyEnabled is True
        assert response.semanticEnabled is False
        assert response.processingTimeMs >= 0

    async def test_full_text_search_binds_query_twice(self, mock_fetch_rows, mock_get_embedding):
        await search_resources({"query": "algebra", "fuzzy": "true", "semantic": "false"})

        mock_get_embedding.assert_not_awaited()
        sql, params = mock_fetch_rows.await_args.args
        assert "ORDER BY rank DESC, fuzzy_score DESC" in sql
        assert params[:2] == ("algebra", "algebra")

    async def test_semantic_search_embeds_once(self, mock_fetch_rows, mock_get_embedding):
        response = await search_resources({"query": "algebra", "semantic": "true"})

        mock_get_embedding.assert_awaited_once_with("algebra")
        sql, params = mock_fetch_rows.await_args.args
        assert "semantic_score DESC" in sql
        assert "[0.1,0.2,0.3]" in params
        assert response.semanticEnabled is True

    async def test_semantic_flag_without_query_skips_embedding(self, mock_fetch_rows, mock_get_embedding):
        response = await search_resources({"semantic": "true"})

        mock_get_embedding.assert_not_awaited()
        assert response.semanticEnabled is True

    async def test_invalid_request_calls_no_collaborator(self, mock_fetch_rows, mock_get_embedding):
        with pytest.raises(InvalidRequest):
            await search_resources({"query": "algebra", "semantic": "true", "sort": "password:asc"})

        mock_get_embedding.assert_not_awaited()
        mock_fetch_rows.assert_not_awaited()

    async def test_embedding_failure_does_not_fall_back(self, mock_fetch_rows):
        """Test semantic search fails fast instead of degrading to full-text"""
        failing = AsyncMock(side_effect=EmbeddingServiceFailure("Embedding service request failed"))

        with patch("services.search_service.get_embedding", new=failing):
            with pytest.raises(EmbeddingServiceFailure):
                await search_resources({"query": "algebra", "semantic": "true"})

        mock_fetch_rows.assert_not_awaited()

    async def test_store_failure_propagates(self, mock_get_embedding):
        failing = AsyncMock(side_effect=StoreQueryFailure("Search query failed"))

        with patch("services.search_service.fetch_rows", new=failing):
            with pytest.raises(StoreQueryFailure):
                await search_resources({"query": "algebra"})

    async def test_total_hits_counts_returned_rows(self, mock_get_embedding):
        rows = [{"id": i, "title": f"Resource {i}"} for i in range(3)]

        with patch("services.search_service.fetch_rows", new=AsyncMock(return_value=rows)):
            response = await search_resources({"limit": "3"})

        assert response.totalHits == 3
        assert [hit.id for hit in response.hits] == [0, 1, 2]

    async def test_score_columns_mapped_onto_hits(self, mock_get_embedding):
        rows = [{"id": "r1", "title": "Algebra basics", "rank": 0.42, "fuzzy_score": 0.7}]

        with patch("services.search_service.fetch_rows", new=AsyncMock(return_value=rows)):
            response = await search_resources({"query": "algebra"})

        assert response.hits[0].rank == 0.42
        assert response.hits[0].fuzzy_score == 0.7
        assert response.hits[0].semantic_score is None
