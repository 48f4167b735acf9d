"""
Unit tests for paginated article fetching
"""
import pytest
from unittest.mock import Mock, call

from src.fetcher import ArticleFetcher, FetchResult, DEFAULT_PAGE_LIMIT
from src.exceptions import CMSClientError


class TestArticleFetcher:
    """Test ArticleFetcher pagination"""

    def test_stops_at_total_count(self, mock_client, make_page):
        """Test pages of 100, 100, 37 with a total hint take exactly three requests"""
        mock_client.get.side_effect = [
            make_page(100, 0, total_count=237),
            make_page(100, 100, total_count=237),
            make_page(37, 200, total_count=237),
        ]
        fetcher = ArticleFetcher(mock_client, endpoint='articles')

        result = fetcher.fetch_all()

        assert len(result.articles) == 237
        assert mock_client.get.call_count == 3
        assert result.partial is False
        assert result.total_count == 237
        assert result.pages_fetched == 3
        assert mock_client.get.call_args_list == [
            call('articles', queries={'offset': 0, 'limit': 100}),
            call('articles', queries={'offset': 100, 'limit': 100}),
            call('articles', queries={'offset': 200, 'limit': 100}),
        ]

    def test_stops_on_empty_page_without_total(self, mock_client, make_page):
        """Test without totalCount the loop runs until an empty page"""
        mock_client.get.side_effect = [
            make_page(100, 0),
            make_page(100, 100),
            make_page(37, 200),
            make_page(0, 300),
        ]
        fetcher = ArticleFetcher(mock_client)

        result = fetcher.fetch_all()

        assert len(result) == 237
        assert mock_client.get.call_count == 4
        assert result.total_count is None

    def test_failure_returns_partial_result(self, mock_client, make_page):
        """Test a failing second page keeps the first page's records"""
        error = CMSClientError("boom")
        mock_client.get.side_effect = [make_page(100, 0, total_count=237), error]
        fetcher = ArticleFetcher(mock_client)

        result = fetcher.fetch_all()

        assert len(result.articles) == 100
        assert result.articles[0]['id'] == 'article-0'
        assert result.partial is True
        assert result.error is error
        assert mock_client.get.call_count == 2

    @pytest.mark.parametrize('second_page', [
        RuntimeError("connection pool closed"),
        ['not', 'a', 'page'],
        {'contents': 'not a list'},
    ])
    def test_any_page_failure_keeps_earlier_pages(self, mock_client, make_page, second_page):
        """Test unexpected errors and malformed pages also end the run with a partial result"""
        mock_client.get.side_effect = [make_page(100, 0, total_count=237), second_page]

        result = ArticleFetcher(mock_client).fetch_all()

        assert len(result.articles) == 100
        assert result.partial is True
        assert result.error is not None
        assert result.pages_fetched == 1

    def test_failure_on_first_page(self, mock_client):
        mock_client.get.side_effect = CMSClientError("unreachable")

        result = ArticleFetcher(mock_client).fetch_all()

        assert result.articles == []
        assert result.partial is True

    def test_empty_endpoint(self, mock_client, make_page):
        mock_client.get.return_value = make_page(0, total_count=0)

        result = ArticleFetcher(mock_client).fetch_all()

        assert len(result) == 0
        assert result.partial is False
        assert mock_client.get.call_count == 1

    def test_custom_limit_and_endpoint(self, mock_client, make_page):
        """Test offset advances by the configured limit"""
        mock_client.get.side_effect = [
            make_page(10, 0, total_count=15),
            make_page(5, 10, total_count=15),
        ]

        result = ArticleFetcher(mock_client, endpoint='blogs', limit=10).fetch_all()

        assert len(result) == 15
        mock_client.get.assert_called_with('blogs', queries={'offset': 10, 'limit': 10})

    def test_updates_progress(self, mock_client, make_page):
        progress = Mock()
        mock_client.get.side_effect = [make_page(3, total_count=3)]

        ArticleFetcher(mock_client, progress=progress).fetch_all()

        progress.update_phase.assert_called_once_with(3)

    def test_default_limit(self):
        assert DEFAULT_PAGE_LIMIT == 100
        assert ArticleFetcher(Mock()).limit == 100


class TestFetchResult:
    """Test FetchResult defaults"""

    def test_defaults(self):
        result = FetchResult()

        assert result.articles == []
        assert result.partial is False
        assert result.error is None
        assert len(result) == 0
