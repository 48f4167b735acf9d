"""
Article Fetcher

Pages through a CMS list endpoint until it is exhausted.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional

from .exceptions import CMSClientError


DEFAULT_PAGE_LIMIT = 100


@dataclass
class FetchResult:
    """Records accumulated by a fetch run."""
    articles: List[Dict[str, Any]] = field(default_factory=list)
    total_count: Optional[int] = None
    pages_fetched: int = 0
    partial: bool = False
    error: Optional[Exception] = None

    def __len__(self) -> int:
        return len(self.articles)


class ArticleFetcher:
    """
    Offset/limit pagination over a single endpoint.

    One page is requested at a time. Fetching stops when a page comes back
    empty or the accumulated count reaches the totalCount reported by the API.
    A failed page ends the run early with whatever was already fetched.
    """

    def __init__(self, client, endpoint: str = 'articles', limit: int = DEFAULT_PAGE_LIMIT,
                 verbose: bool = False, progress=None):
        self.client = client
        self.endpoint = endpoint
        self.limit = limit
        self.verbose = verbose
        self.progress = progress
        self.logger = logging.getLogger(__name__)

    def fetch_all(self) -> FetchResult:
        """
        Fetch every record of the endpoint.

        Returns:
            FetchResult: accumulated records; partial is True when a page
            request failed before the endpoint was exhausted
        """
        result = FetchResult()
        offset = 0
        has_more = True

        self.logger.info(f"Fetching articles from endpoint '{self.endpoint}'")

        while has_more:
            self.logger.info(f"Fetching articles (offset: {offset}, limit: {self.limit})")
            try:
                response = self.client.get(
                    self.endpoint,
                    queries={'offset': offset, 'limit': self.limit},
                )
                contents = response.get('contents') or []
                total_count = response.get('totalCount')
                if not isinstance(contents, list):
                    raise CMSClientError(f"Unexpected 'contents' of type {type(contents).__name__}")
            except Exception as e:
                self.logger.error(f"Failed to fetch articles at offset {offset}: {e}")
                result.partial = True
                result.error = e
                break

            result.pages_fetched += 1

            if self.verbose:
                self.logger.debug(f"API response: total={total_count}, current={len(contents)}")

            if contents:
                result.articles.extend(contents)
                offset += self.limit
                self.logger.info(f"Fetched {len(result.articles)} articles")
                if self.progress:
                    self.progress.update_phase(len(contents))
            else:
                has_more = False

            if total_count:
                result.total_count = total_count
                if len(result.articles) >= total_count:
                    has_more = False

        self.logger.info(f"Fetched {len(result.articles)} articles in total")
        return result
