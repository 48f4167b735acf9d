"""
microCMS Client

Thin REST client for the microCMS content API.
"""

import logging
from typing import Dict, Any, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .exceptions import CMSClientError, ConfigurationError


class CMSClient:
    """
    Reads list endpoints of a microCMS service.

    Requests go through a session with retries for rate limiting and
    server errors. Anything that still fails is raised as CMSClientError.
    """

    BASE_URL_TEMPLATE = "https://{service_domain}.microcms.io/api/v1/"
    API_KEY_HEADER = "X-MICROCMS-API-KEY"

    def __init__(self, service_domain: str, api_key: str, config: Optional[Dict[str, Any]] = None):
        if not service_domain or not api_key:
            raise ConfigurationError("microCMS service domain and API key are required")

        config = config or {}
        http_config = config.get('http', {})
        cms_config = config.get('cms', {})

        self.logger = logging.getLogger(__name__)
        self.service_domain = service_domain
        self.base_url = self.BASE_URL_TEMPLATE.format(service_domain=service_domain)
        self.timeout = cms_config.get('timeout', 30)

        try:
            self.session = requests.Session()
            self.session.headers.update({
                self.API_KEY_HEADER: api_key,
                'User-Agent': http_config.get('user_agent', 'cms2mdx/1.0'),
                'Accept': 'application/json',
            })

            retry_strategy = Retry(
                total=http_config.get('max_retries', 3),
                backoff_factor=http_config.get('retry_delay', 1),
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET"],
            )
            adapter = HTTPAdapter(max_retries=retry_strategy)
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        except (TypeError, ValueError) as e:
            raise CMSClientError(f"Could not initialize microCMS client: {e}") from e

    def get(self, endpoint: str, queries: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        Fetch one page of a list endpoint.

        Args:
            endpoint: Endpoint name, e.g. 'articles'
            queries: Query parameters such as offset and limit

        Returns:
            Dict with 'contents' (list of records) and usually 'totalCount'
        """
        url = self.base_url + endpoint.strip('/')
        try:
            response = self.session.get(url, params=queries or {}, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as e:
            raise CMSClientError(f"Request to {url} failed: {e}") from e
        except ValueError as e:
            raise CMSClientError(f"Invalid JSON from {url}: {e}") from e

        if not isinstance(payload, dict) or not isinstance(payload.get('contents'), list):
            raise CMSClientError(f"Unexpected response from {url}: missing 'contents' list")

        return payload

    def close(self):
        self.session.close()
