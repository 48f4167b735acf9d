"""
Test configuration and shared fixtures for cms2mdx tests
"""
import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock

from src.utils import get_default_config


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path)


@pytest.fixture
def sample_config(temp_dir):
    """Default configuration writing into the temporary directory"""
    config = get_default_config()
    config['cms']['service_domain'] = 'example'
    config['cms']['api_key'] = 'test-api-key'
    config['directories']['output_dir'] = str(temp_dir / 'output')
    return config


@pytest.fixture
def sample_article():
    """Article record as returned by the microCMS list API"""
    return {
        'id': 'abc123',
        'title': 'Hello World',
        'createdAt': '2024-01-02T03:04:05.678Z',
        'updatedAt': '2024-01-03T00:00:00.000Z',
        'publishedAt': '2024-01-02T03:04:05.678Z',
        'revisedAt': '2024-01-03T00:00:00.000Z',
        'category': {'id': 'tech', 'name': 'Tech'},
        'tags': [{'id': 't1', 'name': 'python'}, {'id': 't2', 'name': 'cms'}],
        'toc_visible': True,
        'htmls': [
            {'fieldId': 'rich', 'rich': '<h2>Intro</h2><p>Hello <strong>there</strong></p>'},
            {'fieldId': 'plane', 'plane': '<Callout type="info" />'},
        ],
    }


@pytest.fixture
def make_page():
    """Factory for API list responses with `count` records"""
    def _make_page(count, start=0, total_count=None):
        page = {
            'contents': [
                {'id': f'article-{start + i}', 'title': f'Article {start + i}'}
                for i in range(count)
            ],
            'offset': start,
            'limit': 100,
        }
        if total_count is not None:
            page['totalCount'] = total_count
        return page
    return _make_page


@pytest.fixture
def mock_client():
    """CMS client double with a scripted get()"""
    return Mock()
