"""
cms2mdx - export microCMS articles to MDX documents.
"""

__version__ = "1.0.0"
