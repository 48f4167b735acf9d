"""
Markdown Generator Package

Converts CMS rich-text HTML to Markdown and writes MDX documents with
YAML frontmatter.
"""

from .markdown_generator import MdxGenerator, ExportSummary, build_frontmatter, created_at_timestamp
from .transcoder import MarkdownTranscoder, RichTextConverter, transcode

__version__ = "1.0.0"
__all__ = [
    'MdxGenerator',
    'ExportSummary',
    'MarkdownTranscoder',
    'RichTextConverter',
    'build_frontmatter',
    'created_at_timestamp',
    'transcode',
]
