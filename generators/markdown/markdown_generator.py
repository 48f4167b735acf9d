"""
MDX Generator

Builds one MDX document per article: YAML frontmatter followed by the
article body converted from CMS rich text to Markdown.
"""

import os
import math
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional, Tuple

import yaml

from .. import BaseGenerator
from .transcoder import MarkdownTranscoder


class QuotedString(str):
    """Frontmatter value that is always emitted double-quoted."""


class FrontmatterDumper(yaml.SafeDumper):
    """Indents block lists under their key."""

    def increase_indent(self, flow=False, indentless=False):
        return super().increase_indent(flow, False)


def _represent_quoted(dumper, data):
    return dumper.represent_scalar('tag:yaml.org,2002:str', str(data), style='"')


FrontmatterDumper.add_representer(QuotedString, _represent_quoted)


def _quoted(value):
    return QuotedString(value) if isinstance(value, str) else value


@dataclass
class ExportSummary:
    """Outcome of writing a batch of articles."""
    total: int = 0
    written_paths: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return len(self.written_paths)


def created_at_timestamp(created_at: str) -> int:
    """Whole seconds since the epoch for an ISO 8601 createdAt value."""
    if not created_at:
        raise ValueError("Article has no createdAt")
    parsed = datetime.fromisoformat(created_at.replace('Z', '+00:00'))
    return math.floor(parsed.timestamp())


def build_frontmatter(article: Dict[str, Any]) -> str:
    """Render the frontmatter block, including its --- delimiters."""
    data = {
        'title': _quoted(article.get('title') or ''),
        'createdAt': _quoted(article.get('createdAt')),
        'updatedAt': _quoted(article.get('updatedAt')),
    }

    if article.get('publishedAt'):
        data['publishedAt'] = _quoted(article['publishedAt'])
    if article.get('revisedAt'):
        data['revisedAt'] = _quoted(article['revisedAt'])
    if article.get('category'):
        data['category'] = _quoted(article['category'].get('name'))
    if article.get('tags'):
        data['tags'] = [_quoted(tag.get('name')) for tag in article['tags']]

    toc_visible = article.get('toc_visible', article.get('tocVisible'))
    if toc_visible is not None:
        data['toc_visible'] = toc_visible

    body = yaml.dump(
        data,
        Dumper=FrontmatterDumper,
        allow_unicode=True,
        sort_keys=False,
        default_flow_style=False,
        width=float('inf'),
    )
    return f"---\n{body}---\n"


class MdxGenerator(BaseGenerator):
    """
    MDX generator for CMS articles.

    Each article becomes <createdAt unix seconds>.<extension> in the output
    directory. Rich-text blocks are transcoded to Markdown, plain-text blocks
    are copied as-is. A failing article is logged and skipped.
    """

    def __init__(self, config: Dict[str, Any], transcoder: Optional[MarkdownTranscoder] = None):
        super().__init__(config)
        self.output_dir = config.get('directories', {}).get('output_dir', 'output')
        self.markdown_config = config.get('markdown', {})
        self.extension = self.markdown_config.get('extension', 'mdx').lstrip('.')
        self.body_field = self.markdown_config.get('body_field', 'htmls')
        self.rich_field_ids = set(self.markdown_config.get('rich_field_ids', ['rich']))
        self.plain_field_ids = set(self.markdown_config.get('plain_field_ids', ['plane']))
        self.disambiguate_collisions = self.markdown_config.get('disambiguate_collisions', False)
        self.transcoder = transcoder or MarkdownTranscoder(options={
            'heading_style': self.markdown_config.get('heading_style', 'ATX'),
            'bullets': self.markdown_config.get('bullets', '-'),
        })

    def validate_config(self) -> bool:
        """Validate markdown generator configuration"""
        if not self.extension:
            self.logger.error("Output file extension must not be empty")
            return False
        if not self.rich_field_ids and not self.plain_field_ids:
            self.logger.error("No rich or plain body field ids configured")
            return False
        return True

    def get_supported_formats(self) -> List[str]:
        return ['mdx', 'md']

    def build_filename(self, article: Dict[str, Any]) -> str:
        return f"{created_at_timestamp(article.get('createdAt'))}.{self.extension}"

    def render_body(self, article: Dict[str, Any]) -> str:
        """Convert the article body blocks (or legacy content) to Markdown."""
        blocks = article.get(self.body_field) or []

        if blocks:
            parts = []
            for block in blocks:
                field_id = block.get('fieldId')
                content = block.get(field_id) if field_id else None

                if not content:
                    self.logger.info(f"Empty '{field_id}' block in article created at {article.get('createdAt')}")
                    continue

                if field_id in self.rich_field_ids:
                    parts.append(self.transcoder.transcode(content))
                elif field_id in self.plain_field_ids:
                    parts.append(content)
                else:
                    self.logger.debug(f"Skipping block with unknown fieldId '{field_id}'")
            return "\n\n".join(parts).strip()

        if article.get('content'):
            return self.transcoder.transcode(article['content'])

        return ""

    def assemble(self, article: Dict[str, Any]) -> Tuple[str, str]:
        """
        Build the filename and file content for an article.

        Args:
            article: Article record from the CMS

        Returns:
            Tuple of (filename, content)
        """
        filename = self.build_filename(article)
        content = build_frontmatter(article) + "\n" + self.render_body(article)
        return filename, content

    def _resolve_collision(self, filename: str, article: Dict[str, Any], used: Dict[str, str]) -> str:
        """Handle two articles of one run mapping to the same filename."""
        label = article.get('id', article.get('title', ''))
        if filename not in used:
            used[filename] = label
            return filename

        if self.disambiguate_collisions and article.get('id'):
            stem, ext = os.path.splitext(filename)
            resolved = f"{stem}-{article['id']}{ext}"
            self.logger.warning(f"{filename} already written for '{used[filename]}', using {resolved}")
            used[resolved] = label
            return resolved

        self.logger.warning(f"{filename} already written for '{used[filename]}', overwriting with '{label}'")
        used[filename] = label
        return filename

    def write_article(self, article: Dict[str, Any], output_dir: str,
                      used: Optional[Dict[str, str]] = None) -> str:
        """Assemble one article and write it; returns the written path."""
        filename, content = self.assemble(article)
        if used is not None:
            filename = self._resolve_collision(filename, article, used)

        file_path = os.path.join(output_dir, filename)
        with open(file_path, 'w', encoding='utf-8') as f:
            f.write(content)

        self.logger.info(f"Saved article: {filename}")
        return file_path

    def generate(self, articles: List[Dict[str, Any]], output_dir: Optional[str] = None,
                 progress=None, **kwargs) -> ExportSummary:
        """
        Write every article to the output directory.

        Args:
            articles: Article records
            output_dir: Target directory, defaults to the configured one
            progress: Optional ProgressTracker updated once per article

        Returns:
            ExportSummary: written paths and failed article labels
        """
        if not self.validate_config():
            raise ValueError("Invalid configuration for MDX generation")

        output_dir = output_dir or self.output_dir
        os.makedirs(output_dir, exist_ok=True)

        self.logger.info(f"Starting MDX generation for {len(articles)} articles")

        summary = ExportSummary(total=len(articles))
        used: Dict[str, str] = {}

        for article in articles:
            try:
                path = self.write_article(article, output_dir, used)
            except Exception as e:
                label = article.get('id') or article.get('title') or '<unknown>'
                self.logger.error(f"Failed to save article {label}: {e}")
                summary.failed.append(label)
                success = False
            else:
                summary.written_paths.append(path)
                success = True

            if progress:
                progress.record_result(success)
                progress.update_phase(1)

        self.logger.info(f"MDX generation complete: {summary.succeeded}/{summary.total} articles")
        return summary
