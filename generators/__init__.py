#!/usr/bin/env python3
"""
Content Generators Package
==========================

Output format generators for articles fetched from the CMS.

Available generators:
- markdown: MDX/Markdown documents with YAML frontmatter

Base Classes:
- BaseGenerator: Abstract interface for all generators
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Optional
import logging


class BaseGenerator(ABC):
    """Abstract base class for all content generators."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    @abstractmethod
    def generate(self, articles: List[Dict[str, Any]], output_dir: Optional[str] = None, **kwargs):
        """Generate output files from article records.

        Args:
            articles: List of article records
            output_dir: Directory for output files
            **kwargs: Generator-specific options

        Returns:
            Generator-specific summary of the written output
        """
        pass

    @abstractmethod
    def validate_config(self) -> bool:
        """Validate generator configuration.

        Returns:
            bool: True if config is valid, False otherwise
        """
        pass

    def get_supported_formats(self) -> List[str]:
        """Return list of supported output formats."""
        return []


__all__ = ['BaseGenerator']

__version__ = "1.0.0"
