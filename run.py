#!/usr/bin/env python3
"""
cms2mdx - microCMS to MDX exporter
Convenient entry point script in project root.
"""

import sys
import os

# Make src and generators importable from a checkout
project_root = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, project_root)

# Import and run the CLI
from src.cli import main

if __name__ == '__main__':
    try:
        main()
    except KeyboardInterrupt:
        print("\n⚠️  Application interrupted by user")
        sys.exit(1)
