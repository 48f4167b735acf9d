#!/usr/bin/env python3
"""
Setup script for cms2mdx
"""

from setuptools import setup, find_packages
import os

HERE = os.path.dirname(os.path.abspath(__file__))


# Read requirements from requirements.txt
def read_requirements():
    with open(os.path.join(HERE, 'requirements.txt'), 'r') as f:
        return [line.strip() for line in f if line.strip() and not line.startswith('#')]


# Read long description from README
def read_long_description():
    readme = os.path.join(HERE, 'README.md')
    if os.path.exists(readme):
        with open(readme, 'r', encoding='utf-8') as f:
            return f.read()
    return "A Python CLI that exports microCMS articles to MDX files with YAML frontmatter"


setup(
    name="cms2mdx",
    version="1.0.0",
    description="A Python CLI that exports microCMS articles to MDX files with YAML frontmatter",
    long_description=read_long_description(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["src", "generators", "generators.*"]),
    install_requires=read_requirements(),
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "cms2mdx=src.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Internet :: WWW/HTTP",
        "Topic :: Text Processing :: Markup :: HTML",
        "Topic :: Text Processing :: Markup :: Markdown",
        "Topic :: Utilities",
    ],
    keywords="microcms headless-cms mdx markdown html-to-markdown cli",
    include_package_data=True,
    package_data={
        "": ["*.yaml", "*.yml", "*.json", "*.txt"],
    },
)
