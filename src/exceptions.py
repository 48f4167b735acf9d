#!/usr/bin/env python3
"""
Exception Classes
"""

class Cms2MdxError(Exception):
    """Base exception for cms2mdx errors"""
    pass

class ConfigurationError(Cms2MdxError):
    """Raised when required settings such as the service domain or API key are missing"""
    pass

class CMSClientError(Cms2MdxError):
    """Raised when the CMS API cannot be reached or returns an unusable response"""
    pass
