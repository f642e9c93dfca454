"""
Hub Catalog Service
Plugin, tag, issue and FAQ catalog for the community hub
"""

__version__ = "1.0.0"
