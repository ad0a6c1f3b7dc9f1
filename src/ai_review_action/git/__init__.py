"""
Git Integration Layer

This module runs git against the local working copy and loads
the review ignore file.
"""

from .ignore import load_exclusions
from .repository import GitRepository, build_clone_url

__all__ = ['GitRepository', 'build_clone_url', 'load_exclusions']
