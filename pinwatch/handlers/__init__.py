"""
Handlers package - Upstream resolvers, one per spec kind.
"""

from .base_handler import BaseHandler
from .npm_handler import NpmHandler, fetch_latest_npm_version
from .git_handler import GitHandler, git_ls_remote, fetch_latest_git_sha, resolve_git_ref

__all__ = [
    'BaseHandler',
    'NpmHandler',
    'GitHandler',
    'fetch_latest_npm_version',
    'git_ls_remote',
    'fetch_latest_git_sha',
    'resolve_git_ref',
]
