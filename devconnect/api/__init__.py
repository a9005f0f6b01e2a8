"""
External API clients.

Usage:
    from devconnect.api import github_api
    response = await github_api.fetch_user_repos("octocat")
"""

from . import github_api

__all__ = ["github_api"]
