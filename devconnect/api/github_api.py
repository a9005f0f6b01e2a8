"""GitHub REST client used by the public repository lookup."""

from urllib.parse import quote

import httpx

from devconnect.config import get_settings
from devconnect.logging import get_logger

logger = get_logger("github")

USER_AGENT = "DevConnect/1.0"


def _get_headers() -> dict[str, str]:
    """Get headers for GitHub API requests."""
    return {
        "Accept": "application/vnd.github.v3+json",
        "User-Agent": USER_AGENT,
    }


def build_repos_request(username: str) -> tuple[str, dict[str, str | int]]:
    """Return the URL and query parameters for a user's latest repositories."""
    settings = get_settings()
    url = f"{settings.github_api_url.rstrip('/')}/users/{quote(username, safe='')}/repos"
    params: dict[str, str | int] = {
        "per_page": settings.github_repos_per_page,
        "sort": settings.github_repos_sort,
    }
    if settings.github_client_id:
        params["client_id"] = settings.github_client_id
    if settings.github_client_secret:
        params["client_secret"] = settings.github_client_secret
    return url, params


async def fetch_user_repos(
    username: str,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.Response:
    """
    Request the most recent repositories of a GitHub user.

    The raw response is returned whatever its status; network-level
    failures propagate as ``httpx.HTTPError``.
    """
    settings = get_settings()
    url, params = build_repos_request(username)

    async with httpx.AsyncClient(
        timeout=settings.github_timeout_seconds,
        transport=transport,
    ) as client:
        response = await client.get(url, params=params, headers=_get_headers())

    logger.debug("github_repos_fetched", username=username, status=response.status_code)
    return response


__all__ = ["USER_AGENT", "build_repos_request", "fetch_user_repos"]
