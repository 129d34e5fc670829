from __future__ import annotations

import sys
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from .config import API_BASE, CONTENT_SUFFIX, INDEX_FILE, REQUEST_TIMEOUT
from .settings import SyncSettings


class GitHubError(Exception):
    def __init__(self, message: str, url: str, status: Optional[int] = None):
        super().__init__(message)
        self.url = url
        self.status = status


def make_client(timeout: float = REQUEST_TIMEOUT) -> httpx.Client:
    return httpx.Client(timeout=timeout, follow_redirects=True)


def contents_url(settings: SyncSettings, path: str) -> str:
    return (
        f"{API_BASE}/repos/{settings.owner}/{settings.repo}/contents/"
        f"{quote(path)}"
    )


def _get(
    client: httpx.Client, url: str, headers: Optional[Dict[str, str]] = None
) -> httpx.Response:
    print("+ GET", url)
    try:
        res = client.get(url, headers=headers)
    except httpx.HTTPError as e:
        raise GitHubError(f"request failed: {e}", url) from e
    if not res.is_success:
        if res.status_code == 403:
            print(
                "! Rate limit exceeded or forbidden. Status 403.",
                file=sys.stderr,
            )
        raise GitHubError(
            f"GitHub API error: {res.status_code} {res.reason_phrase}",
            url,
            status=res.status_code,
        )
    return res


def fetch_listing(
    client: httpx.Client, settings: SyncSettings, category: str
) -> List[Dict[str, Any]]:
    """Directory listing for <base_path>/<category> via the contents API."""
    url = contents_url(settings, f"{settings.base_path}/{category}")
    headers = {"Accept": "application/vnd.github+json"}
    if settings.token:
        headers["Authorization"] = f"token {settings.token}"

    res = _get(client, url, headers=headers)
    try:
        entries = res.json()
    except ValueError as e:
        raise GitHubError("listing is not JSON", url, res.status_code) from e
    if not isinstance(entries, list):
        raise GitHubError("listing is not a directory", url, res.status_code)
    return entries


def content_files(entries: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        e for e in entries
        if isinstance(e, dict)
        and str(e.get("name", "")).endswith(CONTENT_SUFFIX)
        and e.get("name") != INDEX_FILE
        and e.get("download_url")
    ]


def fetch_text(client: httpx.Client, download_url: str) -> str:
    # raw downloads go out without credentials
    return _get(client, download_url).text
