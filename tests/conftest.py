"""Shared fixtures: a fake GitHub served through httpx.MockTransport."""

from typing import Dict, List

import httpx
import pytest

from tools.machine_sync.settings import SyncSettings


FORGE_MD = (
    "---\n"
    "name: Forge\n"
    "os: Linux\n"
    "difficulty: Medium\n"
    "pwn_date: 2023-01-17\n"
    "---\n"
    "\n"
    "# Forge\n"
)


class FakeGitHub:
    """
    listings: category -> list of file names, or an int status to fail with.
    files: file name -> markdown text, or an int status to fail with.
    """

    def __init__(self, listings: Dict[str, object], files: Dict[str, object]):
        self.listings = listings
        self.files = files
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == "api.github.com":
            category = request.url.path.rsplit("/", 1)[-1]
            listing = self.listings.get(category, 404)
            if isinstance(listing, int):
                return httpx.Response(listing, json={"message": "nope"})
            return httpx.Response(
                200,
                json=[
                    {
                        "name": name,
                        "type": "file",
                        "download_url": f"https://raw.example/{category}/{name}",
                    }
                    for name in listing
                ],
            )
        name = request.url.path.rsplit("/", 1)[-1]
        body = self.files.get(name, 404)
        if isinstance(body, int):
            return httpx.Response(body, text="404: Not Found")
        return httpx.Response(200, text=body)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


@pytest.fixture
def settings():
    return SyncSettings()


@pytest.fixture
def out_file(tmp_path):
    return tmp_path / "src" / "data" / "machines.json"


@pytest.fixture
def forge_md():
    return FORGE_MD


@pytest.fixture
def fake_github():
    return FakeGitHub
