import httpx
import pytest

from tools.machine_sync.github import (
    GitHubError,
    content_files,
    contents_url,
    fetch_listing,
    fetch_text,
)
from tools.machine_sync.settings import SyncSettings


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_contents_url_quotes_path(settings):
    assert contents_url(settings, "Tought Process/Easy") == (
        "https://api.github.com/repos/DiogoCoutoooo/Cybersec-Obsidian/contents/"
        "Tought%20Process/Easy"
    )


def test_listing_sends_token_when_present():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        seen["path"] = request.url.path
        return httpx.Response(200, json=[])

    with _client(handler) as client:
        assert fetch_listing(client, SyncSettings(token="abc"), "Easy") == []
    assert seen["auth"] == "token abc"
    assert seen["path"].endswith("/contents/Tought Process/Easy")


def test_listing_without_token_is_unauthenticated(settings):
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    with _client(handler) as client:
        fetch_listing(client, settings, "Easy")
    assert seen["auth"] is None


def test_listing_403_raises_with_status(settings, capsys):
    with _client(lambda r: httpx.Response(403, json={})) as client:
        with pytest.raises(GitHubError) as exc:
            fetch_listing(client, settings, "Easy")
    assert exc.value.status == 403
    assert "403" in str(exc.value)
    assert "Rate limit exceeded or forbidden" in capsys.readouterr().err


def test_listing_of_a_file_is_an_error(settings):
    with _client(lambda r: httpx.Response(200, json={"name": "x.md"})) as client:
        with pytest.raises(GitHubError):
            fetch_listing(client, settings, "Easy")


def test_listing_non_json_is_an_error(settings):
    with _client(lambda r: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(GitHubError):
            fetch_listing(client, settings, "Easy")


def test_transport_error_becomes_github_error(settings):
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with _client(handler) as client:
        with pytest.raises(GitHubError) as exc:
            fetch_listing(client, settings, "Easy")
    assert exc.value.status is None


def test_fetch_text_never_sends_token():
    seen = {}

    def handler(request):
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, text="---\nname: Forge\n---\n")

    with _client(handler) as client:
        assert fetch_text(client, "https://raw.example/Forge.md").startswith("---")
    assert seen["auth"] is None


def test_content_files_filters_markdown_and_readme():
    entries = [
        {"name": "Forge.md", "download_url": "u1"},
        {"name": "README.md", "download_url": "u2"},
        {"name": "notes.txt", "download_url": "u3"},
        {"name": "!Media", "download_url": None},
        {"name": "Sau.md", "download_url": "u4"},
    ]
    assert [e["name"] for e in content_files(entries)] == ["Forge.md", "Sau.md"]
