#!/usr/bin/env python3
"""
Sync HTB machine write-ups from the Obsidian content repo into the site.

- Lists <base_path>/<category> for each category via the GitHub contents API
- Downloads every write-up (*.md, README.md excluded) from its raw URL
- Reads the `---` header block: name, os, difficulty, pwn_date, summary,
  matrix_enum, matrix_real, matrix_cve, matrix_custom, matrix_ctf
- Writes src/data/machines.json, newest pwnedDate first

A category whose listing fails is skipped with a warning; so is a single
write-up that fails to download. Token: GITHUB_TOKEN env var or .env.

Run from a checkout of the site (paths resolve against it):

    python -m tools.machine_sync.main
"""

from __future__ import annotations

import pathlib
import sys
from typing import List, Optional

import httpx

from .config import OUTPUT_FILE
from .github import (
    GitHubError,
    content_files,
    fetch_listing,
    fetch_text,
    make_client,
)
from .machines import Machine, make_machine, sort_machines
from .settings import SyncSettings, load_settings
from .utils import parse_frontmatter, write_json


def process_category(
    client: httpx.Client, settings: SyncSettings, category: str
) -> List[Machine]:
    print(f"Fetching {category} machines...")
    try:
        entries = fetch_listing(client, settings, category)
    except GitHubError as e:
        print(f"! Could not fetch folder {category}: {e}", file=sys.stderr)
        return []

    machines: List[Machine] = []
    for entry in content_files(entries):
        name = entry["name"]
        print(f"- Syncing {name}...")
        try:
            text = fetch_text(client, entry["download_url"])
        except GitHubError as e:
            print(f"! Could not fetch {name}: {e}", file=sys.stderr)
            continue
        fm = parse_frontmatter(text)
        machines.append(make_machine(fm, name, category, settings))
    return machines


def sync(
    settings: SyncSettings,
    output: pathlib.Path = OUTPUT_FILE,
    client: Optional[httpx.Client] = None,
) -> List[Machine]:
    print("Starting sync with GitHub...")
    if not settings.token:
        print("- no GITHUB_TOKEN, using unauthenticated requests")

    own_client = client is None
    client = client or make_client()
    try:
        all_machines: List[Machine] = []
        for category in settings.categories:
            all_machines.extend(process_category(client, settings, category))
    finally:
        if own_client:
            client.close()

    all_machines = sort_machines(all_machines)
    write_json(output, [m.to_dict() for m in all_machines])
    print(f"✓ Successfully synced {len(all_machines)} machines to {output}")
    return all_machines


def main():
    sync(load_settings())


if __name__ == "__main__":
    main()
