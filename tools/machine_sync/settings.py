from __future__ import annotations

import os
import pathlib
import sys
from dataclasses import dataclass, replace
from typing import NoReturn, Optional, Tuple

from .config import (
    BASE_PATH,
    CATEGORIES,
    ENV_FILE,
    ENV_TOKEN_RE,
    MANIFEST_FILE,
    REPO_BRANCH,
    REPO_NAME,
    REPO_OWNER,
    TOKEN_ENV,
)
from .utils import read_yaml


@dataclass(frozen=True)
class SyncSettings:
    owner: str = REPO_OWNER
    repo: str = REPO_NAME
    branch: str = REPO_BRANCH
    base_path: str = BASE_PATH
    categories: Tuple[str, ...] = CATEGORIES
    token: Optional[str] = None


def read_token(env_file: pathlib.Path = ENV_FILE) -> Optional[str]:
    """
    GITHUB_TOKEN from the environment, else the first matching line of the
    untracked .env file. Empty values count as no token.
    """
    token = os.environ.get(TOKEN_ENV, "").strip()
    if token:
        return token
    if not env_file.exists():
        return None
    m = ENV_TOKEN_RE.search(env_file.read_text(encoding="utf-8"))
    if m and m.group(1).strip():
        return m.group(1).strip()
    return None


def load_settings(
    manifest_path: pathlib.Path = MANIFEST_FILE,
    env_file: pathlib.Path = ENV_FILE,
) -> SyncSettings:
    """
    Defaults from config.py, overridden by an optional sync-manifest.yml:

        owner: DiogoCoutoooo
        repo: Cybersec-Obsidian
        branch: main
        base_path: Tought Process
        categories: [Easy, Medium, Hard, Insane]
    """
    settings = SyncSettings(token=read_token(env_file))

    manifest = read_yaml(manifest_path)
    if not isinstance(manifest, dict):
        _manifest_error(manifest_path, "must be a mapping")

    overrides = {}
    for k in ("owner", "repo", "branch", "base_path"):
        if k not in manifest:
            continue
        if not isinstance(manifest[k], str) or not manifest[k].strip():
            _manifest_error(manifest_path, f"{k} must be a non-empty string")
        overrides[k] = manifest[k].strip()

    if "categories" in manifest:
        categories = manifest["categories"]
        if (
            not isinstance(categories, list)
            or not categories
            or not all(isinstance(c, str) and c.strip() for c in categories)
        ):
            _manifest_error(
                manifest_path, "categories must be a list of folder names"
            )
        overrides["categories"] = tuple(c.strip() for c in categories)
    return replace(settings, **overrides) if overrides else settings


def _manifest_error(manifest_path: pathlib.Path, message: str) -> NoReturn:
    print(f"ERROR: {manifest_path.name}: {message}", file=sys.stderr)
    sys.exit(1)
