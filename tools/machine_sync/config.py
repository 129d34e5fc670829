#!/usr/bin/env python3
from __future__ import annotations

import pathlib
import re

# ---------- Paths

# This assumes config.py sits in tools/machine_sync/ at the repo root.
ROOT = pathlib.Path(__file__).resolve().parents[2]
OUTPUT_FILE = ROOT / "src" / "data" / "machines.json"
ENV_FILE = ROOT / ".env"
MANIFEST_FILE = ROOT / "sync-manifest.yml"

# ---------- Source

API_BASE = "https://api.github.com"
RAW_BASE = "https://raw.githubusercontent.com"
REPO_OWNER = "DiogoCoutoooo"
REPO_NAME = "Cybersec-Obsidian"
REPO_BRANCH = "main"
BASE_PATH = "Tought Process"
CATEGORIES = ("Easy", "Medium", "Hard", "Insane")
CONTENT_SUFFIX = ".md"
INDEX_FILE = "README.md"
MEDIA_DIR = "!Media"
REQUEST_TIMEOUT = 30.0
TOKEN_ENV = "GITHUB_TOKEN"

# ---------- Record defaults

DEFAULT_OS = "Linux"
DEFAULT_PWNED_DATE = "2000-01-01"
DEFAULT_MATRIX_SCORE = "50"
MATRIX_SCALE = 10
# output dimension -> header key
MATRIX_KEYS = (
    ("ENUM", "matrix_enum"),
    ("REAL", "matrix_real"),
    ("CVE", "matrix_cve"),
    ("CUSTOM", "matrix_custom"),
    ("CTF", "matrix_ctf"),
)

# Some shared regexes

ENV_TOKEN_RE = re.compile(rf"{TOKEN_ENV}\s*=\s*(.*)")
LEADING_INT = re.compile(r"^\s*([+-]?\d+)")
ISO_DATE_PREFIX = re.compile(r"^(\d{4})-(\d{2})-(\d{2})(?!\d)")
HEADER_DELIM = "---"
