from __future__ import annotations

import json
import os
import pathlib
import stat
import tempfile
from datetime import date
from typing import Any, Dict

import yaml

from .config import HEADER_DELIM, ISO_DATE_PREFIX, LEADING_INT


def read_yaml(path: pathlib.Path) -> Any:
    if path.exists():
        return yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    return {}


def _norm_text(s: str) -> str:
    return s.replace('\r\n', '\n').replace('\r', '\n').lstrip('\ufeff')


def parse_int_prefix(s: str) -> int:
    """Leading integer of s ("7/10" -> 7); 0 when there is none."""
    m = LEADING_INT.match(s)
    return int(m.group(1)) if m else 0


def parse_date(v: str) -> date:
    """
    Leading YYYY-MM-DD of v, so "2023-01-17" and "2023-01-17T10:00:00Z"
    both give 2023-01-17. Anything else sorts as date.min.
    """
    m = ISO_DATE_PREFIX.match(v.strip().strip('"').strip("'"))
    if not m:
        return date.min
    try:
        return date(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    except ValueError:
        return date.min


def parse_frontmatter(text: str) -> Dict[str, str]:
    """
    `key: value` lines between a leading `---` line and the next `---`.
    Values stay plain strings; lines without a colon are skipped.
    """
    lines = _norm_text(text).split("\n")
    if not lines or lines[0].rstrip() != HEADER_DELIM:
        return {}

    fm: Dict[str, str] = {}
    for line in lines[1:]:
        if line.rstrip() == HEADER_DELIM:
            return fm
        key, sep, value = line.partition(":")
        if not sep:
            continue
        fm[key.strip()] = value.strip()
    # unterminated header
    return {}


def _file_mode(path: pathlib.Path) -> int:
    """Mode to give the replacement: the old file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_json(path: pathlib.Path, data: Any) -> None:
    """Serialize first, then replace path in one move."""
    payload = json.dumps(data, indent=2, ensure_ascii=False) + "\n"
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(payload)
        # mkstemp creates 0600
        os.chmod(tmp, _file_mode(path))
        os.replace(tmp, path)
    except BaseException:
        pathlib.Path(tmp).unlink(missing_ok=True)
        raise
