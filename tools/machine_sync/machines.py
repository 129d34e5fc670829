from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping
from urllib.parse import quote

from .config import (
    CONTENT_SUFFIX,
    DEFAULT_MATRIX_SCORE,
    DEFAULT_OS,
    DEFAULT_PWNED_DATE,
    MATRIX_KEYS,
    MATRIX_SCALE,
    MEDIA_DIR,
    RAW_BASE,
)
from .settings import SyncSettings
from .utils import parse_date, parse_int_prefix


@dataclass(frozen=True)
class Machine:
    id: str
    title: str
    os: str
    difficulty: str
    pwnedDate: str
    avatar: str
    description: str
    matrix: Mapping[str, int]
    folder: str

    def __post_init__(self):
        # frozen record, read-only scores
        object.__setattr__(
            self, "matrix", MappingProxyType(dict(self.matrix))
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "os": self.os,
            "difficulty": self.difficulty,
            "pwnedDate": self.pwnedDate,
            "avatar": self.avatar,
            "description": self.description,
            "matrix": dict(self.matrix),
            "folder": self.folder,
        }


# header key -> default, given (title, category)
DEFAULTS: Dict[str, Callable[[str, str], str]] = {
    "os": lambda title, category: DEFAULT_OS,
    "difficulty": lambda title, category: category,
    "pwn_date": lambda title, category: DEFAULT_PWNED_DATE,
    "summary": lambda title, category: (
        f"Write-up and thought process for {title}."
    ),
    **{
        key: (lambda title, category: DEFAULT_MATRIX_SCORE)
        for _, key in MATRIX_KEYS
    },
}


def apply_defaults(
    fm: Dict[str, str], title: str, category: str
) -> Dict[str, str]:
    """Recognized header keys only, with empty/missing values defaulted."""
    return {
        key: fm.get(key) or default(title, category)
        for key, default in DEFAULTS.items()
    }


def title_for(fm: Dict[str, str], file_name: str) -> str:
    if fm.get("name"):
        return fm["name"]
    if file_name.endswith(CONTENT_SUFFIX):
        return file_name[: -len(CONTENT_SUFFIX)]
    return file_name


def avatar_url(settings: SyncSettings, title: str) -> str:
    path = f"{settings.base_path}/{MEDIA_DIR}/!Logo_{title}.png"
    return (
        f"{RAW_BASE}/{settings.owner}/{settings.repo}/{settings.branch}/"
        f"{quote(path, safe='/!')}"
    )


def make_machine(
    fm: Dict[str, str],
    file_name: str,
    category: str,
    settings: SyncSettings,
) -> Machine:
    title = title_for(fm, file_name)
    values = apply_defaults(fm, title, category)
    matrix = {
        dim: parse_int_prefix(values[key]) * MATRIX_SCALE
        for dim, key in MATRIX_KEYS
    }
    return Machine(
        id=title.lower(),
        title=title,
        os=values["os"],
        difficulty=values["difficulty"],
        pwnedDate=values["pwn_date"],
        avatar=avatar_url(settings, title),
        description=values["summary"],
        matrix=matrix,
        folder=category,
    )


def sort_machines(machines: List[Machine]) -> List[Machine]:
    """Newest pwnedDate first; ties keep traversal order."""
    return sorted(machines, key=lambda m: parse_date(m.pwnedDate), reverse=True)
