"""Filesystem utility helpers."""

from __future__ import annotations

import os


def ensure_dir(path: str) -> None:
    os.makedirs(path, exist_ok=True)


def write_text(path: str, content: str, encoding: str = "utf-8") -> None:
    """Write ``content`` via a sibling temp file so readers never see half a file."""
    dir_part = os.path.dirname(path)
    if dir_part:
        ensure_dir(dir_part)
    tmp_path = f"{path}.tmp"
    with open(tmp_path, "w", encoding=encoding) as fh:
        fh.write(content)
    os.replace(tmp_path, path)


def read_text(path: str, encoding: str = "utf-8") -> str:
    with open(path, "r", encoding=encoding) as fh:
        return fh.read()
