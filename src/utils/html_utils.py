"""HTML helper utilities (regex-light helpers for the fallback scanners)."""

from __future__ import annotations

import html
import re

TAG_RE = re.compile(r"<[^>]+>")
NBSP_RE = re.compile(r"&nbsp;?")
WS_RE = re.compile(r"\s+")
ROW_OPEN_RE = re.compile(r"<tr\b[^>]*>", re.IGNORECASE)
ROW_CLOSE_RE = re.compile(r"</tr\s*>", re.IGNORECASE)
CELL_OPEN_RE = re.compile(r"<t[dh]\b[^>]*>", re.IGNORECASE)


def strip_tags(markup: str) -> str:
    return TAG_RE.sub("", markup)


def clean_cell(text: str) -> str:
    text = strip_tags(text)
    text = NBSP_RE.sub(" ", text)
    text = html.unescape(text)
    text = WS_RE.sub(" ", text).strip()
    return text


def flatten_table_markup(markup: str) -> str:
    """Rewrite table markup as one pipe-delimited line per ``<tr>``.

    ``<tr><td>1</td><td>Lens</td></tr>`` becomes ``| 1 | Lens |``; text outside
    rows is kept but carries no pipes, so pipe scanners ignore it.
    """
    text = ROW_OPEN_RE.sub("\n", WS_RE.sub(" ", markup))
    text = ROW_CLOSE_RE.sub(" |\n", text)
    text = CELL_OPEN_RE.sub(" | ", text)
    lines = [clean_cell(line) for line in text.split("\n")]
    return "\n".join(line for line in lines if line)
