"""Transfermarkt standings parsing (form table per round window, home/away/final tables).

Example round window URL:
  https://www.transfermarkt.fr/ligue-1/formtabelle/wettbewerb/FR1?saison_id=2025&min=1&max=1
"""

from __future__ import annotations

import re
from typing import List, Optional, Tuple, Union
from urllib.parse import urlencode

from config import settings
from domain.models import ClubRow, SnapshotType
from parsing.extractor import (
    Document,
    ExtractionParams,
    ExtractionResult,
    as_document,
    run_strategies,
)
from parsing.rows import collect_rows
from utils import html_utils
from utils.normalizer import normalize_season, parse_int_safe, season_start_year, strip_rank_prefix

NAME_RE = re.compile(r"[^\W\d_]{3,}")
GOALS_RE = re.compile(r"^(\d+)\s*:\s*(\d+)$")
# Rank printed inside the name cell ("1. RC Lens")
NAME_RANK_RE = re.compile(r"^\s*(\d+)\s*\.?\s+")
ROW_SPLIT_RE = re.compile(r"<tr\b", re.IGNORECASE)
ROW_END_RE = re.compile(r"</tr\s*>", re.IGNORECASE)
FIRST_CELL_POS_RE = re.compile(r"^[^>]*>\s*<td[^>]*>\s*(?:<[^>]+>\s*)*(\d+)", re.IGNORECASE)
ANCHOR_RE = re.compile(r"<a\b[^>]*>([^<]+)</a>", re.IGNORECASE)
NUMERIC_CELL_RE = re.compile(r"<td[^>]*>\s*([+\-−]?\d+)\s*</td>", re.IGNORECASE)

# view -> (page slug, snapshot type); round windows use the form table
TABLE_VIEWS = {
    "home": ("heimtabelle", SnapshotType.HOME),
    "away": ("auswaertstabelle", SnapshotType.AWAY),
    "final": ("tabelle", SnapshotType.FINAL_STANDINGS),
}


def round_window(params: ExtractionParams) -> Tuple[int, int]:
    low = params.min_round or 1
    high = params.max_round or low
    return low, max(low, high)


def _locate_table(document: Document):
    table = document.soup.select_one("table.items")
    if table is not None:
        return table
    tables = document.soup.find_all("table")
    for t in tables:
        rows = [cells for cells in (_direct_cells(tr) for tr in _own_rows(t)) if cells]
        if not rows:
            continue
        numeric_first = sum(1 for cells in rows if parse_int_safe(cells[0].get_text()) is not None)
        if numeric_first * 2 >= len(rows):
            return t
    return tables[0] if tables else None


def _own_rows(table) -> list:
    return [tr for tr in table.find_all("tr") if tr.find_parent("table") is table]


def _direct_cells(tr) -> list:
    return tr.find_all("td", recursive=False)


def _row_candidate(cells: List[str]) -> Optional[dict]:
    name_idx = next((i for i, c in enumerate(cells) if NAME_RE.search(c)), None)
    if name_idx is None:
        return None
    before, rest = cells[:name_idx], cells[name_idx + 1 :]
    position = next((c for c in before if parse_int_safe(c) is not None), None)
    if position is None:
        m = NAME_RANK_RE.match(cells[name_idx])
        position = m.group(1) if m else None
    candidate: dict = {"name": strip_rank_prefix(cells[name_idx]), "position": position}
    numeric_rest = [c for c in rest if not GOALS_RE.match(c) and parse_int_safe(c) is not None]
    if numeric_rest:
        candidate["points"] = numeric_rest[-1]

    goals_idx = next((i for i, c in enumerate(rest) if GOALS_RE.match(c)), None)
    if goals_idx is not None and goals_idx >= 4:
        goals = GOALS_RE.match(rest[goals_idx])
        candidate.update(
            played=rest[goals_idx - 4],
            wins=rest[goals_idx - 3],
            draws=rest[goals_idx - 2],
            losses=rest[goals_idx - 1],
            goals_for=goals.group(1),
            goals_against=goals.group(2),
        )
        if goals_idx + 1 < len(rest):
            candidate["goal_difference"] = rest[goals_idx + 1]
    return candidate


def extract_table_rows(document: Document, params: ExtractionParams) -> List[ClubRow]:
    """Structured strategy over ``table.items`` (or the most plausible table)."""
    table = _locate_table(document)
    if table is None:
        return []
    candidates = []
    for tr in _own_rows(table):
        tds = _direct_cells(tr)
        if len(tds) < 2:
            continue
        cells = [html_utils.clean_cell(td.get_text(" ", strip=True)) for td in tds]
        candidate = _row_candidate(cells)
        if candidate is not None:
            candidates.append(candidate)
    return collect_rows(candidates)


def extract_markup_rows(document: Document, params: ExtractionParams) -> List[ClubRow]:
    """Fallback strategy: coarse regex scan of ``<tr>`` fragments in the raw markup.

    Keeps only position, name (first anchor text) and points (last numeric cell).
    Unclosed rows are tolerated since fragments are split on ``<tr``.
    """
    candidates = []
    for fragment in ROW_SPLIT_RE.split(document.raw)[1:]:
        fragment = ROW_END_RE.split(fragment, maxsplit=1)[0]
        pos = FIRST_CELL_POS_RE.search(fragment)
        if not pos:
            continue
        name = next(
            (a for a in ANCHOR_RE.findall(fragment) if NAME_RE.search(a)),
            None,
        )
        if name is None:
            continue
        numbers = NUMERIC_CELL_RE.findall(fragment)
        candidates.append(
            {
                "position": pos.group(1),
                "name": strip_rank_prefix(html_utils.clean_cell(name)),
                "points": numbers[-1] if numbers else None,
            }
        )
    return collect_rows(candidates)


class TransfermarktExtractor:
    source_id = "transfermarkt"
    source_label = "transfermarkt"
    strategies = (extract_table_rows, extract_markup_rows)

    def _season(self, params: ExtractionParams) -> str:
        return normalize_season(params.season) or settings.DEFAULT_SEASON

    def build_url(self, params: ExtractionParams) -> str:
        season_id = season_start_year(self._season(params))
        base = f"{settings.TRANSFERMARKT_BASE}/{{slug}}/wettbewerb/{settings.TRANSFERMARKT_COMPETITION}"
        if params.view in TABLE_VIEWS:
            slug, _ = TABLE_VIEWS[params.view]
            return f"{base.format(slug=slug)}/saison_id/{season_id}"
        low, high = round_window(params)
        query = urlencode({"saison_id": season_id, "min": low, "max": high})
        return f"{base.format(slug='formtabelle')}?{query}"

    def extract(
        self, document: Union[Document, str, bytes], params: ExtractionParams
    ) -> ExtractionResult:
        doc = as_document(document)
        clubs = run_strategies(self.strategies, doc, params)
        result = ExtractionResult(clubs=clubs, season=self._season(params), url=self.build_url(params))
        if params.view in TABLE_VIEWS:
            result.snapshot_type = TABLE_VIEWS[params.view][1]
            return result
        low, high = round_window(params)
        result.round = high
        result.params = {"min": low, "max": high}
        result.snapshot_type = (
            SnapshotType.MATCHDAY if low == high else SnapshotType.ROUND_STANDINGS
        )
        return result
