"""FootMercato full standings table parsing (BeautifulSoup + pipe-row fallback)."""

from __future__ import annotations

import re
from typing import List, Union

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
from utils.normalizer import normalize_season

SEASON_RE = re.compile(r"(\d{4}/\d{4})")
MIN_CELLS = 9
# Column order on the page: pos, team, pts, played, diff, W, D, L, GF, GA
COLUMNS = (
    "position",
    "name",
    "points",
    "played",
    "goal_difference",
    "wins",
    "draws",
    "losses",
    "goals_for",
    "goals_against",
)
# "| 1 | Logo Lens Lens | 34 | 15 | +13 | 10 | 4 | 1 | 28 | 15 |"
_NUM = r"\s*([+\-−]?\d+)\s*\|"
PIPE_ROW_RE = re.compile(r"\|\s*(\d+)\.?\s*\|\s*([^|]+?)\s*\|" + _NUM * 8)


def extract_table_rows(document: Document, params: ExtractionParams) -> List[ClubRow]:
    """Structured strategy: positional columns of the first table on the page."""
    table = document.soup.find("table")
    if table is None:
        return []
    candidates = []
    for tr in table.find_all("tr"):
        tds = tr.find_all("td")
        if len(tds) < MIN_CELLS:
            continue
        cells = [html_utils.clean_cell(td.get_text(" ", strip=True)) for td in tds]
        cells += [""] * (len(COLUMNS) - len(cells))
        candidates.append(dict(zip(COLUMNS, cells)))
    return collect_rows(candidates)


def _scan_pipe_rows(text: str) -> List[ClubRow]:
    return collect_rows(dict(zip(COLUMNS, m.groups())) for m in PIPE_ROW_RE.finditer(text))


def extract_pipe_rows(document: Document, params: ExtractionParams) -> List[ClubRow]:
    """Fallback strategy: pipe-delimited row fragments anywhere in the raw text.

    When the raw text carries none, the table markup is flattened into
    pipe-delimited lines and scanned again.
    """
    rows = _scan_pipe_rows(document.raw)
    if rows:
        return rows
    return _scan_pipe_rows(html_utils.flatten_table_markup(document.raw))


def detect_season(document: Document) -> str | None:
    body = document.soup.body or document.soup
    m = SEASON_RE.search(body.get_text(" ", strip=True))
    return m.group(1) if m else None


class FootMercatoExtractor:
    source_id = "footmercato"
    source_label = settings.FOOTMERCATO_URL
    strategies = (extract_table_rows, extract_pipe_rows)

    def build_url(self, params: ExtractionParams) -> str:
        return settings.FOOTMERCATO_URL

    def extract(
        self, document: Union[Document, str, bytes], params: ExtractionParams
    ) -> ExtractionResult:
        doc = as_document(document)
        clubs = run_strategies(self.strategies, doc, params)
        season = (
            detect_season(doc) or normalize_season(params.season) or settings.DEFAULT_SEASON
        )
        return ExtractionResult(
            clubs=clubs,
            season=season,
            url=self.build_url(params),
            snapshot_type=SnapshotType.GENERAL,
        )
