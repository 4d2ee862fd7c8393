"""Extractor capability shared by the two supported standings sources.

Each source tries an ordered list of strategies; a later strategy only runs
when every earlier one yielded no rows. Strategies are pure functions of
``(document, params)`` and never touch the network or storage.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence, Union

from bs4 import BeautifulSoup

from domain.models import ClubRow, SnapshotType
from parsing.errors import UnknownSourceError

logger = logging.getLogger(__name__)

SUPPORTED_SOURCES = ("footmercato", "transfermarkt")


@dataclass(frozen=True)
class ExtractionParams:
    season: Optional[str] = None
    min_round: Optional[int] = None
    max_round: Optional[int] = None
    view: str = "general"


@dataclass
class ExtractionResult:
    clubs: List[ClubRow]
    season: Optional[str] = None
    round: Optional[int] = None
    url: Optional[str] = None
    snapshot_type: Optional[SnapshotType] = None
    params: Optional[Dict[str, Any]] = None


@dataclass
class Document:
    """A fetched page: raw markup plus its parse tree (built once)."""

    raw: str
    soup: BeautifulSoup = field(repr=False)

    @classmethod
    def parse(cls, content: Union[str, bytes]) -> "Document":
        if isinstance(content, bytes):
            content = content.decode("utf-8", errors="replace")
        return cls(raw=content, soup=BeautifulSoup(content, "html.parser"))


Strategy = Callable[[Document, ExtractionParams], List[ClubRow]]


def yielded_nothing(rows: Sequence[ClubRow]) -> bool:
    return not rows


def run_strategies(
    strategies: Sequence[Strategy], document: Document, params: ExtractionParams
) -> List[ClubRow]:
    """Return the rows of the first strategy that yields any."""
    for strategy in strategies:
        rows = strategy(document, params)
        if not yielded_nothing(rows):
            logger.debug("%s produced %d rows", getattr(strategy, "__name__", strategy), len(rows))
            return list(rows)
        logger.debug("%s yielded nothing", getattr(strategy, "__name__", strategy))
    return []


class Extractor(Protocol):
    source_id: str
    # Value recorded as ``Snapshot.source``
    source_label: str
    strategies: Sequence[Strategy]

    def build_url(self, params: ExtractionParams) -> str: ...

    def extract(
        self, document: Union[Document, str, bytes], params: ExtractionParams
    ) -> ExtractionResult: ...


def as_document(document: Union[Document, str, bytes]) -> Document:
    return document if isinstance(document, Document) else Document.parse(document)


def get_extractor(source_id: str) -> Extractor:
    """Return the extractor for one of the two supported sources."""
    # Local imports: the source modules import this module for the shared types.
    from parsing.footmercato_parser import FootMercatoExtractor
    from parsing.transfermarkt_parser import TransfermarktExtractor

    key = (source_id or "").strip().lower()
    if key == FootMercatoExtractor.source_id:
        return FootMercatoExtractor()
    if key == TransfermarktExtractor.source_id:
        return TransfermarktExtractor()
    raise UnknownSourceError(
        f"Unsupported source '{source_id}'",
        context={"supported": list(SUPPORTED_SOURCES)},
    )
