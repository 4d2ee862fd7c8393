"""Assembly and validation of ClubRow values from raw cell texts."""

from __future__ import annotations

import logging
from typing import Iterable, List, Mapping, Optional

from domain.models import CLUB_INT_FIELDS, ClubRow
from parsing.errors import ValidationError
from utils.normalizer import clean_name, is_placeholder_name, parse_int_safe

logger = logging.getLogger(__name__)


def make_club_row(
    *,
    position: object,
    name: Optional[str],
    **stats: object,
) -> ClubRow:
    """Build a ClubRow, routing every column through the normalizer.

    ``stats`` keys must be ClubRow integer fields; values may be raw text,
    ints or ``None``. Raises :class:`ValidationError` when no usable name is left.
    """
    unknown = set(stats) - set(CLUB_INT_FIELDS)
    if unknown:
        raise TypeError(f"Unknown club fields: {sorted(unknown)}")
    cleaned = clean_name(name)
    if not cleaned or is_placeholder_name(cleaned):
        raise ValidationError(
            "Row has no usable club name", context={"name": name, "position": position}
        )
    values = {f: parse_int_safe(stats.get(f)) for f in CLUB_INT_FIELDS}
    return ClubRow(position=parse_int_safe(position), name=cleaned, **values)


def collect_rows(candidates: Iterable[Mapping[str, object]]) -> List[ClubRow]:
    """Turn candidate mappings into ClubRows, silently dropping invalid ones."""
    rows: List[ClubRow] = []
    for candidate in candidates:
        try:
            rows.append(make_club_row(**candidate))
        except ValidationError as e:
            logger.debug("Dropped row: %s %s", e, e.context)
    return rows
