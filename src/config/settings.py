"""Global configuration and constants for the standings pipeline."""

from __future__ import annotations

import os
from typing import Final

FOOTMERCATO_URL: Final = "https://www.footmercato.net/france/ligue-1/classement"
TRANSFERMARKT_BASE: Final = "https://www.transfermarkt.fr/ligue-1"
TRANSFERMARKT_COMPETITION: Final = "FR1"

DEFAULT_USER_AGENT: Final = "bf_foot_scraper/0.1"
DEFAULT_TIMEOUT: Final = 15  # seconds
# Upstream fetches are not retried automatically; a failure aborts the run.
DEFAULT_RETRIES: Final = 0
DEFAULT_BACKOFF_FACTOR: Final = 0.6
# Pause between consecutive fetches of one run (round sweeps, multi-view runs)
POLITE_DELAY_SECONDS: Final = 1.2

DATA_DIR: Final = os.environ.get("STANDINGS_DATA_DIR", "data")

DEFAULT_SOURCE: Final = "footmercato"
DEFAULT_SEASON: Final = "2025/2026"
DEFAULT_DATASET: Final = "standings"
DATASET_FILES: Final = {
    "standings": "standings.json",
    "seasons": "seasons.json",
}
