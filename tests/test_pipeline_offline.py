import pytest

from config import settings
from core.http_client import FetchError
from domain.models import SnapshotType
from services import pipeline
from tracking import history_store

from factories import FOOTMERCATO_HTML, MALFORMED_FOOTMERCATO_HTML, TRANSFERMARKT_HTML, snapshot


class FakeFetch:
    def __init__(self, content: str, fail_on: str | None = None):
        self.content = content
        self.fail_on = fail_on
        self.urls: list[str] = []

    def __call__(self, url: str) -> str:
        self.urls.append(url)
        if self.fail_on and self.fail_on in url:
            raise FetchError(f"Failed to fetch {url}: timed out", url=url)
        return self.content


def test_full_table_run_persists_general_snapshot(tmp_path):
    sleeps = []
    result = pipeline.run_steps(
        pipeline.full_table_steps("footmercato"),
        data_dir=str(tmp_path),
        fetch=FakeFetch(FOOTMERCATO_HTML),
        sleep=sleeps.append,
    )
    assert sleeps == []
    history = history_store.load_history("standings", str(tmp_path))
    (snap,) = history["2025/2026"]
    assert snap.source == settings.FOOTMERCATO_URL
    assert snap.snapshot_type is SnapshotType.GENERAL
    assert snap.round == 15
    assert len(snap.clubs) == 3
    assert result.path == str(tmp_path / "standings.json")


def test_repeated_full_table_runs_append(tmp_path):
    for _ in range(2):
        pipeline.run_steps(
            pipeline.full_table_steps("footmercato"),
            data_dir=str(tmp_path),
            fetch=FakeFetch(FOOTMERCATO_HTML),
            sleep=lambda s: None,
        )
    assert len(history_store.load_history("standings", str(tmp_path))["2025/2026"]) == 2


def test_malformed_document_end_to_end(tmp_path):
    result = pipeline.run_steps(
        pipeline.full_table_steps("footmercato", season="2025"),
        data_dir=str(tmp_path),
        fetch=FakeFetch(MALFORMED_FOOTMERCATO_HTML),
        sleep=lambda s: None,
    )
    (snap,) = result.snapshots
    assert [c.name for c in snap.clubs] == ["Lens", "Marseille"]
    assert snap.season == "2025/2026"


def test_sweep_from_round_one_resets_and_sleeps_between_fetches(tmp_path):
    prior = {"2025/2026": [snapshot(1, tag="old"), snapshot(2, tag="old"), snapshot(5, tag="old")]}
    history_store.save_history("standings", prior, str(tmp_path))
    fetch = FakeFetch(TRANSFERMARKT_HTML)
    sleeps = []
    pipeline.run_steps(
        pipeline.round_sweep_steps("2025", 1, 3),
        data_dir=str(tmp_path),
        fetch=fetch,
        sleep=sleeps.append,
    )
    seq = history_store.load_history("standings", str(tmp_path))["2025/2026"]
    assert [s.round for s in seq] == [1, 2, 3]
    assert all(not s.extra for s in seq)
    assert all(s.snapshot_type is SnapshotType.MATCHDAY for s in seq)
    assert sleeps == [settings.POLITE_DELAY_SECONDS] * 2
    assert [u.rsplit("&", 2)[1:] for u in fetch.urls] == [
        ["min=1", "max=1"],
        ["min=2", "max=2"],
        ["min=3", "max=3"],
    ]


def test_sweep_not_starting_at_one_replaces_by_round(tmp_path):
    prior = {"2025/2026": [snapshot(1, tag="old"), snapshot(4, tag="old")]}
    history_store.save_history("standings", prior, str(tmp_path))
    steps = pipeline.round_sweep_steps("2025/2026", 4, 5)
    assert [s.reset for s in steps] == [False, False]
    pipeline.run_steps(steps, data_dir=str(tmp_path), fetch=FakeFetch(TRANSFERMARKT_HTML), sleep=lambda s: None)
    seq = history_store.load_history("standings", str(tmp_path))["2025/2026"]
    assert [(s.round, s.extra.get("tag")) for s in seq] == [(1, "old"), (4, None), (5, None)]


def test_only_first_sweep_step_carries_reset():
    steps = pipeline.round_sweep_steps("2025", 1, 3)
    assert [s.reset for s in steps] == [True, False, False]
    assert [s.reset for s in pipeline.round_sweep_steps("2025", 1, 2, reset=False)] == [False, False]


def test_fetch_failure_aborts_sweep_keeping_saved_snapshots(tmp_path):
    fetch = FakeFetch(TRANSFERMARKT_HTML, fail_on="min=2")
    with pytest.raises(FetchError):
        pipeline.run_steps(
            pipeline.round_sweep_steps("2025", 1, 3),
            data_dir=str(tmp_path),
            fetch=fetch,
            sleep=lambda s: None,
        )
    seq = history_store.load_history("standings", str(tmp_path))["2025/2026"]
    assert [s.round for s in seq] == [1]
    assert len(fetch.urls) == 2
