import pytest

from domain.models import ClubRow
from parsing import footmercato_parser
from parsing.errors import UnknownSourceError
from parsing.extractor import Document, ExtractionParams, get_extractor, run_strategies

from factories import FOOTMERCATO_HTML, PIPE_TEXT_HTML

PARAMS = ExtractionParams()


def _spy(calls, label, rows):
    def strategy(document, params):
        calls.append(label)
        return rows

    strategy.__name__ = label
    return strategy


def test_fallback_not_run_when_structured_yields_rows():
    calls = []
    rows = [ClubRow(1, "Lens")]
    out = run_strategies(
        [_spy(calls, "structured", rows), _spy(calls, "fallback", [ClubRow(1, "Nice")])],
        Document.parse(""),
        PARAMS,
    )
    assert out == rows
    assert calls == ["structured"]


def test_fallback_runs_when_structured_yields_nothing():
    calls = []
    fallback_rows = [ClubRow(1, "Nice")]
    out = run_strategies(
        [_spy(calls, "structured", []), _spy(calls, "fallback", fallback_rows)],
        Document.parse(""),
        PARAMS,
    )
    assert out == fallback_rows
    assert calls == ["structured", "fallback"]


def test_all_strategies_empty_returns_empty_list():
    assert run_strategies([_spy([], "a", []), _spy([], "b", [])], Document.parse(""), PARAMS) == []


@pytest.mark.parametrize("html,expect_fallback", [(FOOTMERCATO_HTML, False), (PIPE_TEXT_HTML, True)])
def test_extractor_invokes_fallback_iff_structured_empty(monkeypatch, html, expect_fallback):
    calls = []

    def fallback(document, params):
        calls.append("fallback")
        return footmercato_parser.extract_pipe_rows(document, params)

    extractor = footmercato_parser.FootMercatoExtractor()
    monkeypatch.setattr(extractor, "strategies", (footmercato_parser.extract_table_rows, fallback))
    result = extractor.extract(html, PARAMS)
    assert (calls == ["fallback"]) is expect_fallback
    assert result.clubs
    assert all(c.name for c in result.clubs)


def test_get_extractor_closed_set():
    assert get_extractor("footmercato").source_id == "footmercato"
    assert get_extractor(" Transfermarkt ").source_id == "transfermarkt"
    with pytest.raises(UnknownSourceError) as exc:
        get_extractor("lequipe")
    assert exc.value.context == {"supported": ["footmercato", "transfermarkt"]}
