import argparse
import json

import pytest

from company_finder.core.search_state import SearchOutcome, SearchState, SearchStatus
from company_finder.jobs import run_search
from company_finder.models import CompanyRecord, GeoPoint

CENTER = GeoPoint(23.0225, 72.5714)


def _fake_run_search(state, location, radius_m=None, max_emails=None, generation=None):
    companies = (CompanyRecord(name=f"{location} Tech", address="Main Road", emails=("hr@x.com",)),)
    outcome = SearchOutcome(generation, location, SearchStatus.OK, CENTER, companies)
    state.commit(outcome)
    return outcome


def test_build_parser_defaults(monkeypatch):
    monkeypatch.setenv("SEARCH_RADIUS_M", "1200")
    parser = run_search.build_parser()
    args = parser.parse_args(["Vastral"])
    assert isinstance(parser, argparse.ArgumentParser)
    assert args.locations == ["Vastral"]
    assert args.radius_m == 1200
    assert args.max_emails == 2
    assert args.as_json is False


def test_render_outcome_states():
    assert run_search.render_outcome(SearchOutcome(1, "Atlantis", SearchStatus.NOT_FOUND)) == "Place not found: Atlantis"
    assert "No companies found" in run_search.render_outcome(SearchOutcome(1, "Vastral", SearchStatus.EMPTY))
    assert "Search failed" in run_search.render_outcome(SearchOutcome(1, "Vastral", SearchStatus.FAILED))


def test_render_outcome_lists_companies():
    record = CompanyRecord(
        name="Acme IT",
        address="5 Main St",
        website="https://acme.io",
        emails=("hr@acme.io",),
        is_synthetic=True,
        source_label="Sample Data",
    )
    text = run_search.render_outcome(SearchOutcome(1, "Vastral", SearchStatus.OK, CENTER, (record,)))

    assert "1. Acme IT [Sample Data, sample]" in text
    assert "Website: https://acme.io" in text
    assert "Emails (unverified): hr@acme.io" in text


def test_search_locations_keeps_latest_generation(monkeypatch):
    monkeypatch.setattr(run_search, "run_search", _fake_run_search)
    state = SearchState()

    outcome = run_search.search_locations(state, ["Vastral", "Maninagar"], radius_m=None, max_emails=None)

    assert outcome.query == "Maninagar"
    assert outcome.generation == 2
    assert [r.name for r in state.listing] == ["Maninagar Tech"]


def test_main_prints_json(monkeypatch, capsys):
    def fail_initial_center():
        raise AssertionError("IP geolocation must not run when locations are given")

    monkeypatch.setattr(run_search, "initial_center", fail_initial_center)
    monkeypatch.setattr(run_search, "run_search", _fake_run_search)

    exit_code = run_search.main(["Vastral", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["status"] == "ok"
    assert payload["center"] == {"lat": 23.0225, "lon": 72.5714}
    assert payload["companies"][0]["name"] == "Vastral Tech"


def test_main_without_locations_reports_center(monkeypatch, capsys):
    monkeypatch.setattr(run_search, "initial_center", lambda: CENTER)

    assert run_search.main([]) == 0
    assert "23.0225,72.5714" in capsys.readouterr().out


def test_main_config_error(monkeypatch):
    monkeypatch.setenv("COMPANY_SOURCE", "puppeteer")
    assert run_search.main(["Vastral"]) == 2


@pytest.mark.parametrize("argv", [["Vastral", "--radius", "0"], ["Vastral", "--radius", "-50"], ["Vastral", "--max-emails", "-1"]])
def test_main_rejects_invalid_numbers(monkeypatch, argv):
    monkeypatch.setattr(run_search, "run_search", _fake_run_search)

    with pytest.raises(SystemExit) as excinfo:
        run_search.main(argv)

    assert excinfo.value.code == 2


def test_build_parser_accepts_zero_max_emails():
    args = run_search.build_parser().parse_args(["Vastral", "--max-emails", "0", "--radius", "500"])
    assert args.max_emails == 0
    assert args.radius_m == 500
