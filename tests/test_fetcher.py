"""Tests for the requirement fetcher (HTTP mocked)."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from degree_audit.data import FetchReport, RequirementFetcher, create_retry_session
from degree_audit.errors import DegreeAuditError, RequirementFetchError

BASE_URL = "https://example.org/requirements"


def response(status_code=200, text="", json_data=None):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("no JSON")
    else:
        resp.json.return_value = json_data
    return resp


def make_session(pages):
    """Session whose GET returns pages[url] (or raises it, if an exception)."""
    session = MagicMock()

    def get(url, timeout=None):
        page = pages[url]
        if isinstance(page, Exception):
            raise page
        return page

    session.get.side_effect = get
    return session


@pytest.fixture
def no_sleep():
    with patch("degree_audit.data.fetcher.time.sleep") as sleep:
        yield sleep


class TestCreateRetrySession:
    def test_retry_policy_mounted(self):
        session = create_retry_session()
        retries = session.get_adapter("https://example.org").max_retries
        assert retries.total == 5
        assert 429 in retries.status_forcelist
        assert "User-Agent" in session.headers


class TestFetchManifest:
    def test_manifest(self, tmp_path):
        session = make_session({
            f"{BASE_URL}/index.json": response(json_data=["primary/ulr-2015.yml"]),
        })
        fetcher = RequirementFetcher(BASE_URL + "/", tmp_path, session=session)
        assert fetcher.fetch_manifest() == ["primary/ulr-2015.yml"]

    def test_http_error(self, tmp_path):
        session = make_session({f"{BASE_URL}/index.json": response(status_code=404)})
        with pytest.raises(RequirementFetchError, match="HTTP 404"):
            RequirementFetcher(BASE_URL, tmp_path, session=session).fetch_manifest()

    def test_not_a_list(self, tmp_path):
        session = make_session({f"{BASE_URL}/index.json": response(json_data={"a": 1})})
        with pytest.raises(RequirementFetchError, match="JSON list"):
            RequirementFetcher(BASE_URL, tmp_path, session=session).fetch_manifest()

    def test_connection_error(self, tmp_path):
        session = make_session({f"{BASE_URL}/index.json": requests.ConnectionError("down")})
        with pytest.raises(RequirementFetchError, match="could not reach"):
            RequirementFetcher(BASE_URL, tmp_path, session=session).fetch_manifest()

    def test_fetch_error_is_io_error(self):
        assert issubclass(RequirementFetchError, IOError)
        assert issubclass(RequirementFetchError, DegreeAuditError)


class TestSync:
    def manifest(self, *paths):
        return {f"{BASE_URL}/index.json": response(json_data=list(paths))}

    def test_downloads_documents(self, tmp_path, no_sleep):
        pages = self.manifest("primary/ulr-2015.yml", "minor/ma-2019.yml")
        pages[f"{BASE_URL}/primary/ulr-2015.yml"] = response(text="match: GER1000\n")
        pages[f"{BASE_URL}/minor/ma-2019.yml"] = response(text="match: MA*\n")
        fetcher = RequirementFetcher(BASE_URL, tmp_path, session=make_session(pages))

        report = fetcher.sync()

        assert report.downloaded == ["primary/ulr-2015.yml", "minor/ma-2019.yml"]
        assert report.ok
        assert (tmp_path / "primary" / "ulr-2015.yml").read_text() == "match: GER1000\n"
        assert no_sleep.call_count == 1

    def test_existing_documents_skipped(self, tmp_path, no_sleep):
        (tmp_path / "primary").mkdir()
        (tmp_path / "primary" / "ulr-2015.yml").write_text("match: OLD\n")
        session = make_session(self.manifest("primary/ulr-2015.yml"))

        report = RequirementFetcher(BASE_URL, tmp_path, session=session).sync()

        assert report.skipped == ["primary/ulr-2015.yml"]
        assert (tmp_path / "primary" / "ulr-2015.yml").read_text() == "match: OLD\n"

    def test_overwrite(self, tmp_path, no_sleep):
        (tmp_path / "primary").mkdir()
        (tmp_path / "primary" / "ulr-2015.yml").write_text("match: OLD\n")
        pages = self.manifest("primary/ulr-2015.yml")
        pages[f"{BASE_URL}/primary/ulr-2015.yml"] = response(text="match: NEW\n")

        report = RequirementFetcher(BASE_URL, tmp_path, session=make_session(pages)).sync(overwrite=True)

        assert report.downloaded == ["primary/ulr-2015.yml"]
        assert (tmp_path / "primary" / "ulr-2015.yml").read_text() == "match: NEW\n"

    def test_failures_recorded_and_sync_continues(self, tmp_path, no_sleep):
        pages = self.manifest(
            "primary/missing.yml",
            "primary/list.yml",
            "primary/down.yml",
            "primary/ok.yml",
        )
        pages[f"{BASE_URL}/primary/missing.yml"] = response(status_code=404)
        pages[f"{BASE_URL}/primary/list.yml"] = response(text="- CS1101S\n")
        pages[f"{BASE_URL}/primary/down.yml"] = requests.Timeout("slow")
        pages[f"{BASE_URL}/primary/ok.yml"] = response(text="match: CS*\n")

        report = RequirementFetcher(BASE_URL, tmp_path, session=make_session(pages)).sync()

        assert report.downloaded == ["primary/ok.yml"]
        assert set(report.failed) == {"primary/missing.yml", "primary/list.yml", "primary/down.yml"}
        assert report.failed["primary/missing.yml"] == "HTTP 404"
        assert not report.ok
        assert not (tmp_path / "primary" / "list.yml").exists()

    def test_path_escape_rejected(self, tmp_path, no_sleep):
        session = make_session(self.manifest("../outside.yml", "primary/notes.txt"))
        report = RequirementFetcher(BASE_URL, tmp_path / "requirements", session=session).sync()
        assert set(report.failed) == {"../outside.yml", "primary/notes.txt"}
        assert not (tmp_path / "outside.yml").exists()


def test_empty_report_is_ok():
    assert FetchReport().ok
