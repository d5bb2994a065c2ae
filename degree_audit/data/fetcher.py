"""
Requirement fetching.

This module mirrors requirement documents from a remote repository into the
local requirements directory. The remote side only has to serve static
files: an index.json manifest listing document paths, and the documents.
"""

import logging
import random
import time
from dataclasses import dataclass, field
from pathlib import Path

import requests
import yaml
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..config import (
    FETCH_BACKOFF_FACTOR,
    FETCH_DELAY_RANGE,
    FETCH_MANIFEST_NAME,
    FETCH_RETRIES,
    FETCH_STATUS_FORCELIST,
    FETCH_TIMEOUT,
    FETCH_USER_AGENT,
    REQUIREMENT_FILE_SUFFIXES,
)
from ..errors import RequirementFetchError

logger = logging.getLogger(__name__)


def create_retry_session() -> requests.Session:
    """Session that retries GETs on throttling and server errors."""
    session = requests.Session()
    retries = Retry(
        total=FETCH_RETRIES,
        backoff_factor=FETCH_BACKOFF_FACTOR,
        status_forcelist=list(FETCH_STATUS_FORCELIST),
        allowed_methods=["GET"],
    )
    adapter = HTTPAdapter(max_retries=retries)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    session.headers.update({"User-Agent": FETCH_USER_AGENT})
    return session


@dataclass
class FetchReport:
    """Outcome of one sync: relative paths per outcome."""
    downloaded: list = field(default_factory=list)
    skipped: list = field(default_factory=list)
    failed: dict = field(default_factory=dict)  # path -> reason

    @property
    def ok(self) -> bool:
        return not self.failed


class RequirementFetcher:
    """
    Syncs requirement documents from a remote mirror.

    MANIFEST:
    ---------
    <base_url>/index.json holds a JSON list of document paths relative to
    the requirements directory:
        ["primary/cs-hons-2020.yml", "minor/math-2019.yml"]

    SYNC RULES:
    -----------
    - Documents already on disk are skipped unless overwrite=True.
    - A body that does not parse as a YAML mapping is never written.
    - A failed document is recorded in the report; the sync carries on.
    - Downloads are spaced by a random delay to stay polite to the mirror.

    Usage:
        fetcher = RequirementFetcher("https://example.org/requirements", REQUIREMENTS_DIR)
        report = fetcher.sync()
    """

    def __init__(self, base_url: str, requirements_dir, session=None,
                 delay_range: tuple = FETCH_DELAY_RANGE):
        self.base_url = base_url.rstrip("/")
        self.requirements_dir = Path(requirements_dir)
        self.session = session if session is not None else create_retry_session()
        self.delay_range = delay_range

    def _url(self, relative_path: str) -> str:
        return f"{self.base_url}/{relative_path}"

    def fetch_manifest(self) -> list:
        """
        Download the list of document paths.

        Raises:
            RequirementFetchError: if the manifest is unreachable or malformed
        """
        url = self._url(FETCH_MANIFEST_NAME)
        try:
            resp = self.session.get(url, timeout=FETCH_TIMEOUT)
        except requests.RequestException as e:
            raise RequirementFetchError(f"could not reach {url}: {e}") from e

        if resp.status_code != 200:
            raise RequirementFetchError(f"{url} returned HTTP {resp.status_code}")
        try:
            manifest = resp.json()
        except ValueError as e:
            raise RequirementFetchError(f"{url} is not valid JSON") from e
        if not isinstance(manifest, list) or not all(isinstance(p, str) for p in manifest):
            raise RequirementFetchError(f"{url} should be a JSON list of document paths")
        return manifest

    def _target_path(self, relative_path: str) -> Path:
        root = self.requirements_dir.resolve()
        target = (root / relative_path).resolve()
        if root not in target.parents:
            raise RequirementFetchError(f"'{relative_path}' is outside the requirements directory")
        if target.suffix not in REQUIREMENT_FILE_SUFFIXES:
            raise RequirementFetchError(f"'{relative_path}' is not a YAML document")
        return target

    def _download(self, relative_path: str, target: Path) -> None:
        resp = self.session.get(self._url(relative_path), timeout=FETCH_TIMEOUT)
        if resp.status_code != 200:
            raise RequirementFetchError(f"HTTP {resp.status_code}")

        try:
            contents = yaml.safe_load(resp.text)
        except yaml.YAMLError as e:
            raise RequirementFetchError(f"invalid YAML: {e}") from e
        if not isinstance(contents, dict):
            raise RequirementFetchError("document should be a mapping")

        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w", encoding="utf-8") as f:
            f.write(resp.text)

    def sync(self, overwrite: bool = False) -> FetchReport:
        """
        Mirror every document in the manifest.

        Raises:
            RequirementFetchError: if the manifest itself cannot be fetched
        """
        report = FetchReport()
        manifest = self.fetch_manifest()
        logger.info("Manifest lists %d document(s)", len(manifest))

        first = True
        for relative_path in manifest:
            try:
                target = self._target_path(relative_path)
            except RequirementFetchError as e:
                report.failed[relative_path] = str(e)
                continue

            if target.exists() and not overwrite:
                report.skipped.append(relative_path)
                continue

            if not first:
                time.sleep(random.uniform(*self.delay_range))
            first = False

            try:
                self._download(relative_path, target)
            except (requests.RequestException, RequirementFetchError) as e:
                logger.warning("Failed to fetch %s: %s", relative_path, e)
                report.failed[relative_path] = str(e)
            else:
                logger.debug("Fetched %s", relative_path)
                report.downloaded.append(relative_path)
        return report
