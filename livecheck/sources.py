"""Sources of package descriptors: local JSON files and the Homebrew API."""

import json
import logging
import os
from pathlib import Path
from typing import Optional

import requests
from pydantic import ValidationError
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from livecheck.models import CaskDescriptor, FormulaDescriptor, PackageDescriptor

logger = logging.getLogger(__name__)

DEFAULT_API_DOMAIN = "https://formulae.brew.sh/api"


def get_session(retries: int = 3) -> requests.Session:
    """Create a requests session with retry logic."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session


def get_api_domain() -> str:
    """Base URL of the Homebrew JSON API, honouring HOMEBREW_API_DOMAIN."""
    return os.environ.get("HOMEBREW_API_DOMAIN", DEFAULT_API_DOMAIN).rstrip("/")


def descriptor_from_json(data: dict) -> PackageDescriptor:
    """Build a formula or cask from a decoded JSON record.

    Records carrying a ``token`` are casks; everything else is a formula.

    Raises:
        pydantic.ValidationError: If the record lacks required fields.
    """
    if "token" in data:
        return CaskDescriptor.from_api(data)
    return FormulaDescriptor.from_api(data)


def load_descriptors(filepath: Path) -> tuple[list[PackageDescriptor], list[str]]:
    """Load formulae and casks from a JSON file.

    The file holds either a list of records or an object with a
    ``packages`` list.

    Args:
        filepath: Path to the JSON file.

    Returns:
        Tuple of (descriptors, errors). Invalid records are skipped and
        reported in errors; a missing file yields only a warning.
    """
    if not filepath.exists():
        return [], [f"Warning: {filepath} not found"]

    with open(filepath, encoding="utf-8") as f:
        data = json.load(f)

    records = data.get("packages", []) if isinstance(data, dict) else data
    if not isinstance(records, list):
        return [], [f"{filepath}: expected a list of package records"]

    descriptors: list[PackageDescriptor] = []
    errors: list[str] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            errors.append(f"{filepath}: record {index} is not an object")
            continue
        try:
            descriptors.append(descriptor_from_json(record))
        except ValidationError as e:
            errors.append(f"{filepath}: record {index} is invalid: {e}")

    return descriptors, errors


class HomebrewAPIClient:
    """Fetch formula and cask records from the Homebrew JSON API."""

    FORMULA_PATH = "/formula/{name}.json"
    CASK_PATH = "/cask/{token}.json"

    def __init__(self, api_domain: Optional[str] = None, session=None):
        self.api_domain = (api_domain or get_api_domain()).rstrip("/")
        self.session = session or get_session()
        self.errors: list[str] = []

    def fetch_formula(self, name: str) -> Optional[FormulaDescriptor]:
        """Fetch a formula by name.

        Args:
            name: Formula name.

        Returns:
            FormulaDescriptor, or None on error.
        """
        data = self._fetch(self.api_domain + self.FORMULA_PATH.format(name=name))
        if data is None:
            return None
        try:
            return FormulaDescriptor.from_api(data)
        except ValidationError as e:
            self.errors.append(f"Invalid formula record for {name}: {e}")
            return None

    def fetch_cask(self, token: str) -> Optional[CaskDescriptor]:
        """Fetch a cask by token.

        Args:
            token: Cask token.

        Returns:
            CaskDescriptor, or None on error.
        """
        data = self._fetch(self.api_domain + self.CASK_PATH.format(token=token))
        if data is None:
            return None
        try:
            return CaskDescriptor.from_api(data)
        except ValidationError as e:
            self.errors.append(f"Invalid cask record for {token}: {e}")
            return None

    def _fetch(self, url: str) -> Optional[dict]:
        logger.debug("Fetching %s", url)
        try:
            response = self.session.get(url, timeout=30)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            self.errors.append(f"Failed to fetch {url}: {e}")
            return None
