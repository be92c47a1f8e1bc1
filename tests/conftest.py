import sys
from pathlib import Path

import pytest
import requests

# Ensure the `company_finder` package is importable when running pytest from the project root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from company_finder.core import config  # noqa: E402


class DummyResponse:
    def __init__(self, status_code=200, payload=None, json_error=None):
        self.status_code = status_code
        self._payload = payload
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class DummySession:
    def __init__(self, response=None, error=None):
        self.calls = []
        self.response = response
        self.error = error

    def get(self, url, params=None, headers=None, timeout=None):
        self.calls.append({"url": url, "params": params, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    for name in (
        "COMPANY_SOURCE",
        "SAMPLE_FALLBACK",
        "EMAIL_LOCAL_PARTS",
        "MAX_DISPLAY_EMAILS",
        "SEARCH_RADIUS_M",
        "DEFAULT_LATITUDE",
        "DEFAULT_LONGITUDE",
        "DEFAULT_PHONE_REGION",
        "BACKEND_URL",
        "REQUEST_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()
