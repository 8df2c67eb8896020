# backend/archive_api/services/archive_client.py
from datetime import datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote, quote_plus

import requests

from archive_api.core.config import ArchiveConfig, settings
from archive_api.logger import get_logger

log = get_logger(__name__)


class UpstreamError(RuntimeError):
    """The archive service could not be reached or answered with something unusable."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamTimeout(UpstreamError):
    pass


class ArchiveClient:
    """Fetches one month of articles from the archive API. Single attempt, no retry."""

    def __init__(self, config: ArchiveConfig):
        self.config = config
        if not config.api_key:
            log.warning("No archive API key configured; upstream requests will be rejected")

    def month_url(self, year: int, month: int) -> str:
        return f"{self.config.base_url}{year}/{month}.json"

    def _redact(self, err: Exception) -> str:
        text = str(err)
        key = self.config.api_key
        if key:
            for form in (key, quote_plus(key), quote(key, safe="")):
                text = text.replace(form, "***")
        return text

    def fetch(self, year: Optional[int] = None, month: Optional[int] = None) -> List[Dict[str, Any]]:
        """Return the raw ``response.docs`` list for the month; defaults to the current month."""
        if year is None and month is None:
            today = datetime.now(settings.tz)
            year, month = today.year, today.month
        elif year is None or month is None:
            raise ValueError("year and month must be given together")

        url = self.month_url(year, month)
        log.info("Fetching archive for %d-%02d", year, month)

        # requests errors quote the full url, api key included: redact, never chain
        try:
            resp = requests.get(
                url,
                params={"api-key": self.config.api_key or ""},
                timeout=self.config.timeout,
            )
            resp.raise_for_status()
        except requests.exceptions.Timeout as e:
            log.error("Timeout fetching archive %d-%02d: %s", year, month, self._redact(e))
            raise UpstreamTimeout(f"archive request timed out for {year}-{month}") from None
        except requests.HTTPError as e:
            log.error("Archive HTTP %s for %d-%02d: %s", resp.status_code, year, month, self._redact(e))
            raise UpstreamError(f"archive returned HTTP {resp.status_code}", status_code=resp.status_code) from None
        except requests.RequestException as e:
            log.error("Error fetching archive %d-%02d: %s", year, month, self._redact(e))
            raise UpstreamError(f"archive request failed: {e.__class__.__name__}") from None

        try:
            payload = resp.json()
        except ValueError as e:
            log.exception("Archive returned invalid JSON for %d-%02d", year, month)
            raise UpstreamError("archive returned invalid JSON", status_code=resp.status_code) from e

        docs = (payload.get("response") or {}).get("docs") if isinstance(payload, dict) else None
        if not isinstance(docs, list):
            log.error("Archive payload for %d-%02d has no response.docs", year, month)
            raise UpstreamError("archive payload missing response.docs", status_code=resp.status_code)

        log.info("Fetched %d articles for %d-%02d", len(docs), year, month)
        return docs
