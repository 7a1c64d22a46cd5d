"""Utilities to download shooting incident data from the NYC Open Data portal."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional

import requests

from . import config

logger = logging.getLogger(__name__)


@dataclass
class DownloadStats:
    """Capture summary statistics for a download run."""

    output_path: Path
    bytes_written: int = 0
    rows_written: int = 0
    start_time: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def as_dict(self) -> Dict[str, object]:
        return {
            "output_path": str(self.output_path),
            "bytes_written": self.bytes_written,
            "rows_written": self.rows_written,
            "duration_seconds": int((datetime.now(timezone.utc) - self.start_time).total_seconds()),
        }


class IncidentDownloader:
    """Streams the incident CSV export to a local file."""

    def __init__(
        self,
        *,
        url: str = config.DATASET_URL,
        app_token: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.app_token = app_token

    def _build_headers(self) -> Dict[str, str]:
        headers: Dict[str, str] = {}
        if self.app_token:
            headers["X-App-Token"] = self.app_token
        return headers

    def download(self, output_path: Path | str = config.DEFAULT_RAW_CSV_PATH) -> DownloadStats:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        stats = DownloadStats(output_path=output_path)

        # Stream into a sibling file so a failed download leaves any previous CSV intact
        partial_path = output_path.with_name(output_path.name + ".part")
        newlines = 0
        last_byte = b""
        try:
            with self.session.get(
                self.url,
                headers=self._build_headers(),
                stream=True,
                timeout=config.HTTP_TIMEOUT,
            ) as response:
                response.raise_for_status()
                content_type = response.headers.get("Content-Type", "")
                if "html" in content_type.lower():
                    raise ValueError(f"Unexpected payload from Open Data portal (content type {content_type!r})")

                with open(partial_path, "wb") as handle:
                    for chunk in response.iter_content(chunk_size=config.DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        handle.write(chunk)
                        stats.bytes_written += len(chunk)
                        newlines += chunk.count(b"\n")
                        last_byte = chunk[-1:]
                        logger.debug("Wrote %s bytes to %s", stats.bytes_written, partial_path)

            if stats.bytes_written == 0:
                raise ValueError("Unexpected payload from Open Data portal (empty body)")
            partial_path.replace(output_path)
        finally:
            partial_path.unlink(missing_ok=True)

        if last_byte != b"\n":
            newlines += 1
        # The header line is not a data row
        stats.rows_written = max(newlines - 1, 0)
        logger.info("Download completed: %s", stats.as_dict())
        return stats


def run_download(
    *,
    output_path: Path | str | None = None,
    app_token: Optional[str] = None,
) -> DownloadStats:
    downloader = IncidentDownloader(app_token=app_token)
    return downloader.download(output_path or config.DEFAULT_RAW_CSV_PATH)


__all__ = ["IncidentDownloader", "DownloadStats", "run_download"]
