"""CSV serialization helpers."""

from __future__ import annotations

import csv
from pathlib import Path

CSV_FIELDS = [
    "website",
    "state",
    "emails",
    "pages_fetched",
    "pages_attempted",
    "elapsed_seconds",
    "date_scraped_utc",
    "notes",
]


def write_rows(path: str, rows: list[dict[str, str]]) -> None:
    """Write one row per crawled website with a stable schema."""
    output_path = Path(path)
    if output_path.parent != Path("."):
        output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", newline="", encoding="utf-8") as file_obj:
        writer = csv.DictWriter(file_obj, fieldnames=CSV_FIELDS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)
