"""
CSV output for collected element records.
"""

import csv
import io
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from element_extractor import ElementRecord, utf16_length


CSV_HEADER = ["Element Type", "Text Content", "Selector Type", "Selector Value"]
DEFAULT_PAGE_NAME = "webpage"


def ensure_dir(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


def today_utc() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%d")


def filter_records(records: Iterable[ElementRecord]) -> Tuple[List[ElementRecord], int]:
    """Split off records with no id or class; returns (kept, skipped_count)."""
    kept = []
    skipped = 0
    for record in records:
        if record.has_identifier:
            kept.append(record)
        else:
            skipped += 1
    return kept, skipped


def serialize_records(records: Iterable[ElementRecord]) -> str:
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADER) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    for record in records:
        writer.writerow([
            record.element_type,
            record.text_content,
            record.selector_type,
            record.selector_value,
        ])
    return buffer.getvalue()


def safe_page_name(title: str) -> str:
    # One underscore per UTF-16 code unit, so astral characters give two.
    name = re.sub(r"[^a-zA-Z0-9]", lambda m: "_" * utf16_length(m.group()), title or "")
    return name.lower() or DEFAULT_PAGE_NAME


def build_filename(title: str, date: Optional[str] = None) -> str:
    return f"{safe_page_name(title)}_elements_{date or today_utc()}.csv"


def write_csv(output_dir: Path, filename: str, content: str) -> Path:
    ensure_dir(output_dir)
    path = output_dir / filename
    with open(path, "w", encoding="utf-8", newline="") as f:
        f.write(content)
    return path
