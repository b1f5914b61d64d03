"""Reading export CSVs from disk."""

import csv
import logging
import re
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Optional, Union

from ledgerly.domain.errors import IngestError

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_WHITESPACE = re.compile(r"\s+")

# Thread pool cap for reading a directory of exports
MAX_READ_WORKERS = 8


def normalize_header(header: Optional[str]) -> str:
    """Normalize a column header: drop BOM and quotes, trim, lowercase, spaces to '_'."""
    if header is None:
        return ""
    header = header.replace("\ufeff", "").replace('"', "").strip().lower()
    return _WHITESPACE.sub("_", header)


def read_csv_rows(path: PathLike, normalize_headers: bool = False) -> list[dict[str, str]]:
    """Read every row of a CSV file into dicts keyed by column header.

    Raises:
        IngestError: If the file is missing or cannot be read or parsed. An
            unreadable source aborts the whole ingestion run.
    """
    csv_path = Path(path)
    try:
        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f)
            if normalize_headers and reader.fieldnames is not None:
                reader.fieldnames = [normalize_header(h) for h in reader.fieldnames]
            rows = list(reader)
    except FileNotFoundError as e:
        raise IngestError(f"CSV file not found: {csv_path}") from e
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise IngestError(f"Could not read CSV file {csv_path}: {e}") from e

    logger.info("Read %d rows from %s", len(rows), csv_path)
    return rows


def list_csv_files(directory: PathLike) -> list[Path]:
    """Return the ``*.csv`` files of a directory in filename order."""
    dir_path = Path(directory)
    if not dir_path.is_dir():
        raise IngestError(f"CSV directory not found: {dir_path}")
    return sorted(p for p in dir_path.iterdir() if p.is_file() and p.suffix.lower() == ".csv")


def read_csv_directory(directory: PathLike, normalize_headers: bool = False) -> list[dict[str, str]]:
    """Read all CSV files of a directory concurrently and concatenate their rows.

    Rows are returned file by file in filename order. Any unreadable file
    fails the whole read.
    """
    files = list_csv_files(directory)
    if not files:
        logger.warning("No CSV files found in %s", directory)
        return []

    workers = min(MAX_READ_WORKERS, len(files))
    with ThreadPoolExecutor(max_workers=workers) as pool:
        per_file = list(pool.map(lambda p: read_csv_rows(p, normalize_headers=normalize_headers), files))

    return [row for rows in per_file for row in rows]
