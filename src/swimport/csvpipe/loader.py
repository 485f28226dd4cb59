from __future__ import annotations
import csv as _csv
import logging
from pathlib import Path
from typing import Iterator, Optional

from swimport.errors import ConfigError
from .delimiter import sniff_file_delimiter
from .textio import iter_text_lines
from .types import RawRow

logger = logging.getLogger(__name__)

FALLBACK_DELIMITER = ","


class UnreadableRow(dict):
    """Placeholder yielded for a line the csv parser rejected; carries the parser error."""

    def __init__(self, error: str, line_num: int):
        super().__init__()
        self.error = error
        self.line_num = line_num


def iter_records(csv_path, delimiter: str) -> Iterator[RawRow]:
    """
    Yield one header-keyed dict per data row.

    Single pass: the file stays open while the generator is consumed and rows
    are never buffered. A row the parser cannot read comes out as an
    UnreadableRow so the caller can count it; reading goes on with the next line.
    """
    reader = _csv.DictReader(iter_text_lines(csv_path), delimiter=delimiter)
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except _csv.Error as e:
            logger.error("Unreadable csv record near line %d: %s", reader.line_num, e)
            yield UnreadableRow(str(e), reader.line_num)
            continue
        # DictReader stores surplus cells under None
        row.pop(None, None)
        yield row


def resolve_delimiter(csv_path: Path, delimiter: Optional[str] = None) -> str:
    """Use the given delimiter, else sniff it, else fall back to ','."""
    if delimiter:
        return delimiter
    csv_path = Path(csv_path)
    if not csv_path.is_file():
        raise ConfigError(f"Source file not found: {csv_path}")
    try:
        sniffed = sniff_file_delimiter(csv_path)
    except OSError as e:
        raise ConfigError(f"Failed to read `{csv_path}`: {e}") from e
    if sniffed is None:
        logger.warning("Could not detect delimiter of %s, assuming %r", csv_path, FALLBACK_DELIMITER)
        return FALLBACK_DELIMITER
    logger.info("Detected delimiter %r for %s", sniffed, csv_path)
    return sniffed
