from __future__ import annotations
import logging
from typing import Iterator

logger = logging.getLogger(__name__)

PRIMARY_ENCODING = "utf-8"
# Excel and most German shop/ERP exports write Windows-1252
FALLBACK_ENCODING = "cp1252"

_BOM = b"\xef\xbb\xbf"


def decode_line(raw: bytes, line_num: int = 0) -> str:
    """Decode one physical line as UTF-8, falling back to cp1252 for that line only."""
    try:
        return raw.decode(PRIMARY_ENCODING)
    except UnicodeDecodeError:
        logger.warning("Line %d is not valid UTF-8, decoding it as %s", line_num, FALLBACK_ENCODING)
        return raw.decode(FALLBACK_ENCODING, errors="replace")


def iter_text_lines(path) -> Iterator[str]:
    """
    Yield decoded lines (line endings kept) from a file of unknown encoding.

    Decoding happens per line, so one badly encoded cell never stops the
    lines after it.
    """
    with open(path, "rb") as f:
        for line_num, raw in enumerate(f, start=1):
            if line_num == 1 and raw.startswith(_BOM):
                raw = raw[len(_BOM):]
            yield decode_line(raw, line_num)
