from __future__ import annotations
import csv as _csv
import logging
from itertools import islice
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from .textio import iter_text_lines

logger = logging.getLogger(__name__)

CANDIDATE_DELIMITERS = (";", ",", "\t")
SAMPLE_SIZE = 5


def delimiter_stats(lines: Iterable[str], candidates: Sequence[str] = CANDIDATE_DELIMITERS) -> Dict[str, int]:
    """
    Score each candidate delimiter against the sample.

    A record only counts when it splits into more than one field; its score is
    the record itself plus its fields, so wider and more numerous splits win.
    """
    sample: List[str] = [ln for ln in lines if ln.strip()]
    stats: Dict[str, int] = {}
    for delim in candidates:
        score = 0
        for record in _csv.reader(sample, delimiter=delim):
            if len(record) > 1:
                score += 1 + len(record)
        stats[delim] = score
    return stats


def detect_delimiter(lines: Iterable[str], candidates: Sequence[str] = CANDIDATE_DELIMITERS) -> Optional[str]:
    """
    Return the best scoring delimiter, or None when no candidate splits any line.

    Ties go to the candidate listed first.
    """
    stats = delimiter_stats(lines, candidates)
    best = None
    best_score = 0
    for delim in candidates:
        if stats[delim] > best_score:
            best, best_score = delim, stats[delim]
    logger.debug("delimiter stats: %s", {repr(k): v for k, v in stats.items()})
    return best


def sniff_file_delimiter(path: Path, sample_size: int = SAMPLE_SIZE,
                         candidates: Sequence[str] = CANDIDATE_DELIMITERS) -> Optional[str]:
    """Detect the delimiter from the first `sample_size` lines of `path`."""
    lines_iter = iter_text_lines(path)
    try:
        lines = list(islice(lines_iter, sample_size))
    finally:
        lines_iter.close()
    return detect_delimiter(lines, candidates)
