"""
I/O utilities for reading log files and writing parse results.
"""

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from .format import Entry
from .models import ParsedLine

logger = logging.getLogger(__name__)


def iter_log_lines(file_path: str,
                   limit: Optional[int] = None,
                   skip_blank: bool = True) -> Iterator[Tuple[int, str]]:
    """
    Yield ``(line_number, line)`` pairs from a log file.

    Line endings are stripped. Undecodable bytes are replaced rather than
    aborting the whole file.

    Args:
        file_path: Log file to read.
        limit: Read at most this many physical lines; 0 reads none.
        skip_blank: Drop empty lines. They are then neither matched nor
            counted, even by a format that matches the empty line.
    """
    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        for line_num, line in enumerate(f, 1):
            if limit is not None and line_num > limit:
                break
            line = line.rstrip('\r\n')
            if skip_blank and not line:
                continue
            yield line_num, line


def count_lines(file_path: str) -> int:
    """Count lines in a file, used to size progress bars."""
    with open(file_path, 'rb') as f:
        return sum(1 for _ in f)


def parsed_line(line_number: int, line: str, entry: Optional[Entry],
                fields: Optional[List[str]] = None) -> ParsedLine:
    """Build the output record for one input line."""
    if entry is None:
        return ParsedLine(line_number=line_number, line=line, matched=False)

    values = entry.as_dict()
    if fields:
        values = {name: entry.get(name) for name in fields}
    return ParsedLine(line_number=line_number, line=line, matched=True,
                      fields=values)


class JSONLWriter:
    """
    Writer for JSONL (JSON Lines) format.
    """

    def __init__(self, file_path: str):
        self.file_path = Path(file_path)
        self.file_handle = None

    def __enter__(self):
        self.file_handle = open(self.file_path, 'w', encoding='utf-8')
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.file_handle:
            self.file_handle.close()
            self.file_handle = None

    def write_record(self, record: ParsedLine) -> None:
        """Write a single parse result to the JSONL file."""
        if not self.file_handle:
            raise ValueError("JSONLWriter not opened")

        json.dump(record.to_dict(), self.file_handle, ensure_ascii=False)
        self.file_handle.write('\n')

    def write_records(self, records: List[ParsedLine]) -> None:
        for record in records:
            self.write_record(record)


def read_records(file_path: str) -> List[ParsedLine]:
    """Read parse results back from a JSONL file."""
    records = []

    with open(file_path, 'r', encoding='utf-8') as f:
        for line_num, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue

            try:
                records.append(ParsedLine.from_dict(json.loads(line)))
            except (json.JSONDecodeError, KeyError, TypeError) as e:
                logger.warning("Skipping invalid record at line %d: %s", line_num, e)

    return records


class ParseReport:
    """
    Collects statistics while a log file is parsed.
    """

    def __init__(self, max_unmatched_samples: int = 100):
        self.total_lines = 0
        self.matched_lines = 0
        self.field_values: Dict[str, Dict[str, int]] = defaultdict(lambda: defaultdict(int))
        self.unmatched_samples: List[Tuple[int, str]] = []
        self.max_unmatched_samples = max_unmatched_samples

    def add_match(self, entry: Entry, tracked_fields: Tuple[str, ...] = ('status',)) -> None:
        """Record a successful match."""
        self.total_lines += 1
        self.matched_lines += 1

        for name in tracked_fields:
            value = entry.get(name)
            if value is not None:
                self.field_values[name][value] += 1

    def add_no_match(self, line_number: int, line: str) -> None:
        """Record a line that did not fit the format."""
        self.total_lines += 1

        if len(self.unmatched_samples) < self.max_unmatched_samples:
            self.unmatched_samples.append((line_number, line[:200]))

    def get_summary(self) -> Dict:
        """Get summary statistics."""
        match_rate = (self.matched_lines / self.total_lines * 100) if self.total_lines > 0 else 0

        return {
            'total_lines': self.total_lines,
            'matched_lines': self.matched_lines,
            'unmatched_lines': self.total_lines - self.matched_lines,
            'match_rate': match_rate,
            'field_distribution': {
                name: dict(sorted(counts.items(), key=lambda x: x[1], reverse=True))
                for name, counts in self.field_values.items()
            },
            'unmatched_samples': self.unmatched_samples[:20],
        }
