"""CSV parsing for bulk imports.

Turns uploaded text into normalised headers plus string-keyed rows. Row-level
problems are collected as messages rather than raised, so a file with a few
ragged lines still yields its good rows.
"""

import csv
import io
import re
from dataclasses import dataclass, field

from gainai.exceptions import ParseError

_WHITESPACE_RE = re.compile(r"\s+")

# Number of parse messages reported back to the caller
MAX_PARSE_MESSAGES = 10


@dataclass
class ParsedCSV:
    """Result of parsing a CSV document."""

    headers: list[str]
    rows: list[dict[str, str]]
    errors: list[str] = field(default_factory=list)


def normalize_header(header: str) -> str:
    """Trim, lowercase and collapse whitespace runs to underscores."""
    return _WHITESPACE_RE.sub("_", header.strip().lower())


def _is_blank(record: list[str]) -> bool:
    return not any(cell.strip() for cell in record)


def _dedupe_headers(headers: list[str], errors: list[str]) -> list[str]:
    """Suffix repeated headers with _1, _2 ... so no column overwrites another."""
    seen = set(headers)
    counts: dict[str, int] = {}
    result = []
    for header in headers:
        if header not in counts:
            counts[header] = 0
            result.append(header)
            continue

        renamed = header
        while renamed in seen:
            counts[header] += 1
            renamed = f"{header}_{counts[header]}"
        seen.add(renamed)
        result.append(renamed)
        errors.append(f'Duplicate column "{header}" renamed to "{renamed}"')
    return result


def parse_csv(text: str) -> ParsedCSV:
    """Parse CSV text into headers and rows.

    Blank lines are skipped. Rows with too few or too many fields are kept
    (missing columns are absent, extra fields dropped) and reported in
    ``errors``. A line with malformed quoting is reported and skipped, and
    reading carries on with the next line. Headers that normalise to the same
    name are suffixed (``name``, ``name_1``) and reported.

    Raises:
        ParseError: If the text is empty, has no header row, or no rows could
            be recovered from a document the tokenizer rejected.
    """
    if not text or not text.strip():
        raise ParseError("CSV file is empty")

    reader = csv.reader(io.StringIO(text, newline=""), strict=True)
    headers: list[str] | None = None
    rows: list[dict[str, str]] = []
    errors: list[str] = []
    rejected_lines = 0

    while True:
        try:
            record = next(reader)
        except StopIteration:
            break
        except csv.Error as exc:
            errors.append(f"Line {reader.line_num}: {exc}")
            rejected_lines += 1
            continue

        if _is_blank(record):
            continue

        if headers is None:
            headers = _dedupe_headers([normalize_header(value) for value in record], errors)
            continue

        row_number = len(rows) + 1
        if len(record) < len(headers):
            errors.append(
                f"Row {row_number}: Too few fields: expected {len(headers)} fields but parsed {len(record)}"
            )
        elif len(record) > len(headers):
            errors.append(
                f"Row {row_number}: Too many fields: expected {len(headers)} fields but parsed {len(record)}"
            )

        rows.append(dict(zip(headers, record)))

    if rejected_lines and not rows:
        raise ParseError("Failed to parse CSV file", details=errors[:MAX_PARSE_MESSAGES])

    if headers is None:
        raise ParseError("CSV file has no header row")

    return ParsedCSV(headers=headers, rows=rows, errors=errors)
