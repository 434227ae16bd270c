"""
records.py - Decoding of the CSV record stream

Rows are read with the csv module into dicts keyed by the (trimmed,
lowercased) header names, then decoded into Record values. Decoding failures
raise RecordParseError; it is up to the caller to drop the row.
"""

from __future__ import annotations
import csv
import math
import re
from typing import Dict, Iterator, Mapping, Optional, TextIO

from .core import CLIENT_ID_MAX, TX_ID_MAX, Record, RecordParseError, RecordType


Row = Mapping[str, Optional[str]]

# Plain decimal notation with an optional exponent. No underscores, no
# non-ASCII digits, no nan or inf.
_AMOUNT_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


def _field(row: Row, name: str) -> Optional[str]:
    value = row.get(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


def parse_id(text: Optional[str], maximum: int, name: str = "id") -> int:
    """
    Parse an unsigned integer id in [0, maximum].

    Raises:
        RecordParseError: If the text is blank, not a base-10 integer, or out of range.
    """
    if text is None or not text.strip():
        raise RecordParseError(f"missing {name}")
    text = text.strip()
    if not (text.isascii() and text.isdigit()):
        raise RecordParseError(f"invalid {name}: {text!r}")
    value = int(text)
    if value > maximum:
        raise RecordParseError(f"{name} out of range: {value}")
    return value


def parse_amount(text: Optional[str]) -> Optional[float]:
    """
    Parse a decimal amount. Blank text gives None.

    Raises:
        RecordParseError: If the amount is unparsable, negative, or not finite.
    """
    if text is None or not text.strip():
        return None
    text = text.strip()
    if not _AMOUNT_PATTERN.fullmatch(text):
        raise RecordParseError(f"invalid amount: {text!r}")
    value = float(text)
    # Exponents past the float range overflow to inf.
    if not math.isfinite(value):
        raise RecordParseError(f"amount must be finite: {text!r}")
    if value < 0:
        raise RecordParseError(f"amount must be non-negative: {text!r}")
    return value


def parse_record(row: Row) -> Record:
    """
    Decode one row into a Record.

    Deposit and withdrawal rows require an amount. Annotation rows may leave
    it blank; an amount given on an annotation is validated and then dropped.
    """
    record_type = RecordType.parse(_field(row, "type"))
    client = parse_id(_field(row, "client"), CLIENT_ID_MAX, "client")
    tx = parse_id(_field(row, "tx"), TX_ID_MAX, "tx")
    amount = parse_amount(_field(row, "amount"))

    if record_type.is_monetary:
        if amount is None:
            raise RecordParseError(f"{record_type.value} requires an amount")
        return Record(record_type, client, tx, amount)
    return Record(record_type, client, tx)


def read_rows(stream: TextIO) -> Iterator[Dict[str, Optional[str]]]:
    """
    Yield rows of a CSV stream as dicts keyed by header name.

    The first non-blank line is the header. Blank and whitespace-only lines
    are skipped. Missing trailing cells are None and extra cells are ignored.
    """
    reader = csv.reader(stream)
    header = None
    for cells in reader:
        if not any(cell.strip() for cell in cells):
            continue
        if header is None:
            header = [cell.strip().lower() for cell in cells]
            continue
        row: Dict[str, Optional[str]] = {}
        for i, name in enumerate(header):
            row[name] = cells[i] if i < len(cells) else None
        yield row


def iter_records(stream: TextIO) -> Iterator[Record]:
    """Yield the rows of a CSV stream that decode, silently dropping the rest."""
    for row in read_rows(stream):
        try:
            yield parse_record(row)
        except RecordParseError:
            continue
