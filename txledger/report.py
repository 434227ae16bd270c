"""
report.py - CSV rendering of account snapshots

One row per known client: client,available,held,total,locked. Rows follow the
processor's client order, which callers must not rely on.
"""

from __future__ import annotations
import csv
import io
from decimal import Decimal
from typing import Iterator, List, TextIO

from .core import REPORT_HEADER, Account
from .processor import LedgerProcessor


def format_amount(value: float) -> str:
    """
    Render a float as a plain decimal string.

    Uses the shortest repr of the float and strips exponent and trailing zeros:
    1.0 -> "1", 1.5 -> "1.5", 1e-05 -> "0.00001".
    """
    normalized = Decimal(repr(value)).normalize()
    if normalized == normalized.to_integral_value():
        return str(int(normalized))
    return format(normalized, 'f')


def format_row(client_id: int, account: Account) -> List[str]:
    return [
        str(client_id),
        format_amount(account.available),
        format_amount(account.held),
        format_amount(account.total),
        "true" if account.locked else "false",
    ]


def iter_report_rows(processor: LedgerProcessor) -> Iterator[List[str]]:
    """Yield the header followed by one row per client."""
    yield list(REPORT_HEADER)
    for client_id, account in processor.accounts():
        yield format_row(client_id, account)


def write_report(processor: LedgerProcessor, out: TextIO) -> None:
    writer = csv.writer(out, lineterminator="\n")
    writer.writerows(iter_report_rows(processor))


def render_report(processor: LedgerProcessor) -> str:
    buffer = io.StringIO()
    write_report(processor, buffer)
    return buffer.getvalue()
