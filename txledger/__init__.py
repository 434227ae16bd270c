"""
txledger - Transaction Ledger Replay Engine

Replays an ordered stream of deposit, withdrawal, dispute, resolve and
chargeback records and derives the final account of every client.

Usage:
    from txledger import LedgerProcessor, render_report

    processor = LedgerProcessor()
    with open("transactions.csv", newline="") as stream:
        processor.read(stream)

    processor.account(1)            # Account(available=..., held=..., locked=...)
    print(render_report(processor))
"""

# Core types
from .core import (
    Record,
    RecordType,
    Transaction,
    TransactionKind,
    DisputeState,
    Account,
    ApplyResult,
    ApplyOutcome,
    LedgerError,
    RecordParseError,
    UnknownClient,
    CLIENT_ID_MAX,
    TX_ID_MAX,
    REPORT_HEADER,
)

# Storage
from .transaction_log import TransactionLog, Client

# Evaluation
from .evaluator import evaluate_account, fold_transactions

# Processing
from .processor import LedgerProcessor, ProcessStats

# Decoding
from .records import (
    parse_id,
    parse_amount,
    parse_record,
    read_rows,
    iter_records,
)

# Reporting
from .report import (
    format_amount,
    format_row,
    iter_report_rows,
    write_report,
    render_report,
)

__all__ = [
    # Core
    'Record', 'RecordType', 'Transaction', 'TransactionKind', 'DisputeState',
    'Account', 'ApplyResult', 'ApplyOutcome',
    'LedgerError', 'RecordParseError', 'UnknownClient',
    'CLIENT_ID_MAX', 'TX_ID_MAX', 'REPORT_HEADER',
    # Storage
    'TransactionLog', 'Client',
    # Evaluation
    'evaluate_account', 'fold_transactions',
    # Processing
    'LedgerProcessor', 'ProcessStats',
    # Decoding
    'parse_id', 'parse_amount', 'parse_record', 'read_rows', 'iter_records',
    # Reporting
    'format_amount', 'format_row', 'iter_report_rows', 'write_report', 'render_report',
]

__version__ = "0.1.0"
