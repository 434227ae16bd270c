"""
processor.py - Ledger Processor

The LedgerProcessor is the only component that mutates state. It consumes
records one at a time, in stream order, and routes each one to the owning
client's transaction log.

Key responsibilities:
    - Creates clients on first reference and transactions on deposit/withdrawal
    - Applies dispute, resolve and chargeback annotations to stored transactions
    - Absorbs every input anomaly as a NO_OP or REJECTED outcome, never raising
    - Evaluates accounts on demand through the evaluator
"""

from __future__ import annotations
from dataclasses import dataclass
import math
import sys
from typing import Dict, Iterable, Iterator, List, Optional, TextIO, Tuple

from .core import (
    # Types
    Account, ApplyOutcome, ApplyResult, Record, RecordType,
    Transaction, TransactionKind,
    # Exceptions
    RecordParseError, UnknownClient,
    # Helpers
    APPLIED, no_op, rejected,
)
from .evaluator import evaluate_account
from .records import Row, parse_record, read_rows
from .transaction_log import Client


@dataclass(slots=True)
class ProcessStats:
    """Row counts for one call to process() or read()."""
    applied: int = 0
    no_op: int = 0
    rejected: int = 0

    @property
    def total(self) -> int:
        return self.applied + self.no_op + self.rejected

    def count(self, outcome: ApplyOutcome) -> None:
        if outcome.result is ApplyResult.APPLIED:
            self.applied += 1
        elif outcome.result is ApplyResult.NO_OP:
            self.no_op += 1
        else:
            self.rejected += 1


class LedgerProcessor:
    """
    Replays a record stream into per-client transaction logs.

    Thread Safety:
        Not thread-safe. Each run owns its own processor.

    Example:
        processor = LedgerProcessor()
        processor.apply(Record(RecordType.DEPOSIT, client=1, tx=1, amount=1.0))
        processor.apply(Record(RecordType.WITHDRAWAL, client=1, tx=2, amount=0.5))
        processor.account(1)   # Account(available=0.5, held=0.0, locked=False)
    """

    def __init__(self, verbose: bool = False):
        """
        Create an empty processor.

        Args:
            verbose: Print no-ops and rejections to stderr (default: False)
        """
        self.verbose = verbose
        self._clients: Dict[int, Client] = {}
        self._stats = ProcessStats()

    # ========================================================================
    # MUTATION
    # ========================================================================

    def apply(self, record: Record) -> ApplyOutcome:
        """
        Apply one decoded record.

        Records that could never have been decoded (monetary without a valid
        amount) are REJECTED before any client is created.

        Returns:
            APPLIED if the record changed state, otherwise NO_OP or REJECTED
            with a reason.
        """
        reason = self._validate(record)
        if reason is not None:
            outcome = rejected(reason)
            self._finish(None, outcome, {"record": repr(record)})
            return outcome

        client = self._get_or_create_client(record.client)

        if record.type.is_monetary:
            outcome = self._apply_monetary(client, record)
        else:
            outcome = self._apply_annotation(client, record)

        self._finish(record, outcome)
        return outcome

    def ingest(self, row: Row) -> ApplyOutcome:
        """
        Decode and apply one raw row.

        Rows that fail to decode are dropped entirely (no client is created)
        and reported as REJECTED.
        """
        try:
            record = parse_record(row)
        except RecordParseError as e:
            outcome = rejected(str(e))
            self._finish(None, outcome, row)
            return outcome
        return self.apply(record)

    def process(self, rows: Iterable[Row]) -> ProcessStats:
        """Ingest every row, in order."""
        stats = ProcessStats()
        for row in rows:
            stats.count(self.ingest(row))
        return stats

    def apply_all(self, records: Iterable[Record]) -> ProcessStats:
        """Apply already decoded records, in order."""
        stats = ProcessStats()
        for record in records:
            stats.count(self.apply(record))
        return stats

    def read(self, stream: TextIO) -> ProcessStats:
        """Read and process a CSV stream with a header row."""
        return self.process(read_rows(stream))

    @staticmethod
    def _validate(record: Record) -> Optional[str]:
        if not record.type.is_monetary:
            return None
        amount = record.amount
        if amount is None:
            return f"{record.type.value} requires an amount"
        if not isinstance(amount, (int, float)) or isinstance(amount, bool):
            return f"amount must be a number, got {type(amount).__name__}"
        if not math.isfinite(amount):
            return f"amount must be finite: {amount}"
        if amount < 0:
            return f"amount must be non-negative: {amount}"
        return None

    def _get_or_create_client(self, client_id: int) -> Client:
        client = self._clients.get(client_id)
        if client is None:
            client = Client(client_id)
            self._clients[client_id] = client
        return client

    def _apply_monetary(self, client: Client, record: Record) -> ApplyOutcome:
        transaction = Transaction(TransactionKind.from_record_type(record.type), record.amount)
        replaced = client.log.insert(record.tx, transaction)
        if replaced is not None and self.verbose:
            print(f"REPLACED: client {record.client} tx {record.tx} (duplicate id)", file=sys.stderr)
        return APPLIED

    def _apply_annotation(self, client: Client, record: Record) -> ApplyOutcome:
        transaction = client.log.get(record.tx)
        if transaction is None:
            return no_op("transaction not found")

        transitions = {
            RecordType.DISPUTE: transaction.dispute,
            RecordType.RESOLVE: transaction.resolve,
            RecordType.CHARGEBACK: transaction.chargeback,
        }
        return transitions[record.type]()

    def _finish(self, record: Optional[Record], outcome: ApplyOutcome, row: Optional[Row] = None) -> None:
        self._stats.count(outcome)
        if not self.verbose or outcome.applied:
            return
        if outcome.result is ApplyResult.REJECTED:
            print(f"REJECTED: {outcome.reason} in row {dict(row)!r}", file=sys.stderr)
        else:
            print(f"NO-OP: {record.type.value} client {record.client} tx {record.tx}: {outcome.reason}",
                  file=sys.stderr)

    # ========================================================================
    # READ-ONLY ACCESS
    # ========================================================================

    def get_client(self, client_id: int) -> Client:
        """
        Return the client with the given id.

        Raises:
            UnknownClient: If no record ever referenced the client.
        """
        client = self._clients.get(client_id)
        if client is None:
            raise UnknownClient(f"Client {client_id} not found")
        return client

    def clients(self) -> List[Client]:
        """All known clients, in first-seen order."""
        return list(self._clients.values())

    def client_ids(self) -> List[int]:
        return list(self._clients)

    def account(self, client_id: int) -> Account:
        """Evaluate one client's account from its full log."""
        return evaluate_account(self.get_client(client_id).log)

    def accounts(self) -> Iterator[Tuple[int, Account]]:
        """Yield (client id, account) for every known client."""
        for client_id, client in self._clients.items():
            yield client_id, evaluate_account(client.log)

    def snapshot(self) -> Dict[int, Account]:
        return dict(self.accounts())

    def get_stats(self) -> Dict[str, int]:
        """
        Counters for everything this processor has seen.

        Returns:
            Dictionary with:
            - 'clients': Number of known clients
            - 'transactions': Number of stored transactions across all logs
            - 'applied', 'no_op', 'rejected': Row outcome counts
        """
        return {
            'clients': len(self._clients),
            'transactions': sum(len(c.log) for c in self._clients.values()),
            'applied': self._stats.applied,
            'no_op': self._stats.no_op,
            'rejected': self._stats.rejected,
        }

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._clients

    def __len__(self) -> int:
        return len(self._clients)

    def __repr__(self) -> str:
        return f"LedgerProcessor({len(self._clients)} clients)"
