"""
transaction_log.py - Per-client transaction storage

A Client owns exactly one TransactionLog: an insertion-ordered mapping from
transaction id to Transaction. The order of the log is the order in which
balances are folded, so it must never be replaced by an unordered mapping.
"""

from __future__ import annotations
from typing import Dict, Iterator, List, Optional, Tuple

from .core import Account, Transaction
from .evaluator import evaluate_account


class TransactionLog:
    """
    Insertion-ordered mapping of transaction id -> Transaction.

    Inserting an id that already exists replaces the stored transaction
    (last write wins) and moves it to the end of the log, so the log order is
    the creation order of the transactions it currently holds. Annotations
    mutate transactions in place and never reorder the log.
    """

    def __init__(self):
        self._entries: Dict[int, Transaction] = {}

    def insert(self, tx_id: int, transaction: Transaction) -> Optional[Transaction]:
        """
        Store a transaction under tx_id.

        Returns:
            The transaction that was replaced, or None if the id was new.
        """
        replaced = self._entries.pop(tx_id, None)
        self._entries[tx_id] = transaction
        return replaced

    def get(self, tx_id: int) -> Optional[Transaction]:
        return self._entries.get(tx_id)

    def items(self) -> Iterator[Tuple[int, Transaction]]:
        return iter(self._entries.items())

    def transactions(self) -> List[Transaction]:
        """Transactions in fold order."""
        return list(self._entries.values())

    def __contains__(self, tx_id: object) -> bool:
        return tx_id in self._entries

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TransactionLog({len(self._entries)} transactions)"


class Client:
    """A client id and its transaction log. Created on first reference, never deleted."""

    def __init__(self, client_id: int):
        self.id = client_id
        self.log = TransactionLog()

    def account(self) -> Account:
        """Evaluate the current account snapshot from the full log."""
        return evaluate_account(self.log)

    def __repr__(self) -> str:
        return f"Client({self.id}, {len(self.log)} transactions)"
