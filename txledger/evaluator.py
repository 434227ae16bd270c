"""
evaluator.py - Account State Evaluator

Pure fold of a client's transaction log into an Account snapshot. The log is
never mutated and every call re-derives the snapshot from scratch.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable

from .core import Account, Transaction, TransactionKind

if TYPE_CHECKING:
    from .transaction_log import TransactionLog


def fold_transactions(transactions: Iterable[Transaction]) -> Account:
    """
    Fold transactions, in order, into an Account.

    For each transaction, using its final dispute state:
        1. Once locked, every remaining transaction is skipped.
        2. A charged back transaction locks the account. Its amount is neither
           added to nor deducted from held.
        3. A disputed transaction adds its amount to held.
        4. Otherwise a deposit credits available, and a withdrawal debits it
           only if available covers the amount.

    Args:
        transactions: Transactions in log order.

    Returns:
        A new Account.
    """
    available = 0.0
    held = 0.0
    locked = False

    for tx in transactions:
        if locked:
            break
        if tx.charged_back:
            locked = True
        elif tx.disputed:
            held += tx.amount
        elif tx.kind is TransactionKind.DEPOSIT:
            available += tx.amount
        elif tx.kind is TransactionKind.WITHDRAWAL:
            if available >= tx.amount:
                available -= tx.amount

    return Account(available=available, held=held, locked=locked)


def evaluate_account(log: TransactionLog) -> Account:
    """Evaluate a client's log in insertion order."""
    return fold_transactions(log.transactions())
