"""
Core types for the transaction ledger replay engine.

This module provides the foundational data structures shared by every other module:
1. Enums: RecordType, TransactionKind, DisputeState, ApplyResult
2. Data structures: Record, Transaction, Account, ApplyOutcome
3. Exceptions: LedgerError and the domain-specific error types
4. Constants: id ranges and the report header

Nothing in this module performs I/O.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import math
from typing import Optional, Tuple


# ============================================================================
# CONSTANTS
# ============================================================================

# Client and transaction ids are 16-bit unsigned integers.
CLIENT_ID_MAX = 65535
TX_ID_MAX = 65535

REPORT_HEADER: Tuple[str, ...] = ("client", "available", "held", "total", "locked")


# ============================================================================
# EXCEPTIONS
# ============================================================================

class LedgerError(Exception):
    """Base exception for all ledger-related errors."""
    pass


class RecordParseError(LedgerError):
    """Raised when an input row cannot be decoded into a Record."""
    pass


class UnknownClient(LedgerError):
    """Raised when reading the account of a client id that was never seen."""
    pass


# ============================================================================
# ENUMS
# ============================================================================

class RecordType(Enum):
    """Type column of an input record."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    DISPUTE = "dispute"
    RESOLVE = "resolve"
    CHARGEBACK = "chargeback"

    @classmethod
    def parse(cls, text: Optional[str]) -> RecordType:
        """Case-insensitive lookup of a record type name."""
        if text is None:
            raise RecordParseError("missing record type")
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise RecordParseError(f"unknown record type: {text.strip()!r}") from None

    @property
    def is_monetary(self) -> bool:
        return self in (RecordType.DEPOSIT, RecordType.WITHDRAWAL)


class TransactionKind(Enum):
    """Monetary transaction kinds. Annotations are never stored as transactions."""
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"

    @classmethod
    def from_record_type(cls, record_type: RecordType) -> TransactionKind:
        if not record_type.is_monetary:
            raise ValueError(f"{record_type.value} is not a monetary record type")
        return cls(record_type.value)


class DisputeState(Enum):
    """
    Dispute lifecycle of a single transaction.

        NORMAL --dispute--> DISPUTED --resolve--> NORMAL
                                     --chargeback--> CHARGED_BACK (terminal)

    CHARGED_BACK is only reachable from DISPUTED.
    """
    NORMAL = "normal"
    DISPUTED = "disputed"
    CHARGED_BACK = "charged_back"


class ApplyResult(Enum):
    """
    Outcome of applying one input row to the ledger.

    APPLIED: The row changed ledger state.
    NO_OP: The row was well-formed but had no effect (unknown tx id,
           chargeback without dispute, resolve without dispute).
    REJECTED: The row could not be decoded and was dropped.
    """
    APPLIED = "applied"
    NO_OP = "no_op"
    REJECTED = "rejected"


@dataclass(frozen=True, slots=True)
class ApplyOutcome:
    """Result of applying a row, with a short reason for no-ops and rejections."""
    result: ApplyResult
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.result is ApplyResult.APPLIED

    def __repr__(self) -> str:
        if self.reason:
            return f"ApplyOutcome({self.result.value}: {self.reason})"
        return f"ApplyOutcome({self.result.value})"


APPLIED = ApplyOutcome(ApplyResult.APPLIED)


def no_op(reason: str) -> ApplyOutcome:
    return ApplyOutcome(ApplyResult.NO_OP, reason)


def rejected(reason: str) -> ApplyOutcome:
    return ApplyOutcome(ApplyResult.REJECTED, reason)


# ============================================================================
# CORE DATA STRUCTURES
# ============================================================================

@dataclass(frozen=True, slots=True)
class Record:
    """
    One decoded input row.

    Attributes:
        type: Record type (monetary or annotation).
        client: Client id.
        tx: Transaction id the row creates or annotates.
        amount: Monetary amount; None for annotation rows.
    """
    type: RecordType
    client: int
    tx: int
    amount: Optional[float] = None

    def __repr__(self) -> str:
        amount = "" if self.amount is None else f" {self.amount}"
        return f"Record({self.type.value} client={self.client} tx={self.tx}{amount})"


@dataclass(slots=True)
class Transaction:
    """
    A deposit or withdrawal plus the dispute state later rows attach to it.

    The amount and kind never change after creation. Only the state moves,
    through dispute(), resolve() and chargeback().
    """
    kind: TransactionKind
    amount: float
    state: DisputeState = field(default=DisputeState.NORMAL)

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise ValueError(f"Transaction kind must be TransactionKind, got {type(self.kind)}")
        if not math.isfinite(self.amount):
            raise ValueError(f"Transaction amount must be finite, got {self.amount}")
        if self.amount < 0:
            raise ValueError(f"Transaction amount must be non-negative, got {self.amount}")

    @property
    def disputed(self) -> bool:
        return self.state is not DisputeState.NORMAL

    @property
    def charged_back(self) -> bool:
        return self.state is DisputeState.CHARGED_BACK

    def dispute(self) -> ApplyOutcome:
        # A charged back transaction stays charged back; it is still disputed.
        if self.state is DisputeState.NORMAL:
            self.state = DisputeState.DISPUTED
        return APPLIED

    def resolve(self) -> ApplyOutcome:
        if self.state is DisputeState.DISPUTED:
            self.state = DisputeState.NORMAL
            return APPLIED
        if self.state is DisputeState.CHARGED_BACK:
            return no_op("transaction already charged back")
        return no_op("transaction not disputed")

    def chargeback(self) -> ApplyOutcome:
        if self.state is DisputeState.DISPUTED:
            self.state = DisputeState.CHARGED_BACK
            return APPLIED
        if self.state is DisputeState.CHARGED_BACK:
            return no_op("transaction already charged back")
        return no_op("transaction not disputed")


@dataclass(frozen=True, slots=True)
class Account:
    """
    Snapshot of a client's funds, derived from its transaction log.

    Attributes:
        available: Funds the client may withdraw.
        held: Funds frozen against disputes.
        locked: True once a charged back transaction has been folded.
    """
    available: float = 0.0
    held: float = 0.0
    locked: bool = False

    @property
    def total(self) -> float:
        return self.available + self.held
