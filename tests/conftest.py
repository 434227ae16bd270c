"""
conftest.py - Shared pytest fixtures for txledger tests

Provides:
- Empty and pre-populated processors
- A replay() helper that feeds CSV text through a fresh processor
- Record constructors for the five record types
"""

import io
import textwrap

import pytest

from txledger import LedgerProcessor, Record, RecordType


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def replay(csv_text: str, verbose: bool = False) -> LedgerProcessor:
    """Process CSV text (header included) with a fresh processor."""
    processor = LedgerProcessor(verbose=verbose)
    processor.read(io.StringIO(textwrap.dedent(csv_text)))
    return processor


def deposit(client: int, tx: int, amount: float) -> Record:
    return Record(RecordType.DEPOSIT, client, tx, amount)


def withdrawal(client: int, tx: int, amount: float) -> Record:
    return Record(RecordType.WITHDRAWAL, client, tx, amount)


def dispute(client: int, tx: int) -> Record:
    return Record(RecordType.DISPUTE, client, tx)


def resolve(client: int, tx: int) -> Record:
    return Record(RecordType.RESOLVE, client, tx)


def chargeback(client: int, tx: int) -> Record:
    return Record(RecordType.CHARGEBACK, client, tx)


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def processor():
    """Fresh processor with no clients."""
    return LedgerProcessor()


@pytest.fixture
def funded_processor():
    """Client 1 with two deposits (tx 1: 10.0, tx 2: 5.0)."""
    processor = LedgerProcessor()
    processor.apply(deposit(1, 1, 10.0))
    processor.apply(deposit(1, 2, 5.0))
    return processor
