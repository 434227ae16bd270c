"""
Determinism Conformance Tests

INVARIANT: Evaluation is a pure function of the log.

    ∀ record streams R:
        account(c) = account(c)                   (repeated evaluation)
        replay(R).account(c) = replay(R).account(c)  (independent replays)

Evaluation never mutates the processor, so reading accounts in between
records cannot change the final result.
"""

from hypothesis import given, settings

from txledger import DisputeState, LedgerProcessor

from .strategies import record_streams


def _states(processor):
    return {
        client.id: [(tx_id, tx.kind, tx.amount, tx.state) for tx_id, tx in client.log.items()]
        for client in processor.clients()
    }


class TestDeterminismProperties:
    """Property-based determinism tests."""

    @given(record_streams)
    @settings(max_examples=100)
    def test_repeated_evaluation_identical(self, stream):
        """
        PROPERTY: Evaluating an unmodified log twice gives identical accounts.
        """
        processor = LedgerProcessor()
        processor.apply_all(stream)

        first = processor.snapshot()
        second = processor.snapshot()
        assert first == second
        for client_id, account in first.items():
            assert processor.account(client_id) == account

    @given(record_streams)
    @settings(max_examples=100)
    def test_independent_replays_identical(self, stream):
        """
        PROPERTY: Two processors fed the same stream reach the same accounts.
        """
        p1 = LedgerProcessor()
        p2 = LedgerProcessor()
        results1 = [p1.apply(r) for r in stream]
        results2 = [p2.apply(r) for r in stream]

        assert results1 == results2
        assert p1.snapshot() == p2.snapshot()
        assert p1.client_ids() == p2.client_ids()

    @given(record_streams)
    @settings(max_examples=100)
    def test_evaluation_has_no_side_effects(self, stream):
        """
        PROPERTY: Reading accounts after every record does not change the outcome.
        """
        observed = LedgerProcessor()
        untouched = LedgerProcessor()
        for record in stream:
            observed.apply(record)
            observed.snapshot()
            untouched.apply(record)

        assert _states(observed) == _states(untouched)
        assert observed.snapshot() == untouched.snapshot()


class TestDeterminismExamples:
    """Explicit determinism examples."""

    def test_snapshot_is_fresh_each_time(self):
        processor = LedgerProcessor()
        processor.process([{"type": "deposit", "client": "1", "tx": "1", "amount": "1.0"}])
        a = processor.account(1)
        b = processor.account(1)
        assert a == b
        assert a is not b

    def test_evaluation_leaves_states_untouched(self):
        processor = LedgerProcessor()
        processor.process([
            {"type": "deposit", "client": "1", "tx": "1", "amount": "1.0"},
            {"type": "dispute", "client": "1", "tx": "1", "amount": ""},
        ])
        processor.account(1)
        assert processor.get_client(1).log.get(1).state is DisputeState.DISPUTED
