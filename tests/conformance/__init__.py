"""
Conformance Test Suite

This suite defines the normative behavior of the account fold and the
processor. The tests are organized by invariant:
1. test_determinism.py - Repeated evaluation and replay give identical accounts
2. test_conservation.py - total = available + held, monetary sums
3. test_locking.py - Chargeback acceptance and lock stickiness
4. test_disputes.py - Dispute / resolve round trips
5. test_isolation.py - Clients never affect each other

These tests use hypothesis for property-based testing.
"""
