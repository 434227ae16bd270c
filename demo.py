#!/usr/bin/env python3
"""
demo.py - Walkthrough: How a Client's Account is Derived

Each step applies a few records to a processor and prints the resulting
account, showing how deposits, withdrawals and dispute annotations fold into
the final snapshot.

Run:
    python demo.py
"""

from txledger import (
    LedgerProcessor, Record, RecordType, render_report,
)


def show(processor: LedgerProcessor, client_id: int, title: str) -> None:
    account = processor.account(client_id)
    print(f"\n{title}")
    print(f"  available={account.available}  held={account.held}  "
          f"total={account.total}  locked={account.locked}")


def main():
    processor = LedgerProcessor(verbose=True)

    # Step 1: deposits credit available funds
    processor.apply(Record(RecordType.DEPOSIT, 1, 1, 10.0))
    processor.apply(Record(RecordType.DEPOSIT, 1, 2, 5.0))
    show(processor, 1, "1. Two deposits")

    # Step 2: a withdrawal is applied only if available covers it
    processor.apply(Record(RecordType.WITHDRAWAL, 1, 3, 4.0))
    processor.apply(Record(RecordType.WITHDRAWAL, 1, 4, 100.0))
    show(processor, 1, "2. One funded and one unfunded withdrawal")

    # Step 3: a dispute moves the deposit into held funds
    processor.apply(Record(RecordType.DISPUTE, 1, 2))
    show(processor, 1, "3. Deposit tx 2 disputed")

    # Step 4: resolve releases it again
    processor.apply(Record(RecordType.RESOLVE, 1, 2))
    show(processor, 1, "4. Dispute on tx 2 resolved")

    # Step 5: chargeback without an open dispute is ignored
    processor.apply(Record(RecordType.CHARGEBACK, 1, 2))
    show(processor, 1, "5. Chargeback on an undisputed transaction")

    # Step 6: dispute + chargeback locks the account
    processor.apply(Record(RecordType.DISPUTE, 1, 2))
    processor.apply(Record(RecordType.CHARGEBACK, 1, 2))
    show(processor, 1, "6. Tx 2 charged back")

    # Step 7: a second, independent client
    processor.apply(Record(RecordType.DEPOSIT, 2, 1, 3.5))
    show(processor, 2, "7. Client 2 is unaffected")

    print("\nReport:")
    print(render_report(processor), end="")
    print(f"\nStats: {processor.get_stats()}")


if __name__ == "__main__":
    main()
