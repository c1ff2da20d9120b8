"""Copy-on-write workflows for snapshots and deduction ledgers."""

from . import ledger, snapshot

__all__ = ["ledger", "snapshot"]
