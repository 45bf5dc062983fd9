"""State/store layer.

This package is the single source of truth for a ledger's tables, the
guards that protect them and the fan-out of events emitted on commit.
"""
