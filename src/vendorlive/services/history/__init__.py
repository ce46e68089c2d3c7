"""Location session ledger."""

from .ledger import LocationHistoryLedger

__all__ = ["LocationHistoryLedger"]
