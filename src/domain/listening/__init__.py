"""Listening time accumulation: ledger, session state machine and buffering."""

from .buffer import DetectionBuffer
from .ledger import LedgerSnapshot, ListeningLedger
from .session import ClosedPlay, ListeningSession, OpenPlay

__all__ = [
    "ClosedPlay",
    "DetectionBuffer",
    "LedgerSnapshot",
    "ListeningLedger",
    "ListeningSession",
    "OpenPlay",
]
