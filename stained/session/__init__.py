"""
Session module - in-memory matches mixing human and bot seats.

Provides:
- MatchSession: one match, seat enforcement, notifications
- SessionManager: tracks sessions by ID
"""

from .manager import (
    MatchSession,
    SessionManager,
    SessionState,
    SessionError,
    SeatInfo,
)

__all__ = [
    "MatchSession",
    "SessionManager",
    "SessionState",
    "SessionError",
    "SeatInfo",
]
