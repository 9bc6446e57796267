"""
Session Manager - Creates and manages match sessions.

A session wraps one GameState and a fixed list of seats. Each seat
is either a human (actions arrive through process_action) or a bot
(actions are generated as soon as it becomes the bot's turn).

Responsibilities the engine leaves to the session:
- Only the seat whose turn it is may act
- Human seats are notified with their own redacted view after
  every action
- Bots keep playing until a human seat is up or the game ends

Sessions are in-memory only.
"""

from __future__ import annotations
import json
import logging
import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable

from pydantic import ValidationError

from ..api.schemas import ActionRequest, ErrorResponse, FinalState, PlayerView
from ..api.views import build_final_state, build_player_view
from ..bots import BotPolicy, create_policy
from ..config import GameConfig
from ..engine_core.action import Action
from ..engine_core.reducer import Reducer
from ..engine_core.setup import init_game
from ..engine_core.state import GameState

logger = logging.getLogger(__name__)

# (player_id, message) for every human seat after each action
NoticeCallback = Callable[[str, str], None]


class SessionState(Enum):
    """State of a match session."""
    CREATED = "created"  # Waiting for start()
    ACTIVE = "active"  # Game in progress
    GAME_OVER = "game_over"  # Game completed


class SessionError(Exception):
    """Raised when a session request cannot be honored."""

    def __init__(self, message: str, error_code: str = "SESSION_ERROR", reason: str | None = None):
        self.error_code = error_code
        self.reason = reason
        super().__init__(message)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=str(self), error_code=self.error_code, reason=self.reason)


@dataclass(frozen=True)
class SeatInfo:
    """A seat at the table. bot_level is None for humans."""
    player_id: str
    bot_level: int | None = None

    @classmethod
    def human(cls, player_id: str) -> SeatInfo:
        return cls(player_id=player_id)

    @classmethod
    def bot(cls, player_id: str, level: int = 1) -> SeatInfo:
        return cls(player_id=player_id, bot_level=level)

    @property
    def is_human(self) -> bool:
        return self.bot_level is None


@dataclass
class MatchSession:
    """
    An ephemeral match between human and bot seats.

    Seat order is turn order; the engine addresses players by seat index.
    """
    session_id: str
    seats: list[SeatInfo]
    game_state: GameState
    created_at: float
    bots: dict[int, BotPolicy] = field(default_factory=dict)
    state: SessionState = SessionState.CREATED
    reducer: Reducer = field(default_factory=Reducer)

    @classmethod
    def create(
        cls,
        seats: list[SeatInfo],
        seed: int | None = None,
        config: GameConfig | None = None,
    ) -> MatchSession:
        game_state = init_game(len(seats), seed=seed, config=config)
        ids = [seat.player_id for seat in seats]
        if len(set(ids)) != len(ids):
            raise SessionError("Player IDs must be unique")
        bots = {
            idx: create_policy(seat.bot_level, seed=None if seed is None else seed + idx)
            for idx, seat in enumerate(seats)
            if not seat.is_human
        }
        return cls(
            session_id=str(uuid.uuid4()),
            seats=list(seats),
            game_state=game_state,
            created_at=time.time(),
            bots=bots,
        )

    # -- queries ---------------------------------------------------------

    @property
    def player_ids(self) -> list[str]:
        return [seat.player_id for seat in self.seats]

    @property
    def current_player_id(self) -> str:
        return self.seats[self.game_state.curr_player_idx].player_id

    @property
    def is_game_over(self) -> bool:
        return self.game_state.is_finished()

    def seat_index(self, player_id: str) -> int:
        for idx, seat in enumerate(self.seats):
            if seat.player_id == player_id:
                return idx
        raise SessionError(f"Unknown player ID: {player_id}", error_code="UNKNOWN_PLAYER")

    def human_seat_indices(self) -> list[int]:
        return [idx for idx, seat in enumerate(self.seats) if seat.is_human]

    def player_scores(self) -> list[int]:
        return self.game_state.player_scores()

    def winner_ids(self) -> list[str]:
        """Every player sharing the top score; empty until the game ends."""
        if not self.is_game_over:
            return []
        return [self.seats[idx].player_id for idx in self.game_state.winners()]

    def player_view(self, player_id: str) -> PlayerView:
        return build_player_view(self.game_state, self.seat_index(player_id), self.player_ids)

    def final_state(self) -> FinalState:
        if not self.is_game_over:
            raise SessionError("Game is not finished", error_code="GAME_NOT_FINISHED")
        return build_final_state(self.game_state, self.player_ids)

    # -- flow ------------------------------------------------------------

    def start(self, game_id: int, notice_cb: NoticeCallback) -> None:
        """Announce the match to humans and run bots up to the first human turn."""
        if self.state != SessionState.CREATED:
            raise SessionError("Session already started")
        self.state = SessionState.ACTIVE
        message = json.dumps({"action": "start", "game_id": game_id})
        for idx in self.human_seat_indices():
            notice_cb(self.seats[idx].player_id, message)
        self._process_bots(notice_cb)

    def process_action(
        self,
        player_id: str,
        request: ActionRequest | dict[str, Any] | str,
        notice_cb: NoticeCallback,
    ) -> None:
        """
        Apply a human seat's action, then let bots play.

        Raises SessionError if the game is over, it is not this
        player's turn, the request is malformed or the engine
        rejects the action.
        """
        if self.state == SessionState.CREATED:
            raise SessionError("Session not started")
        if self.is_game_over:
            raise SessionError("Game is over", error_code="GAME_ALREADY_OVER")
        seat = self.seat_index(player_id)
        if seat != self.game_state.curr_player_idx:
            raise SessionError(f"Not {player_id}'s turn", error_code="NOT_YOUR_TURN")

        action = self._parse(request)
        self._do_action(action, notice_cb)
        self._process_bots(notice_cb)

    def submit(
        self,
        player_id: str,
        request: ActionRequest | dict[str, Any] | str,
        notice_cb: NoticeCallback,
    ) -> ErrorResponse | None:
        """
        Like process_action, but reports a refusal instead of raising.

        Returns None when the action was applied.
        """
        try:
            self.process_action(player_id, request, notice_cb)
        except SessionError as e:
            logger.info("Refused action from %s: %s", player_id, e)
            return e.to_response()
        return None

    def _parse(self, request: ActionRequest | dict[str, Any] | str) -> Action:
        try:
            if isinstance(request, str):
                request = ActionRequest.model_validate_json(request)
            elif isinstance(request, dict):
                request = ActionRequest.model_validate(request)
        except ValidationError as e:
            raise SessionError(f"Invalid action: {e}", error_code="INVALID_REQUEST") from e
        return request.to_action()

    def _do_action(self, action: Action, notice_cb: NoticeCallback) -> None:
        result = self.reducer.apply(self.game_state, action)
        if not result.success:
            reason = result.reason.value if result.reason is not None else None
            raise SessionError(result.error, error_code=result.error_code, reason=reason)
        if result.game_over:
            self.state = SessionState.GAME_OVER
            logger.info("Session %s finished, winners %s", self.session_id, self.winner_ids())
        for idx in self.human_seat_indices():
            player_id = self.seats[idx].player_id
            notice_cb(player_id, self.player_view(player_id).model_dump_json())

    def _process_bots(self, notice_cb: NoticeCallback) -> None:
        while not self.is_game_over:
            bot = self.bots.get(self.game_state.curr_player_idx)
            if bot is None:
                return
            decision = bot.decide(self.game_state)
            logger.debug(
                "Bot %s: %s",
                self.seats[self.game_state.curr_player_idx].player_id,
                decision.describe(),
            )
            self._do_action(decision.action, notice_cb)


class SessionManager:
    """
    Tracks active sessions by ID.

    No persistence - sessions are in-memory only.
    """

    def __init__(self):
        self._sessions: dict[str, MatchSession] = {}

    def create_session(
        self,
        seats: list[SeatInfo],
        seed: int | None = None,
        config: GameConfig | None = None,
    ) -> MatchSession:
        session = MatchSession.create(seats, seed=seed, config=config)
        self._sessions[session.session_id] = session
        logger.info("Created session %s with %d seats", session.session_id, len(seats))
        return session

    def get_session(self, session_id: str) -> MatchSession | None:
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        return self._sessions.pop(session_id, None) is not None

    def list_sessions(self) -> list[str]:
        return list(self._sessions)
