"""
Game Service

Contains the session transition rules for the daily dish puzzle and the
session controller that ties together the date resolver, puzzle catalog
and session store.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Dict, Optional

from ..config.game_settings import (
    MAX_ACTIVE_PLAYERS, STARTING_QUALITY, SHARE_TITLE, SHARE_GLYPHS, SHARE_PADDING_GLYPH
)
from ..models.errors import MalformedDate, PuzzleNotAvailable, SessionTerminal
from ..models.game import GameSession, GameStatus, GuessRecord
from ..models.letter_pool import LetterPool
from ..models.puzzle import Direction, PuzzleRecord
from ..utils.game_logger import game_logger
from .catalog_service import PuzzleCatalog
from .date_service import DateResolver, decrement_date, increment_date, is_valid_date
from .matching_engine import match_ingredient, normalize_ingredient
from .session_store import PreviewDateStore, SessionStore


def new_session(puzzle: PuzzleRecord) -> GameSession:
    """Creates a fresh session for a puzzle."""
    return GameSession(
        puzzle_date=puzzle.date,
        adjective=puzzle.adjective,
        noun=puzzle.noun,
        remaining_adjective=puzzle.adjective,
        remaining_noun=puzzle.noun
    )


def reset_session(session: GameSession, puzzle: PuzzleRecord) -> GameSession:
    """Reinitializes every mutable field from the puzzle. Used by retry."""
    session.puzzle_date = puzzle.date
    session.adjective = puzzle.adjective
    session.noun = puzzle.noun
    session.remaining_adjective = puzzle.adjective
    session.remaining_noun = puzzle.noun
    session.quality = STARTING_QUALITY
    session.injuries = 0
    session.moves = 0
    session.history = []
    session.status = GameStatus.IN_PROGRESS
    return session


def apply_guess(session: GameSession, ingredient: str) -> GuessRecord:
    """
    Applies one ingredient to a session.

    Either every field is updated or, on error, nothing is. A guess that
    empties the noun wins even if it also exhausts quality.

    Returns:
        The appended GuessRecord

    Raises:
        SessionTerminal: If the session is already won or lost
        InvalidIngredient: If the ingredient fails normalization
    """
    if session.is_terminal:
        raise SessionTerminal(f"Game is already over ({session.status.value})")

    normalized = normalize_ingredient(ingredient)
    result = match_ingredient(normalized, session.remaining_adjective, session.remaining_noun)
    record = GuessRecord(ingredient=normalized, outcomes=result.outcomes)

    session.remaining_adjective = result.remaining_adjective
    session.remaining_noun = result.remaining_noun
    session.quality -= result.miss_count
    session.injuries += result.miss_count
    session.history.append(record)
    session.moves += 1

    if LetterPool(session.remaining_noun).is_exhausted():
        session.status = GameStatus.WON
    elif session.quality <= 0:
        session.status = GameStatus.LOST

    return record


def generate_share_text(session: GameSession) -> str:
    """
    Renders the session as spoiler-free share text.

    Each guess becomes one row of status glyphs, padded to the longest
    ingredient so the grid is rectangular.
    """
    if session.status == GameStatus.WON:
        headline = f"Won in {session.moves} moves"
    elif session.status == GameStatus.LOST:
        headline = f"Lost in {session.moves} moves"
    else:
        headline = f"In progress after {session.moves} moves"

    lines = [
        f"{SHARE_TITLE} {session.puzzle_date}",
        f"{headline}, quality {session.quality}/{STARTING_QUALITY}",
        ""
    ]

    width = max((len(record.outcomes) for record in session.history), default=0)
    for record in session.history:
        row = ''.join(SHARE_GLYPHS[outcome.status.value] for outcome in record.outcomes)
        lines.append(row + SHARE_PADDING_GLYPH * (width - len(record.outcomes)))

    return '\n'.join(lines) + '\n'


def result_message(session: GameSession) -> Optional[str]:
    """Banner text for a finished session."""
    if session.status == GameStatus.WON:
        moves = session.moves
        return (
            f"You cooked the {session.dish_name} in {moves} move{'s' if moves != 1 else ''} "
            f"losing {session.injuries} quality."
        )
    if session.status == GameStatus.LOST:
        return f"The dish was spoiled! It was {session.dish_name}."
    return None


@dataclass
class PlayContext:
    """The active puzzle date and session for one player."""
    player_id: str
    puzzle_date: str
    puzzle: Optional[PuzzleRecord]
    session: Optional[GameSession]
    persisted: bool = True


class GameService:
    """
    Session controller for all players.

    This class handles:
    - Resolving the current puzzle date (real clock or preview override)
    - Restoring or creating the session for that date
    - Applying ingredients and persisting after every guess
    - Retry, day-by-day navigation and returning to today
    - Display-ready state for the UI
    """

    def __init__(self, catalog: PuzzleCatalog, session_store: SessionStore,
                 preview_store: PreviewDateStore, date_resolver: DateResolver,
                 max_active_players: int = MAX_ACTIVE_PLAYERS):
        self.catalog = catalog
        self.session_store = session_store
        self.preview_store = preview_store
        self.date_resolver = date_resolver
        self.max_active_players = max_active_players
        # Active context by player_id, least recently used first
        self.contexts: "OrderedDict[str, PlayContext]" = OrderedDict()

    def _resolve_date(self, player_id: str) -> str:
        override = self.preview_store.load(player_id)
        if override and not is_valid_date(override):
            self.preview_store.clear(player_id)
            override = None
        return self.date_resolver.current_date(override)

    def _open_context(self, player_id: str, puzzle_date: str) -> PlayContext:
        """Builds the context for a date, restoring any saved session."""
        puzzle = self.catalog.find_by_date(puzzle_date)
        session = None
        if puzzle:
            session = self.session_store.load(player_id, puzzle_date, puzzle)
            if session is None:
                session = new_session(puzzle)

        context = PlayContext(player_id=player_id, puzzle_date=puzzle_date, puzzle=puzzle, session=session)
        self.contexts[player_id] = context
        self.contexts.move_to_end(player_id)
        self._evict_idle_contexts()
        return context

    def _evict_idle_contexts(self) -> None:
        """Drops the least recently used contexts beyond the cache limit."""
        while len(self.contexts) > self.max_active_players:
            player_id, _ = self.contexts.popitem(last=False)
            game_logger.logger.debug(f"Evicted idle context for player {player_id}")

    def get_context(self, player_id: str) -> PlayContext:
        """
        Returns the player's active context, replacing it when the current
        puzzle date has changed (midnight rollover or preview navigation).
        """
        puzzle_date = self._resolve_date(player_id)
        context = self.contexts.get(player_id)
        if context is None or context.puzzle_date != puzzle_date:
            context = self._open_context(player_id, puzzle_date)
        else:
            self.contexts.move_to_end(player_id)
        return context

    def _require_session(self, context: PlayContext) -> GameSession:
        if context.session is None:
            raise PuzzleNotAvailable(f"No puzzle available for {context.puzzle_date}")
        return context.session

    def can_go_previous(self, puzzle_date: str) -> bool:
        """Previous is closed on the real today and before days without a puzzle."""
        if puzzle_date == self.date_resolver.current_real_date():
            return False
        return self.catalog.find_adjacent(puzzle_date, Direction.PREVIOUS) is not None

    def get_state(self, player_id: str) -> Dict[str, Any]:
        """Display-ready state for the player's current puzzle."""
        context = self.get_context(player_id)
        return self._build_state(context)

    def submit_ingredient(self, player_id: str, ingredient: str) -> Dict[str, Any]:
        """
        Applies an ingredient to the current session and persists it.

        Raises:
            PuzzleNotAvailable: If there is no puzzle today
            SessionTerminal: If the session is already over
            InvalidIngredient: If the ingredient is malformed
        """
        context = self.get_context(player_id)
        session = self._require_session(context)

        record = apply_guess(session, ingredient)
        context.persisted = self.session_store.save(session, player_id)

        if session.status == GameStatus.WON:
            game_logger.log_game_event(
                session.puzzle_date, 'game_won', player_id,
                moves=session.moves, quality=session.quality, winning_ingredient=record.ingredient
            )
        elif session.status == GameStatus.LOST:
            game_logger.log_game_event(
                session.puzzle_date, 'game_lost', player_id,
                moves=session.moves, final_ingredient=record.ingredient
            )

        return self._build_state(context)

    def retry(self, player_id: str) -> Dict[str, Any]:
        """Clears the saved session for the current puzzle and starts over."""
        context = self.get_context(player_id)
        session = self._require_session(context)

        cleared = self.session_store.clear(player_id, context.puzzle_date)
        reset_session(session, context.puzzle)
        context.persisted = cleared

        game_logger.log_game_event(context.puzzle_date, 'session_reset', player_id)
        return self._build_state(context)

    def navigate(self, player_id: str, direction: Direction) -> Dict[str, Any]:
        """
        Moves the preview date one calendar day.

        Moving forward is always allowed, even onto a day with no puzzle.

        Raises:
            PuzzleNotAvailable: If moving back is not allowed from the current date
        """
        current = self._resolve_date(player_id)

        if direction == Direction.PREVIOUS:
            if not self.can_go_previous(current):
                raise PuzzleNotAvailable(f"No earlier puzzle before {current}")
            target = decrement_date(current)
        else:
            target = increment_date(current)

        self.preview_store.save(player_id, target)
        context = self._open_context(player_id, target)
        return self._build_state(context)

    def set_preview_date(self, player_id: str, preview_date: str) -> Dict[str, Any]:
        """
        Jumps straight to a date.

        Raises:
            MalformedDate: If the date is not a valid YYYY-MM-DD date
        """
        if not is_valid_date(preview_date):
            raise MalformedDate(f"Invalid preview date: {preview_date!r}")

        self.preview_store.save(player_id, preview_date)
        context = self._open_context(player_id, preview_date)
        return self._build_state(context)

    def reset_to_today(self, player_id: str) -> Dict[str, Any]:
        """Drops the preview override and returns to the real date."""
        self.preview_store.clear(player_id)
        context = self._open_context(player_id, self.date_resolver.current_real_date())
        return self._build_state(context)

    def share_text(self, player_id: str) -> str:
        context = self.get_context(player_id)
        return generate_share_text(self._require_session(context))

    def _build_state(self, context: PlayContext) -> Dict[str, Any]:
        real_today = self.date_resolver.current_real_date()
        session = context.session

        state: Dict[str, Any] = {
            'date': context.puzzle_date,
            'real_today': real_today,
            'is_preview': context.puzzle_date != real_today,
            'puzzle_available': session is not None,
            'can_go_previous': self.can_go_previous(context.puzzle_date),
            'persisted': context.persisted,
            'session': None,
            'result_message': None,
            'share_text': None
        }

        if session is None:
            return state

        state['session'] = session.to_dict()

        if session.is_terminal:
            state['result_message'] = result_message(session)
            state['share_text'] = generate_share_text(session)

        return state


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(catalog: PuzzleCatalog, session_store: SessionStore,
                            preview_store: PreviewDateStore, date_resolver: DateResolver) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(catalog, session_store, preview_store, date_resolver)
    return _game_service
