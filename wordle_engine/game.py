import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .hint import GuessHint, LetterHint, compute_guess_hint, summarize_letter_hints

logger = logging.getLogger(__name__)

DEFAULT_ATTEMPTS_LIMIT = 6


class GameError(ValueError):
    """A game could not be created with the given arguments."""


class GameState(Enum):
    PENDING = "pending"
    WON = "won"
    LOST = "lost"

    @property
    def is_over(self) -> bool:
        return self is not GameState.PENDING


class GuessError(Enum):
    """Why a guess was rejected."""
    GAME_OVER = "game_over"
    LENGTH_INVALID = "length_invalid"
    ALREADY_PLAYED = "already_played"


@dataclass(frozen=True)
class GuessResult:
    """Outcome of `WordleGame.guess`. On failure `error` is set and `hint` is None."""
    state: GameState
    message: str
    error: Optional[GuessError] = None
    hint: Optional[GuessHint] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class WordleGame:
    """
    One game of Wordle: a target word, an optional attempts limit and the
    history of scored guesses. The state is always derived from these three.
    """

    def __init__(self, target_word: str, attempts_limit: Optional[int] = DEFAULT_ATTEMPTS_LIMIT):
        target_word = target_word.strip()
        if not target_word:
            raise GameError("Target word cannot be empty.")
        if attempts_limit is not None and attempts_limit < 0:
            raise GameError(f"Attempts limit must be positive, got {attempts_limit}.")

        # string matching nicer with uppercase :)
        self._target_word = target_word.upper()
        self._attempts_limit = attempts_limit
        self._history: List[GuessHint] = []

    @property
    def target_word(self) -> str:
        return self._target_word

    @property
    def word_length(self) -> int:
        return len(self._target_word)

    @property
    def attempts_limit(self) -> Optional[int]:
        return self._attempts_limit

    @property
    def attempts(self) -> int:
        return len(self._history)

    @property
    def attempts_remaining(self) -> Optional[int]:
        """Guesses left before losing, or None when there is no limit."""
        if self._attempts_limit is None:
            return None
        return max(self._attempts_limit - self.attempts, 0)

    @property
    def state(self) -> GameState:
        if self._history and self._history[-1].guessed == self._target_word:
            return GameState.WON
        if self._attempts_limit is not None and self.attempts >= self._attempts_limit:
            return GameState.LOST
        return GameState.PENDING

    @property
    def is_over(self) -> bool:
        return self.state.is_over

    @property
    def won(self) -> bool:
        return self.state is GameState.WON

    @property
    def current_guess_hint(self) -> Optional[GuessHint]:
        return self._history[-1] if self._history else None

    @property
    def guess_hints(self) -> Tuple[GuessHint, ...]:
        """Scored guesses, oldest first."""
        return tuple(self._history)

    @property
    def guesses(self) -> Tuple[str, ...]:
        return tuple(hint.guessed for hint in self._history)

    def guess(self, word: str) -> GuessResult:
        """
        Submits a guess. The word is stripped and upper-cased before it is checked,
        so callers may pass raw player input.

        A guess is rejected, without consuming a turn, when the game is already
        over, when its length differs from the target, or when the same word has
        been played before. Otherwise it is scored and recorded.

        Returns:
            GuessResult: the state after the call, the hint when accepted, or the
            reason for the rejection.
        """
        state = self.state
        if state.is_over:
            return GuessResult(state, "Game is over.", error=GuessError.GAME_OVER)

        guess_word = word.strip().upper()

        if len(guess_word) != self.word_length:
            return GuessResult(
                state,
                f"Invalid: Guess must be {self.word_length} letters long, got {len(guess_word)}.",
                error=GuessError.LENGTH_INVALID,
            )
        if guess_word in self.guesses:
            return GuessResult(
                state,
                f"Invalid: '{guess_word}' has already been played.",
                error=GuessError.ALREADY_PLAYED,
            )

        hint = compute_guess_hint(self._target_word, guess_word)
        self._history.append(hint)
        state = self.state
        logger.debug("Guess #%d '%s' accepted, state is now %s", self.attempts, guess_word, state.value)

        if state is GameState.WON:
            message = "Result: You won!"
        elif state is GameState.LOST:
            message = f"Result: Game over. The word was {self._target_word}."
        else:
            message = "Valid guess."
        return GuessResult(state, message, hint=hint)

    def letter_states(self) -> Dict[str, Optional[LetterHint]]:
        """Strongest hint each letter got so far (None when unused)."""
        return summarize_letter_hints(self._history)

    def __repr__(self) -> str:
        return (
            f"WordleGame(word_length={self.word_length}, attempts={self.attempts}, "
            f"attempts_limit={self._attempts_limit}, state={self.state.value})"
        )
