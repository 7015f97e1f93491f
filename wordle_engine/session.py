import copy
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

from .game import DEFAULT_ATTEMPTS_LIMIT, GuessResult, WordleGame
from .picker import WordPicker
from .render import TextUI, render_screenshot

logger = logging.getLogger(__name__)


class WordleSession:
    """
    Drives consecutive games for a front-end: picks the target word, forwards
    guesses to the current game and keeps a transcript of what happened.
    """

    def __init__(self, picker: WordPicker, attempts_limit: Optional[int] = DEFAULT_ATTEMPTS_LIMIT, ui: Optional[TextUI] = None):
        """
        Args:
            picker (WordPicker): Source of target words, one per game.
            attempts_limit (Optional[int]): Guesses allowed per game, None for no limit.
            ui (TextUI): Renders the board stored with each transcript step.
        """
        self.picker = picker
        self.attempts_limit = attempts_limit
        self.ui = ui or TextUI(color=False)

        self.game: Optional[WordleGame] = None
        self.game_id: Optional[str] = None
        self.games_played = 0

        # transcript lives here and not in game.py since it tracks every input,
        # rejected ones included
        self._transcript: Dict[str, Any] = {}

    def new_game(self) -> WordleGame:
        """Discards the current game, if any, and starts a fresh one."""
        target = self.picker.pick()
        self.game = WordleGame(target, self.attempts_limit)
        self.game_id = str(uuid.uuid4())
        self.games_played += 1

        self._transcript = {
            "game_id": self.game_id,
            "target_word": self.game.target_word,
            "word_length": self.game.word_length,
            "attempts_limit": self.attempts_limit,
            "state": self.game.state.value,
            "attempts": 0,
            "steps": [],
        }
        logger.info("Started game %s (%d letters)", self.game_id, self.game.word_length)
        return self.game

    def step(self, guess: str, screenshot_save_path: Optional[Path] = None) -> GuessResult:
        """
        Submits a guess to the current game and records it in the transcript.
        If a screenshot_save_path is provided, the board is rendered there as an image.
        """
        if not self.game:
            raise RuntimeError("You must call new_game() before calling step().")

        result = self.game.guess(guess)

        self._transcript["steps"].append({
            "guess": guess.strip().upper(),
            "accepted": result.ok,
            "error": result.error.value if result.error else None,
            "feedback": [hint.value for hint in result.hint.hints] if result.hint else None,
            "state": result.state.value,
            "board": self.ui.get_text_observation(self.game, result),
        })
        self._transcript["state"] = result.state.value
        self._transcript["attempts"] = self.game.attempts

        if result.ok and result.state.is_over:
            logger.info("Game %s ended: %s after %d attempts", self.game_id, result.state.value, self.game.attempts)

        if screenshot_save_path is not None:
            render_screenshot(
                self.game,
                message=None if result.ok else result.message,
                invalid_guess=None if result.ok else guess.strip().upper(),
                output_path=screenshot_save_path,
            )
        return result

    @property
    def transcript(self) -> Dict[str, Any]:
        return copy.deepcopy(self._transcript)
