__version__ = "0.3.0"

from .hint import GuessHint, LetterHint, compute_guess_hint, summarize_letter_hints
from .picker import FileWordPicker, ListWordPicker, WordPicker, WordPickerError
from .game import GameError, GameState, GuessError, GuessResult, WordleGame
from .session import WordleSession
from .render import TextUI

__all__ = [
    "GuessHint", "LetterHint", "compute_guess_hint", "summarize_letter_hints",
    "WordPicker", "ListWordPicker", "FileWordPicker", "WordPickerError",
    "WordleGame", "GameState", "GuessError", "GuessResult", "GameError",
    "WordleSession", "TextUI",
]
