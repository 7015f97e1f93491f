import logging
import random
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Union

logger = logging.getLogger(__name__)


class WordPickerError(Exception):
    """A word picker could not be built from the given source."""
    IO = "io"
    NO_WORDS = "no_words"

    def __init__(self, message: str, reason: str):
        super().__init__(message)
        self.reason = reason


class WordPicker:
    """Picks target words uniformly at random from a fixed set of candidates."""

    def __init__(self, words: Sequence[str], rng: Optional[random.Random] = None):
        # own copy, so the caller's list can change without touching ours
        self._words: List[str] = list(words)
        if not self._words:
            raise WordPickerError("Word list cannot be empty.", WordPickerError.NO_WORDS)
        if any(not word for word in self._words):
            raise WordPickerError("Word list cannot contain empty words.", WordPickerError.NO_WORDS)
        self._rng = rng

    @property
    def words(self) -> List[str]:
        return list(self._words)

    def __len__(self) -> int:
        return len(self._words)

    def pick(self) -> str:
        """Draws one word, with replacement."""
        if self._rng is not None:
            return self._rng.choice(self._words)
        return random.choice(self._words)

    def __iter__(self) -> Iterator[str]:
        # endless: each step is an independent pick
        while True:
            yield self.pick()


class ListWordPicker(WordPicker):
    """Picker over an in-memory list of words. Duplicates are kept as extra weight."""


class FileWordPicker(WordPicker):
    """Picker over the lines of a text source, loaded once at construction."""

    @classmethod
    def from_path(cls, path: Union[str, Path], rng: Optional[random.Random] = None) -> "FileWordPicker":
        """
        Loads one candidate word per line from `path`. Surrounding whitespace is
        stripped and blank lines are skipped.

        Raises:
            WordPickerError: if the file can't be read or holds no words.
        """
        path = Path(path)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                picker = cls.from_stream(f, rng=rng, source=str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise WordPickerError(f"Could not read word list at '{path}': {e}", WordPickerError.IO) from e
        return picker

    @classmethod
    def from_stream(cls, lines: Iterable[str], rng: Optional[random.Random] = None, source: str = "<stream>") -> "FileWordPicker":
        """Same as `from_path`, for any iterable of lines (an open file, sys.stdin, ...)."""
        words = [line.strip() for line in lines]
        words = [word for word in words if word]
        if not words:
            raise WordPickerError(f"No words found in {source}.", WordPickerError.NO_WORDS)

        logger.info("Loaded %d candidate words from %s", len(words), source)
        return cls(words, rng=rng)
