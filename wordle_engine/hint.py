from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class LetterHint(Enum):
    """Classification of one guessed letter against the target word."""
    CORRECT = "correct"
    PLACEMENT_INCORRECT = "present"
    INCORRECT = "absent"


# promotion order used when several guesses touched the same letter: absent -> present -> correct
_HINT_RANK = {
    LetterHint.INCORRECT: 0,
    LetterHint.PLACEMENT_INCORRECT: 1,
    LetterHint.CORRECT: 2,
}


@dataclass(frozen=True)
class GuessHint:
    """The scored result of one guess: the guessed word and a hint per letter."""
    guessed: str
    letters: Tuple[Tuple[str, LetterHint], ...]

    @property
    def hints(self) -> Tuple[LetterHint, ...]:
        return tuple(hint for _, hint in self.letters)

    @property
    def is_correct(self) -> bool:
        return all(hint is LetterHint.CORRECT for hint in self.hints)

    def __len__(self) -> int:
        return len(self.letters)

    def __iter__(self):
        return iter(self.letters)


def compute_guess_hint(target: str, guess: str) -> GuessHint:
    """
    Scores `guess` against `target` letter by letter.

    Exact matches are marked first and use up their letter. Remaining letters are
    then handed out left to right, so a letter guessed more often than it occurs
    in the target only gets a hint for as many occurrences as the target has.

    Both words are compared as given; callers are expected to pass words with the
    same case and the same length.

    Raises:
        ValueError: if the two words differ in length.
    """
    if len(guess) != len(target):
        raise ValueError(
            f"Guess '{guess}' has length {len(guess)}, expected {len(target)}."
        )

    # default all letters to absent
    states: List[LetterHint] = [LetterHint.INCORRECT] * len(guess)

    # letters of the target that are still available to hand out as hints
    available = Counter(target)

    for i, (guessed, expected) in enumerate(zip(guess, target)):
        if guessed == expected:
            states[i] = LetterHint.CORRECT
            available[guessed] -= 1

    for i, guessed in enumerate(guess):
        if states[i] is LetterHint.CORRECT:
            continue
        if available[guessed] > 0:
            states[i] = LetterHint.PLACEMENT_INCORRECT
            available[guessed] -= 1

    return GuessHint(guessed=guess, letters=tuple(zip(guess, states)))


def summarize_letter_hints(hints: Iterable[GuessHint]) -> Dict[str, Optional[LetterHint]]:
    """
    Returns a mapping from every letter of the alphabet to the strongest hint it
    received across `hints`, or None if the letter was never guessed.
    """
    best: Dict[str, LetterHint] = {}
    for guess_hint in hints:
        for letter, hint in guess_hint.letters:
            if letter.isspace():
                continue
            current = best.get(letter)
            if current is None or _HINT_RANK[hint] > _HINT_RANK[current]:
                best[letter] = hint

    summary: Dict[str, Optional[LetterHint]] = {letter: best.get(letter) for letter in ALPHABET}
    # letters outside A-Z (accents, digits) are kept so nothing guessed is lost
    for letter, hint in best.items():
        summary.setdefault(letter, hint)
    return summary
