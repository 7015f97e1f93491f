import logging
import os
import tempfile
from html import escape
from pathlib import Path
from typing import List, Optional

from .game import GameState, GuessError, GuessResult, WordleGame
from .hint import GuessHint, LetterHint

logger = logging.getLogger(__name__)

# --- Constants and Paths ---
ASSETS_DIR = Path(__file__).parent / 'assets'
TEMPLATE_PATH = ASSETS_DIR / 'template.html'
CSS_PATH = ASSETS_DIR / 'styles.css'

KEYBOARD_ROWS = ["QWERTYUIOP", "ASDFGHJKL", "ZXCVBNM"]

_COLORS = ['black', 'red', 'green', 'yellow', 'blue', 'magenta', 'cyan', 'white']

# a capitalised colour name selects the bright variant
HINT_COLORS = {
    LetterHint.CORRECT: "green",
    LetterHint.PLACEMENT_INCORRECT: "yellow",
    LetterHint.INCORRECT: "BLACK",
}


def colored(st: str, color: Optional[str], background: bool = False) -> str:
    if color is None:
        return st
    code = 10 * background + 60 * (color.upper() == color) + 30 + _COLORS.index(color.lower())
    return f"\u001b[{code}m{st}\u001b[0m"


def plural(count: int, word: str, many: Optional[str] = None) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {many or word + 's'}"


def board_rows(game: WordleGame) -> int:
    if game.attempts_limit is not None:
        return game.attempts_limit
    # unlimited games only show what was played plus the row being typed
    return game.attempts + (0 if game.is_over else 1)


# --- Text-based UI Class ---
class TextUI:
    def __init__(self, color: bool = True):
        self.color = color
        self.feedback_char_map = {
            LetterHint.CORRECT: "G",
            LetterHint.PLACEMENT_INCORRECT: "Y",
            LetterHint.INCORRECT: "X",
        }

    def print_welcome(self):
        print("Welcome to WORDLE")
        fb = self.feedback_char_map
        if self.color:
            legend = (
                f"{self.format_letter('A', LetterHint.CORRECT)} Correct, "
                f"{self.format_letter('A', LetterHint.PLACEMENT_INCORRECT)} Present, "
                f"{self.format_letter('A', LetterHint.INCORRECT)} Absent."
            )
        else:
            legend = (
                f"[{fb[LetterHint.CORRECT]}] Correct, [{fb[LetterHint.PLACEMENT_INCORRECT]}] Present, "
                f"[{fb[LetterHint.INCORRECT]}] Absent."
            )
        print(f"Feedback: {legend}")
        print("-" * 50)

    def print_game_start(self, game: WordleGame):
        limit = game.attempts_limit
        tries = "unlimited tries" if limit is None else plural(limit, "try", "tries")
        print(f"Guess the {game.word_length}-letter word in {tries}.")

    def get_input(self, game: WordleGame) -> str:
        # For human players to interact with the game
        attempt_num = game.attempts + 1
        remaining = game.attempts_remaining
        left = "" if remaining is None else f" ({remaining} left)"
        prompt = f"Attempt #{attempt_num}{left}. Enter your guess: "
        return input(prompt).strip().upper()

    def format_letter(self, letter: str, hint: LetterHint) -> str:
        if not self.color:
            return letter
        return colored(f" {letter} ", HINT_COLORS[hint], background=True)

    def format_guess_hint(self, guess_hint: GuessHint) -> str:
        if self.color:
            return "".join(self.format_letter(letter, hint) for letter, hint in guess_hint)
        return guess_hint.guessed

    def format_feedback(self, guess_hint: GuessHint) -> str:
        return "".join(self.feedback_char_map[hint] for hint in guess_hint.hints)

    def format_guess_error(self, result: GuessResult, game: WordleGame) -> str:
        if result.error is GuessError.LENGTH_INVALID:
            return f"Submitted word has invalid length: expected {game.word_length} letters."
        if result.error is GuessError.ALREADY_PLAYED:
            return "This word has already been played."
        if result.error is GuessError.GAME_OVER:
            return "The game is over, start a new one to keep playing."
        return result.message

    def print_guess_result(self, result: GuessResult, game: WordleGame):
        if not result.ok:
            print(self.format_guess_error(result, game))
        elif result.state is GameState.PENDING and game.attempts_remaining is not None:
            print(f"{plural(game.attempts_remaining, 'attempt')} remaining")

    def get_text_observation(self, game: WordleGame, result: Optional[GuessResult] = None) -> str:
        board_str = self._get_board_string(game)
        letters_str = self._get_letters_string(game)

        # only rejected guesses get a status line above the board
        status_message = ""
        if result is not None and result.error is not None:
            status_message = f"Rejected Guess: {self.format_guess_error(result, game)}\n\n"

        return f"{status_message}{board_str}\n{letters_str}"

    def print_game_over(self, game: WordleGame):
        print("\n" + "=" * 50)
        if game.won:
            print(f"You win with {plural(game.attempts, 'attempt')} :)")
        else:
            print(f"You lost :(\nThe word to guess was {game.target_word}.")
        print("=" * 50)

    def _get_board_string(self, game: WordleGame) -> str:
        cell = 3 if self.color else 1
        width = game.word_length * cell
        hints = game.guess_hints
        rows = board_rows(game)

        lines = ["=" * (width + 2)]
        for i in range(rows):
            if i < len(hints):
                lines.append(f"|{self.format_guess_hint(hints[i])}|")
                if not self.color:
                    lines.append(f"|{self.format_feedback(hints[i])}|")
            else:
                lines.append(f"|{' ' * width}|")
                if not self.color:
                    lines.append(f"|{' ' * width}|")

            if i < rows - 1:
                lines.append("-" * (width + 2))
        lines.append("=" * (width + 2))
        return "\n".join(lines)

    def _get_letters_string(self, game: WordleGame) -> str:
        letter_states = game.letter_states()

        # unpack dict and list letters in alphabetical order
        correct = sorted(k for k, v in letter_states.items() if v is LetterHint.CORRECT)
        present = sorted(k for k, v in letter_states.items() if v is LetterHint.PLACEMENT_INCORRECT)
        absent = sorted(k for k, v in letter_states.items() if v is LetterHint.INCORRECT)
        unused = sorted(k for k, v in letter_states.items() if v is None)

        lines = ["\nLetters:"]
        lines.append(f"  Correct: {' '.join(correct)}")
        lines.append(f"  Present: {' '.join(present)}")
        lines.append(f"  Absent:  {' '.join(absent)}")
        lines.append(f"  Unused:  {' '.join(unused)}")
        return "\n".join(lines)


# --- Screenshot and HTML generation ---
def generate_html(game: WordleGame, message: Optional[str] = None, invalid_guess: Optional[str] = None) -> str:
    hints = game.guess_hints
    letter_states = game.letter_states()
    rows = board_rows(game)

    message_html = ''
    if message:
        clean_message = message.replace("Invalid: ", "")
        message_html = f'<div class="status-message">{escape(clean_message)}</div>'

    grid_html = ''
    for r in range(rows):
        grid_html += '<div class="row">'
        if r < len(hints):
            for letter, hint in hints[r]:
                grid_html += f'<div class="tile {hint.value} filled">{escape(letter)}</div>'
        elif r == len(hints) and invalid_guess:
            typed = invalid_guess[:game.word_length]
            for char in typed:
                grid_html += f'<div class="tile absent filled">{escape(char)}</div>'
            for _ in range(game.word_length - len(typed)):
                grid_html += '<div class="tile"></div>'
        else:
            for _ in range(game.word_length):
                grid_html += '<div class="tile"></div>'
        grid_html += '</div>'

    keyboard_html = ''
    for row in KEYBOARD_ROWS:
        keyboard_html += '<div class="keyboard-row">'
        if 'Z' in row:
            keyboard_html += '<button class="key wide">Enter</button>'
        for key in row:
            state = letter_states.get(key)
            cls = state.value if state is not None else ''
            keyboard_html += f'<button class="key {cls}">{key}</button>'
        if 'M' in row:
            keyboard_html += '<button class="key wide">&#9003;</button>'
        keyboard_html += '</div>'

    with open(TEMPLATE_PATH, 'r', encoding='utf-8') as f:
        html_template = f.read()
    return html_template.format(grid_html=grid_html, keyboard_html=keyboard_html, message_html=message_html)


def render_screenshot(
    game: WordleGame,
    message: Optional[str] = None,
    invalid_guess: Optional[str] = None,
    output_path: Optional[Path] = None,
    size=(500, 840),
) -> Optional[bytes]:
    """
    Renders the board as a PNG image through a headless browser and returns its bytes.
    If output_path is provided, the image is also saved there.
    """
    try:
        from html2image import Html2Image
    except ImportError:
        logger.error("html2image is not installed. To render images, run: 'pip install html2image'")
        return None

    html = generate_html(game, message, invalid_guess)
    with open(CSS_PATH, 'r', encoding='utf-8') as f:
        css = f.read()

    with tempfile.TemporaryDirectory(prefix="wordle-") as temp_dir:
        # Html2Image looks the browser up on construction and raises when there is none
        try:
            hti = Html2Image(custom_flags=['--disable-gpu', '--no-sandbox', '--headless=new', '--log-level=3'], output_path=temp_dir)
            temp_files: List[str] = hti.screenshot(html_str=html, css_str=css, save_as="board.png", size=size)
        except OSError as e:
            logger.error("Could not render the board screenshot, is Chrome installed? %s", e)
            return None

        temp_file_path = Path(temp_files[0]) if temp_files else None
        if temp_file_path is None or not temp_file_path.is_file():
            logger.warning("Screenshot produced no image")
            return None

        with open(temp_file_path, 'rb') as f:
            image_bytes = f.read()

    if output_path:
        output_path = Path(output_path)
        os.makedirs(output_path.parent, exist_ok=True)
        output_path.write_bytes(image_bytes)
        logger.info("Board screenshot saved to %s", output_path)

    return image_bytes
