import logging
import sys
import types
from pathlib import Path

from wordle_engine import render
from wordle_engine.game import GuessError, WordleGame
from wordle_engine.hint import LetterHint
from wordle_engine.render import TextUI, colored, generate_html, render_screenshot


def test_colored():
    assert colored("A", None) == "A"
    assert colored(" A ", "green", background=True) == "\u001b[42m A \u001b[0m"
    assert colored(" A ", "yellow", background=True) == "\u001b[43m A \u001b[0m"
    assert colored(" A ", "BLACK", background=True) == "\u001b[100m A \u001b[0m"
    assert colored("A", "red") == "\u001b[31mA\u001b[0m"


def test_plain_board():
    game = WordleGame("CRANE", attempts_limit=2)
    game.guess("RAISE")
    board = TextUI(color=False)._get_board_string(game)
    assert board == "\n".join([
        "=======",
        "|RAISE|",
        "|YYXXG|",
        "-------",
        "|     |",
        "|     |",
        "=======",
    ])


def test_colored_board_cells():
    game = WordleGame("CRANE", attempts_limit=1)
    game.guess("RAISE")
    board = TextUI(color=True)._get_board_string(game)
    assert "\u001b[43m R \u001b[0m" in board
    assert "\u001b[42m E \u001b[0m" in board
    assert "\u001b[100m S \u001b[0m" in board
    assert board.splitlines()[0] == "=" * 17


def test_unlimited_board_shows_one_empty_row():
    game = WordleGame("CRANE", attempts_limit=None)
    board = TextUI(color=False)._get_board_string(game)
    assert board.splitlines() == ["=======", "|     |", "|     |", "======="]


def test_letters_summary():
    game = WordleGame("CRANE")
    game.guess("RAISE")
    letters = TextUI(color=False)._get_letters_string(game)
    assert "  Correct: E" in letters
    assert "  Present: A R" in letters
    assert "  Absent:  I S" in letters
    assert "  Unused:  B C D" in letters


def test_text_observation_with_rejected_guess():
    game = WordleGame("CRANE")
    result = game.guess("CAT")
    observation = TextUI(color=False).get_text_observation(game, result)
    assert observation.startswith("Rejected Guess: Submitted word has invalid length: expected 5 letters.")


def test_text_observation_after_game_over_rejection():
    game = WordleGame("CRANE")
    game.guess("CRANE")
    result = game.guess("RAISE")
    observation = TextUI(color=False).get_text_observation(game, result)
    assert observation.startswith("Rejected Guess: The game is over")


def test_text_observation_without_status_for_accepted_guess():
    game = WordleGame("CRANE")
    result = game.guess("RAISE")
    assert TextUI(color=False).get_text_observation(game, result).startswith("=======")


def test_guess_error_messages():
    ui = TextUI(color=False)
    game = WordleGame("CRANE", attempts_limit=1)
    assert "invalid length" in ui.format_guess_error(game.guess("CAT"), game)
    game.guess("RAISE")
    assert "over" in ui.format_guess_error(game.guess("RAISE"), game)

    other = WordleGame("CRANE")
    other.guess("RAISE")
    result = other.guess("RAISE")
    assert result.error is GuessError.ALREADY_PLAYED
    assert ui.format_guess_error(result, other) == "This word has already been played."


def test_print_game_over(capsys):
    ui = TextUI(color=False)
    lost = WordleGame("CRANE", attempts_limit=1)
    lost.guess("RAISE")
    ui.print_game_over(lost)
    assert "The word to guess was CRANE." in capsys.readouterr().out

    won = WordleGame("CRANE")
    won.guess("CRANE")
    ui.print_game_over(won)
    assert "You win with 1 attempt :)" in capsys.readouterr().out


def test_print_guess_result_remaining(capsys):
    ui = TextUI(color=False)
    game = WordleGame("CRANE", attempts_limit=3)
    ui.print_guess_result(game.guess("RAISE"), game)
    assert "2 attempts remaining" in capsys.readouterr().out


def test_generate_html():
    game = WordleGame("CRANE", attempts_limit=6)
    game.guess("RAISE")
    html = generate_html(game)
    assert html.count('class="row"') == 6
    assert '<div class="tile present filled">R</div>' in html
    assert '<div class="tile correct filled">E</div>' in html
    assert '<button class="key absent">S</button>' in html
    assert '<button class="key ">Q</button>' in html
    assert "status-message" not in html


def test_generate_html_shows_invalid_guess():
    game = WordleGame("CRANE")
    html = generate_html(game, message="Invalid: 'XY' is too short", invalid_guess="XY")
    assert '<div class="status-message">&#x27;XY&#x27; is too short</div>' in html
    assert html.count('<div class="tile absent filled">') == 2


def test_render_screenshot_without_html2image(monkeypatch):
    monkeypatch.setitem(sys.modules, "html2image", None)
    assert render_screenshot(WordleGame("CRANE")) is None


def test_hint_colors_cover_every_hint():
    assert set(render.HINT_COLORS) == set(LetterHint)


def fake_html2image(monkeypatch, screenshot=None, browser_found=True):
    """Installs a stand-in html2image module; `screenshot` replaces Html2Image.screenshot."""
    module = types.ModuleType("html2image")

    class Html2Image:
        def __init__(self, custom_flags=None, output_path=None):
            if not browser_found:
                raise FileNotFoundError("Could not find a Chrome executable on this machine, please specify it yourself.")
            self.output_path = output_path

        def screenshot(self, html_str, css_str, save_as, size):
            return screenshot(self.output_path, save_as)

    module.Html2Image = Html2Image
    monkeypatch.setitem(sys.modules, "html2image", module)


def test_render_screenshot_without_browser(monkeypatch, caplog):
    fake_html2image(monkeypatch, browser_found=False)
    with caplog.at_level(logging.ERROR, logger="wordle_engine.render"):
        assert render_screenshot(WordleGame("CRANE")) is None
    assert "Chrome" in caplog.text


def test_render_screenshot_saves_image(monkeypatch, tmp_path):
    def write_png(output_dir, save_as):
        path = Path(output_dir) / save_as
        path.write_bytes(b"\x89PNG board")
        return [str(path)]

    fake_html2image(monkeypatch, screenshot=write_png)
    output_path = tmp_path / "shots" / "turn_1.png"
    assert render_screenshot(WordleGame("CRANE"), output_path=output_path) == b"\x89PNG board"
    assert output_path.read_bytes() == b"\x89PNG board"


def test_render_screenshot_without_output_file(monkeypatch):
    fake_html2image(monkeypatch, screenshot=lambda output_dir, save_as: [])
    assert render_screenshot(WordleGame("CRANE")) is None
