import argparse
import json
import logging
import sys
from contextlib import ExitStack, contextmanager
from pathlib import Path
from typing import Iterator, List, Optional, TextIO

from . import __version__
from .config import Settings, parse_attempts_limit, parse_log_level
from .picker import FileWordPicker, WordPicker, WordPickerError
from .render import TextUI
from .session import WordleSession

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130

TERMINAL_PATH = '/dev/tty'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="wordle",
        description="Play Wordle in the terminal. The word to guess is picked at random "
                    "from WORDS_FILE, one word per line (blank lines are skipped).",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('words_file', nargs='?', type=Path, default=None,
                        help="Word list to pick from. Falls back to $WORDLE_WORDS_PATH, then STDIN.")
    limit = parser.add_mutually_exclusive_group()
    # left out of the namespace unless given, since 'unlimited' parses to None
    limit.add_argument('--attempts', type=parse_attempts_limit, default=argparse.SUPPRESS,
                       help="Guesses allowed per game, a number or 'unlimited' "
                            "(default: $WORDLE_MAX_ATTEMPTS or 6).")
    limit.add_argument('--unlimited', action='store_true', help="Play without an attempts limit.")
    parser.add_argument('--no-color', action='store_true', help="Disable ANSI colours.")
    parser.add_argument('--screenshot-dir', type=Path, default=None,
                        help="Save a PNG of the board after every guess (requires html2image and Chrome).")
    parser.add_argument('--transcript', type=Path, default=None,
                        help="Write the transcript of the last game to this JSON file on exit.")
    parser.add_argument('--log-level', type=parse_log_level, default=None, help="Logging level.")
    parser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")
    return parser


def load_picker(words_file: Optional[Path]) -> WordPicker:
    if words_file is not None:
        return FileWordPicker.from_path(words_file)
    return FileWordPicker.from_stream(sys.stdin, source="STDIN")


@contextmanager
def terminal_stdin(path: Optional[str] = None) -> Iterator[TextIO]:
    """Reads guesses from the controlling terminal inside the block, then puts sys.stdin back."""
    saved = sys.stdin
    with open(path or TERMINAL_PATH, 'r') as tty:
        sys.stdin = tty
        try:
            yield tty
        finally:
            sys.stdin = saved


def ask_keep_playing() -> bool:
    answer = input("Play again? [y/N] ").strip().lower()
    return answer in ("y", "yes")


def play_game(session: WordleSession, ui: TextUI, screenshot_dir: Optional[Path] = None):
    game = session.new_game()
    ui.print_game_start(game)
    print(ui.get_text_observation(game))

    while not game.is_over:
        action = ui.get_input(game)
        if not action:
            continue

        screenshot_path = None
        if screenshot_dir is not None:
            screenshot_path = screenshot_dir / str(session.game_id) / f"turn_{len(session.transcript['steps']) + 1}.png"

        result = session.step(action, screenshot_save_path=screenshot_path)
        if result.ok:
            print(ui.get_text_observation(game))
        ui.print_guess_result(result, game)

    ui.print_game_over(game)


def write_transcript(session: WordleSession, path: Path):
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(session.transcript, f, indent=4)
    logger.info("Transcript saved to %s", path)


def resolve_attempts_limit(args: argparse.Namespace, settings: Settings) -> Optional[int]:
    if args.unlimited:
        return None
    if 'attempts' in vars(args):
        return args.attempts
    return settings.attempts_limit


def play_games(session: WordleSession, ui: TextUI, screenshot_dir: Optional[Path] = None) -> int:
    ui.print_welcome()
    try:
        while True:
            play_game(session, ui, screenshot_dir)
            if not ask_keep_playing():
                break
    except KeyboardInterrupt:
        print("\n\nExiting game.")
        return EXIT_INTERRUPTED
    except EOFError:
        print("\n\nExiting game.")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point of the `wordle` command."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    logging.basicConfig(
        level=args.log_level or settings.log_level,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    words_path = args.words_file or settings.words_path
    with ExitStack() as stack:
        try:
            picker = load_picker(words_path)
            if words_path is None and not sys.stdin.isatty():
                # words came through a pipe, guesses have to come from the terminal
                stack.enter_context(terminal_stdin())
        except WordPickerError as e:
            print(f"Error: {e}", file=sys.stderr)
            return EXIT_FAILURE
        except OSError as e:
            print(f"Error: no terminal available to read guesses from: {e}", file=sys.stderr)
            return EXIT_FAILURE

        ui = TextUI(color=settings.color and not args.no_color)
        session = WordleSession(picker, attempts_limit=resolve_attempts_limit(args, settings), ui=TextUI(color=False))
        exit_code = play_games(session, ui, args.screenshot_dir)

    if args.transcript is not None and session.game is not None:
        write_transcript(session, args.transcript)

    print("Goodbye!")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
