import random

import pytest

from wordle_engine import ListWordPicker, WordleGame


@pytest.fixture
def words_file(tmp_path):
    def _write(content, name="words.txt"):
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path
    return _write


@pytest.fixture
def crane_game():
    return WordleGame("crane")


@pytest.fixture
def crane_picker():
    return ListWordPicker(["CRANE"], rng=random.Random(0))
