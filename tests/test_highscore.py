import json

from game.asteroids import config as C
from game.asteroids.highscore import HighScoreStore, MemoryHighScoreStore


def test_missing_file_defaults_to_zero(tmp_path):
    assert HighScoreStore(str(tmp_path / "nope.json")).load() == 0


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "hs.json"
    store = HighScoreStore(str(path))
    store.save(420)
    assert store.load() == 420
    assert json.loads(path.read_text()) == {C.HIGH_SCORE_KEY: 420}


def test_save_keeps_other_keys(tmp_path):
    path = tmp_path / "hs.json"
    path.write_text(json.dumps({"volume": 3, C.HIGH_SCORE_KEY: 5}))
    HighScoreStore(str(path)).save(9)
    assert json.loads(path.read_text()) == {"volume": 3, C.HIGH_SCORE_KEY: 9}


def test_garbage_degrades_to_zero(tmp_path, capsys):
    path = tmp_path / "hs.json"
    path.write_text("{not json")
    assert HighScoreStore(str(path)).load() == 0
    assert "[WARN]" in capsys.readouterr().out


def test_unparseable_value(tmp_path):
    path = tmp_path / "hs.json"
    path.write_text(json.dumps({C.HIGH_SCORE_KEY: "lots"}))
    assert HighScoreStore(str(path)).load() == 0

    path.write_text(json.dumps([1, 2, 3]))
    assert HighScoreStore(str(path)).load() == 0

    path.write_text(json.dumps({C.HIGH_SCORE_KEY: -12}))
    assert HighScoreStore(str(path)).load() == 0


def test_numeric_string_is_accepted(tmp_path):
    path = tmp_path / "hs.json"
    path.write_text(json.dumps({C.HIGH_SCORE_KEY: "130"}))
    assert HighScoreStore(str(path)).load() == 130


def test_overwrites_corrupt_file_on_save(tmp_path):
    path = tmp_path / "hs.json"
    path.write_text("][")
    store = HighScoreStore(str(path))
    store.save(3)
    assert store.load() == 3


def test_memory_store():
    store = MemoryHighScoreStore()
    assert store.load() == 0
    store.save(8)
    assert store.load() == 8
    assert store.saves == 1


def test_infinite_value_degrades_to_zero(tmp_path, capsys):
    path = tmp_path / "hs.json"
    path.write_text('{"%s": 1e999}' % C.HIGH_SCORE_KEY)
    assert HighScoreStore(str(path)).load() == 0

    path.write_text('{"%s": Infinity}' % C.HIGH_SCORE_KEY)
    assert HighScoreStore(str(path)).load() == 0
    assert "[WARN]" in capsys.readouterr().out


def test_unwritable_path_warns_instead_of_raising(tmp_path, capsys):
    store = HighScoreStore(str(tmp_path))  # a directory, not a file
    assert store.save(40) is False
    assert "[WARN]" in capsys.readouterr().out
