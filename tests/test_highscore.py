from block_puzzle.engine import FileHighScoreStore, GameMode, MemoryHighScoreStore, Session
from tests.helpers import DOMINO, checkerboard_with_pair, grid_from_rows


def test_memory_store_round_trip():
    store = MemoryHighScoreStore()
    assert store.load() == 0
    store.save(42)
    assert store.load() == 42


def test_file_store_missing_file_reads_zero(tmp_path):
    store = FileHighScoreStore(tmp_path / "scores" / "high_score.txt")
    assert store.load() == 0
    store.save(1234)
    assert (tmp_path / "scores" / "high_score.txt").read_text() == "1234"
    assert FileHighScoreStore(tmp_path / "scores" / "high_score.txt").load() == 1234


def test_file_store_ignores_corrupt_contents(tmp_path):
    path = tmp_path / "high_score.txt"
    path.write_text("not a number")
    assert FileHighScoreStore(path).load() == 0
    path.write_text("")
    assert FileHighScoreStore(path).load() == 0


def test_classic_session_persists_beaten_high_score(tmp_path):
    path = tmp_path / "high_score.txt"
    path.write_text("1")
    session = Session(catalog=[DOMINO], store=FileHighScoreStore(path))
    session.select_mode(GameMode.CLASSIC)
    assert session.high_score == 1
    session.grid.grid[:] = grid_from_rows(checkerboard_with_pair()).grid
    session.place(0, 0, 0)
    assert session.is_game_over
    assert path.read_text() == "2"


def test_unreadable_path_reads_zero_and_classic_mode_still_starts(tmp_path):
    store = FileHighScoreStore(tmp_path)
    assert store.load() == 0
    session = Session(store=store)
    session.select_mode(GameMode.CLASSIC)
    assert session.high_score == 0
