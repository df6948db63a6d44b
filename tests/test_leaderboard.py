"""
Tests for leaderboard ranking and status derivation
"""
from turfwars.core.leaderboard import derive_status, leaderboard_rows, rank, relative_progress
from turfwars.models import Player, PlayerStatus


def _player(pid: str, score: int) -> Player:
    return Player(id=pid, name=pid, color="#FFFFFF", score=score)


def test_rank_ties_keep_insertion_order(abc_registry):
    """A(100), B(100), C(50) → [A, B, C]"""
    ordered = rank(abc_registry.players())
    assert [p.id for p in ordered] == ["A", "B", "C"]


def test_rank_is_deterministic():
    """Ranking the same players twice gives the same order"""
    players = [_player("x", 10), _player("y", 30), _player("z", 10), _player("w", 30)]
    first = [p.id for p in rank(players)]
    second = [p.id for p in rank(players)]
    assert first == second == ["y", "w", "x", "z"]


def test_rank_does_not_reorder_input():
    """rank() returns a new list"""
    players = [_player("x", 1), _player("y", 2)]
    rank(players)
    assert [p.id for p in players] == ["x", "y"]


def test_status_top_tie_and_bottom(abc_registry):
    """A and B tied at the top are winning, C is losing"""
    statuses = derive_status(abc_registry.players())
    assert statuses == {
        "A": PlayerStatus.WINNING,
        "B": PlayerStatus.WINNING,
        "C": PlayerStatus.LOSING,
    }


def test_status_middle_players_neutral():
    """Players between top and bottom are neutral"""
    statuses = derive_status([_player("a", 30), _player("b", 20), _player("c", 20), _player("d", 10)])
    assert statuses["a"] == PlayerStatus.WINNING
    assert statuses["b"] == PlayerStatus.NEUTRAL
    assert statuses["c"] == PlayerStatus.NEUTRAL
    assert statuses["d"] == PlayerStatus.LOSING


def test_status_single_player_neutral():
    """No rivals → neutral"""
    assert derive_status([_player("solo", 500)]) == {"solo": PlayerStatus.NEUTRAL}


def test_status_all_tied_neutral():
    """Everyone on the same score → nobody winning or losing"""
    statuses = derive_status([_player("a", 0), _player("b", 0), _player("c", 0)])
    assert set(statuses.values()) == {PlayerStatus.NEUTRAL}


def test_status_empty():
    assert derive_status([]) == {}


def test_registry_statuses_applied_on_build(abc_registry):
    """Registry labels match derive_status after construction"""
    assert [p.status for p in abc_registry.players()] == [
        PlayerStatus.WINNING, PlayerStatus.WINNING, PlayerStatus.LOSING
    ]


def test_relative_progress():
    players = [_player("a", 200), _player("b", 50)]
    assert relative_progress(players[0], players) == 1.0
    assert relative_progress(players[1], players) == 0.25


def test_relative_progress_all_zero():
    """Top score is floored at 1, so zero scores give 0.0 instead of dividing by zero"""
    players = [_player("a", 0), _player("b", 0)]
    assert relative_progress(players[0], players) == 0.0


def test_leaderboard_rows_default_roster(registry):
    """Default roster ranks Player One first and PixelProwler last"""
    rows = leaderboard_rows(registry.players())
    assert [r["id"] for r in rows] == ["user_1", "user_3", "user_2", "user_4"]
    assert [r["rank"] for r in rows] == [1, 2, 3, 4]
    assert rows[0]["is_leader"] is True
    assert rows[0]["status"] == "winning"
    assert rows[1]["status"] == "neutral"
    assert rows[3]["status"] == "losing"
    assert rows[3]["progress"] == 0.6  # 750 / 1250
    assert rows[2]["initial"] == "C"
