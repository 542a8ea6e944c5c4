import pytest

from boards import CHASE_ROWS, spaced

from rogue_pursuit.config import Settings
from rogue_pursuit.dungeon import Site, load_dungeon, parse_dungeon
from rogue_pursuit.exceptions import DisconnectedDungeonError, IllegalMoveError
from rogue_pursuit.game import Game

TINY = [
    "A.+",
    "..+",
    "+.@",
]


def place(rows, monster, rogue, glyph="A"):
    rows = [list(r) for r in rows]
    rows[monster.row][monster.col] = glyph
    rows[rogue.row][rogue.col] = "@"
    return parse_dungeon(spaced(["".join(r) for r in rows]))


def fast_settings(**game):
    return Settings.from_dict({
        "search": {"pursuer_horizon": 0, "evader_room_depth": 2, "evader_corridor_depth": 2},
        "game": game,
    })


def test_render():
    game = Game(parse_dungeon(spaced(TINY)))
    assert game.render() == "A . + \n. . + \n+ . @ \n"
    assert str(game) == game.render()


def test_quick_capture_on_tiny_board():
    game = Game(parse_dungeon(spaced(TINY)))
    result = game.play()
    assert result.captured
    assert result.turns == 2
    assert result.monster == result.rogue == Site(2, 2)
    board = game.render()
    assert "*" in board
    assert "A" not in board


def test_monster_closes_in_every_turn_until_capture():
    layout = place(CHASE_ROWS, Site(2, 2), Site(8, 2))
    game = Game(layout, fast_settings())
    distances = []

    def distance(g):
        return len(g.monster.shortest_path(g.monster_site, g.rogue_site)) - 1

    before = [distance(game)]

    def check(g, agent):
        now = distance(g)
        if agent == "Monster":
            distances.append((before[0], now))
        before[0] = now

    result = game.play(max_turns=40, on_move=check)
    assert result.captured
    assert distances
    assert all(after == prior - 1 for prior, after in distances)


def test_turn_limit_and_order():
    layout = place(CHASE_ROWS, Site(2, 2), Site(8, 2))
    agents = []
    game = Game(layout, fast_settings(max_turns=1, monster_first=False))
    result = game.play(on_move=lambda g, agent: agents.append(agent))
    assert result.turns == 1
    assert not result.captured
    assert agents == ["Rogue", "Monster"]


def test_illegal_move_is_fatal(monkeypatch):
    game = Game(parse_dungeon(spaced(TINY)))
    monkeypatch.setattr(game.monster, "move", lambda monster, rogue: Site(2, 2))
    with pytest.raises(IllegalMoveError) as exc:
        game.move_monster()
    assert exc.value.agent == "Monster"
    assert "caught cheating" in str(exc.value)
    assert game.monster_site == Site(0, 0)


def test_missing_pursuer_move_is_setup_error(monkeypatch):
    game = Game(parse_dungeon(spaced(TINY)))
    monkeypatch.setattr(game.monster, "move", lambda monster, rogue: None)
    with pytest.raises(DisconnectedDungeonError):
        game.move_monster()


def test_disconnected_dungeon_rejected():
    layout = parse_dungeon(spaced([
        "A. ",
        "   ",
        " .@",
    ]))
    with pytest.raises(DisconnectedDungeonError):
        Game(layout)


def test_sample_dungeons_load(dungeons_dir):
    for path in sorted(dungeons_dir.glob("*.txt")):
        game = Game(load_dungeon(path), fast_settings())
        assert game.topology.is_room(game.monster_site)
        assert game.topology.is_room(game.rogue_site)
        assert not game.captured
