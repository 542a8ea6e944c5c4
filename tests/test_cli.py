from rogue_pursuit.__main__ import main

FAST = "search:\n  pursuer_horizon: 2\n  evader_room_depth: 2\n  evader_corridor_depth: 2\n"


def test_analyze_reports_loop(dungeons_dir, capsys):
    rc = main(["analyze", str(dungeons_dir / "corridor_loop.txt")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "in_loop: 14\n" in out
    assert "safe_corridor_starts: " in out


def test_play_with_turn_limit(dungeons_dir, tmp_path, capsys):
    cfg = tmp_path / "fast.yaml"
    cfg.write_text(FAST, encoding="utf-8")
    rc = main(["play", str(dungeons_dir / "dead_end.txt"), "--config", str(cfg), "--max-turns", "1"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Move 1 (Monster)" in out
    assert "Move 1 (Rogue)" in out
    assert out.rstrip().endswith("Rogue survived 1 turns")


def test_play_until_capture(dungeons_dir, tmp_path, capsys):
    cfg = tmp_path / "fast.yaml"
    cfg.write_text(FAST, encoding="utf-8")
    rc = main(["play", str(dungeons_dir / "dead_end.txt"), "--config", str(cfg), "--max-turns", "60"])
    assert rc == 0
    out = capsys.readouterr().out
    assert "*" in out
    assert out.rstrip().endswith("Caught by monster")


def test_missing_dungeon_file(tmp_path, capsys):
    rc = main(["play", str(tmp_path / "missing.txt")])
    assert rc == 1
    assert "ERROR" in capsys.readouterr().err


def test_malformed_dungeon_file(tmp_path, capsys):
    bad = tmp_path / "bad.txt"
    bad.write_text("3\n. . .\n", encoding="utf-8")
    rc = main(["analyze", str(bad)])
    assert rc == 1
    assert "expected 3 rows" in capsys.readouterr().err
