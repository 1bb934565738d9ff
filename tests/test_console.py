from __future__ import annotations

import io
import sys

import pytest

from lardum.__main__ import main
from lardum.app.console import ConsoleRenderer, parse_event, run_console
from lardum.app.game import Game
from lardum.config import GameConfig, MapConfig
from lardum.dungeon.tiles import Tile
from lardum.engine.prompts import MouseButton
from lardum.exceptions import GenerationError
from lardum.fov.visibility import VisibilityTracker
from lardum.ui.frame import build_frame

SMALL = GameConfig(map=MapConfig(width=40, height=30, max_rooms=10))


def _run(game, *lines):
    out = io.StringIO()
    code = run_console(game, io.StringIO("\n".join(lines) + "\n"), out)
    return code, out.getvalue()


def test_parse_event():
    assert parse_event("   ") is None
    assert parse_event("g").key == "g"
    event = parse_event("alt+ENTER")
    assert (event.key, event.alt) == ("ENTER", True)
    click = parse_event("click 3 4")
    assert click.mouse == (3, 4) and click.button is MouseButton.LEFT
    assert parse_event("rclick 1 2").button is MouseButton.RIGHT
    motion = parse_event("mouse 7 8")
    assert motion.mouse == (7, 8) and motion.button is None
    assert parse_event("click x y") is None


def test_new_game_then_quit_saves(tmp_path):
    game = Game.build(SMALL, save_dir=tmp_path, seed=7)
    code, out = _run(game, "a", "KP5", "ESCAPE", "c")
    assert code == 0
    assert out.startswith("LARDUM\n")
    assert "(a) Play a new game" in out
    assert "Welcome to your new home!" in out
    assert "Dungeon level: 1" in out
    assert "@" in out
    assert game.save_manager.has_save()


def test_continue_restores_saved_game(tmp_path):
    game = Game.build(SMALL, save_dir=tmp_path, seed=7)
    _run(game, "a", "ESCAPE", "c")
    saved = game.load_session()

    other = Game.build(SMALL, save_dir=tmp_path, seed=99)
    code, out = _run(other, "b", "ESCAPE", "c")
    assert code == 0
    assert other.load_session() == saved


def test_continue_without_save(tmp_path):
    game = Game.build(SMALL, save_dir=tmp_path, seed=7)
    code, out = _run(game, "b", "x", "c")
    assert code == 0
    assert "No saved game to load." in out
    assert out.count("(c) Quit") == 2
    assert not game.save_manager.has_save()


def test_end_of_input_quits_and_saves(tmp_path):
    game = Game.build(SMALL, save_dir=tmp_path, seed=3)
    code, _ = _run(game, "a", "g")
    assert code == 0
    assert game.save_manager.has_save()


def test_renderer_draws_walls_floor_and_glyphs(session):
    session.grid.set(6, 5, Tile.wall())
    tracker = VisibilityTracker()
    tracker.initialise(session.grid)
    tracker.update(session.player.pos(), session.grid)
    frame = build_frame(session, tracker)
    lines = ConsoleRenderer(io.StringIO()).map_lines(frame)
    assert lines[5][5] == "@"
    assert lines[5][6] == "#"
    assert lines[5][4] == "."


@pytest.fixture
def keep_log_handlers(monkeypatch):
    # main() reconfigures the root logger; leave pytest's capture handlers alone
    monkeypatch.setattr("lardum.__main__.configure_logging", lambda verbosity: None)


def test_main_headless(tmp_path, monkeypatch, capsys, keep_log_handlers):
    monkeypatch.setattr(sys, "stdin", io.StringIO("a\nESCAPE\nc\n"))
    code = main(["--headless", "--save-dir", str(tmp_path), "--seed", "5"])
    assert code == 0
    assert "LARDUM" in capsys.readouterr().out
    assert (tmp_path / "game.sav").exists()


def test_main_rejects_bad_config(tmp_path, keep_log_handlers):
    assert main(["--headless", "--config", str(tmp_path / "missing.yaml")]) == 2


def test_main_rejects_malformed_yaml(tmp_path, keep_log_handlers):
    cfg = tmp_path / "broken.yaml"
    cfg.write_text("map: {width: 40\n", encoding="utf-8")
    assert main(["--headless", "--config", str(cfg)]) == 2


def test_main_rejects_mistyped_config_value(tmp_path, keep_log_handlers):
    cfg = tmp_path / "null.yaml"
    cfg.write_text("map:\n  width: null\n", encoding="utf-8")
    assert main(["--headless", "--config", str(cfg)]) == 2


def _raise(exc):
    def front_end(game):
        raise exc

    return front_end


def test_main_reports_fatal_error_from_gui(tmp_path, monkeypatch, keep_log_handlers):
    monkeypatch.setattr("lardum.app.arcade_app.arcade", object())
    monkeypatch.setattr("lardum.app.arcade_app.run_arcade", _raise(GenerationError("no room for stairs")))
    assert main(["--save-dir", str(tmp_path)]) == 1


def test_main_reports_fatal_error_from_console(tmp_path, monkeypatch, keep_log_handlers):
    monkeypatch.setattr("lardum.app.console.run_console", _raise(GenerationError("no room for stairs")))
    assert main(["--headless", "--save-dir", str(tmp_path)]) == 1


def test_main_interrupted(tmp_path, monkeypatch, capsys, keep_log_handlers):
    monkeypatch.setattr("lardum.app.arcade_app.arcade", object())
    monkeypatch.setattr("lardum.app.arcade_app.run_arcade", _raise(KeyboardInterrupt()))
    assert main(["--gui", "--save-dir", str(tmp_path)]) == 130
    assert "Interrupted by user" in capsys.readouterr().err


def test_version_flag(capsys, keep_log_handlers):
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "lardum" in capsys.readouterr().out
