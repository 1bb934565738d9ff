import json
import os
from pathlib import Path

import pytest

from lardum.engine.commands import Command, PlayerAction
from lardum.engine.loop import GameLoop
from lardum.engine.prompts import ScriptedPrompter
from lardum.engine.resolver import ActionResolver, UIContext
from lardum.engine.session import GameSession
from lardum.entities.components import ItemKind
from lardum.entities.factory import make_item
from lardum.exceptions import CorruptSaveError, NoSaveError, SaveWriteError
from lardum.fov.visibility import VisibilityTracker
from lardum.persistence import SCHEMA_VERSION, SaveManager, decode_session, encode_session


@pytest.fixture
def game_session(generator):
    session = GameSession.new_game(generator)
    session.inventory.append(make_item(ItemKind.CONFUSE, 0, 0))
    session.player.stats.hygiene = 33
    return session


def test_round_trip_through_disk(tmp_path, game_session):
    manager = SaveManager(tmp_path)
    path = manager.save(game_session)
    assert path == tmp_path / "game.sav"
    assert manager.has_save()
    assert not manager.tmp_path.exists()

    loaded = manager.load()
    assert loaded == game_session
    assert loaded.player.stats.hygiene == 33
    assert loaded.inventory[0].equipment.equipped


def test_encoded_document_is_versioned(game_session):
    data = json.loads(encode_session(game_session))
    assert data["schema_version"] == SCHEMA_VERSION
    assert set(data["session"]) == {"dungeon_level", "player_id", "grid", "entities", "inventory", "log"}


def test_missing_save(tmp_path):
    manager = SaveManager(tmp_path)
    assert not manager.has_save()
    with pytest.raises(NoSaveError):
        manager.load()


@pytest.mark.parametrize(
    "text",
    [
        "not json at all",
        "[]",
        json.dumps({"schema_version": 1}),
        json.dumps({"schema_version": 1, "session": {"dungeon_level": 0}}),
    ],
)
def test_corrupt_documents(text):
    with pytest.raises(CorruptSaveError):
        decode_session(text)


def test_newer_schema_version_rejected(game_session):
    data = json.loads(encode_session(game_session))
    data["schema_version"] = SCHEMA_VERSION + 1
    with pytest.raises(CorruptSaveError):
        decode_session(json.dumps(data))


def test_inconsistent_player_id(game_session):
    data = json.loads(encode_session(game_session))
    data["session"]["player_id"] = 9999
    with pytest.raises(CorruptSaveError):
        decode_session(json.dumps(data))


def test_corrupt_save_falls_back_to_backup(tmp_path, game_session):
    manager = SaveManager(tmp_path)
    manager.save(game_session)
    first = manager.load()
    game_session.dungeon_level = 5
    manager.save(game_session)
    assert manager.backup_path.exists()

    manager.path.write_text("{ truncated", encoding="utf-8")
    assert manager.load() == first


def test_corrupt_save_without_backup(tmp_path, game_session):
    manager = SaveManager(tmp_path)
    manager.save(game_session)
    manager.path.write_text("garbage", encoding="utf-8")
    with pytest.raises(CorruptSaveError):
        manager.load()


def test_interrupted_write_falls_back_to_backup(tmp_path, game_session, monkeypatch):
    manager = SaveManager(tmp_path)
    manager.save(game_session)
    first = manager.load()
    real_replace = os.replace

    def replace(src, dst):
        if Path(src) == manager.tmp_path:
            raise OSError("disk full")
        real_replace(src, dst)

    monkeypatch.setattr(os, "replace", replace)
    game_session.dungeon_level = 5
    with pytest.raises(SaveWriteError):
        manager.save(game_session)
    monkeypatch.undo()

    assert not manager.path.exists()
    assert not manager.tmp_path.exists()
    assert manager.has_save()
    assert manager.load() == first


def test_unwritable_save_dir(tmp_path, game_session):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(SaveWriteError):
        SaveManager(blocker).save(game_session)


def test_loop_reports_failed_save(tmp_path, generator, game_session):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")
    resolver = ActionResolver(generator, VisibilityTracker())
    loop = GameLoop(
        game_session,
        resolver,
        UIContext(prompter=ScriptedPrompter()),
        save_manager=SaveManager(blocker),
    )
    loop.start()
    assert loop.step(Command.QUIT) is PlayerAction.EXIT
    assert not loop.running
    assert game_session.log.last().text.startswith("Could not save the game:")
