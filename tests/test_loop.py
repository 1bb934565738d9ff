from __future__ import annotations

from collections import deque

import pytest

from lardum.engine.commands import Command, PlayerAction
from lardum.engine.loop import GameLoop
from lardum.engine.prompts import InputEvent, ScriptedPrompter
from lardum.engine.resolver import ActionResolver, UIContext
from lardum.fov.visibility import VisibilityTracker
from lardum.persistence.manager import SaveManager


@pytest.fixture
def loop(session, generator, tmp_path):
    resolver = ActionResolver(generator, VisibilityTracker())
    return GameLoop(session, resolver, UIContext(prompter=ScriptedPrompter()), save_manager=SaveManager(tmp_path))


def test_start_computes_visibility(loop, session):
    loop.start()
    assert loop.running
    assert loop.visibility.is_visible(5, 5)
    assert session.grid.is_explored(5, 5)


def test_moves_count_turns_and_refresh_fov(loop, session):
    loop.start()
    assert loop.handle_event(InputEvent.key_press("RIGHT")) is PlayerAction.TOOK_TURN
    assert loop.visibility.origin == (6, 5)
    assert loop.handle_event(InputEvent.key_press("g")) is PlayerAction.DIDNT_TAKE_TURN
    assert loop.handle_event(InputEvent.key_press("q")) is PlayerAction.DIDNT_TAKE_TURN
    assert loop.turns == 1


def test_mouse_motion_is_tracked(loop):
    loop.start()
    assert loop.handle_event(InputEvent.motion(3, 4)) is PlayerAction.DIDNT_TAKE_TURN
    assert loop.mouse == (3, 4)
    assert loop.frame().names_under_mouse == ""


def test_quit_saves(loop):
    loop.start()
    assert loop.step(Command.QUIT) is PlayerAction.EXIT
    assert not loop.running
    assert loop.save_manager.has_save()


def test_run_renders_each_iteration(loop):
    events = deque([InputEvent.key_press("KP5"), InputEvent.key_press("ESCAPE")])
    frames = []
    action = loop.run(lambda: events.popleft() if events else None, frames.append)
    assert action is PlayerAction.EXIT
    assert len(frames) == 2
    assert loop.turns == 1
    assert loop.save_manager.has_save()


def test_run_exhausted_input_saves(loop):
    assert loop.run(lambda: None) is PlayerAction.EXIT
    assert loop.save_manager.has_save()
