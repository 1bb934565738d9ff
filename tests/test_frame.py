from __future__ import annotations

from lardum import colors
from lardum.config import FovConfig, UiConfig
from lardum.entities.components import ItemKind
from lardum.entities.factory import make_item
from lardum.fov.visibility import VisibilityTracker
from lardum.messages import Message
from lardum.ui.frame import StatBar, build_frame, message_tail, stat_bars


def _visible(session, radius=3):
    tracker = VisibilityTracker(FovConfig(torch_radius=radius))
    tracker.initialise(session.grid)
    tracker.update(session.player.pos(), session.grid)
    return tracker


def test_stat_bar_layout(session):
    bars = stat_bars(session, UiConfig())
    assert [b.name for b in bars] == ["Hunger", "Comfort", "Hygiene", "Bladder", "Energy", "Fun", "Social", "Room"]
    assert {b.x for b in bars[:4]} == {57}
    assert {b.x for b in bars[4:]} == {80}
    assert [b.y for b in bars[:4]] == [2, 3, 4, 5]
    assert [b.y for b in bars[4:]] == [2, 3, 4, 5]
    assert bars[0].text == " Hunger: 100/100"
    assert bars[5].text == "    Fun: 100/100"


def test_stat_bar_fill():
    assert StatBar("Fun", 50, 100, 0, 0, 20).filled == 10
    assert StatBar("Fun", 0, 100, 0, 0, 20).filled == 0
    assert StatBar("Fun", 3, 0, 0, 0, 20).filled == 0


def test_stat_bars_follow_gauges(session):
    session.player.stats.social = 25
    bars = {b.name: b for b in stat_bars(session, UiConfig())}
    assert bars["Social"].value == 25
    assert bars["Social"].filled == 5


def test_message_tail_keeps_newest_that_fit():
    messages = [Message(f"message {i}") for i in range(10)]
    tail = message_tail(messages, width=40, height=3)
    assert [m.text for m in tail] == ["message 7", "message 8", "message 9"]


def test_message_tail_accounts_for_wrapping():
    long = Message("word " * 20)
    messages = [Message("first"), long, Message("last")]
    # The long message wraps to 3 lines at width 40
    tail = message_tail(messages, width=40, height=4)
    assert tail == [long, messages[-1]]
    assert message_tail(messages, width=40, height=0) == []


def test_build_frame(session):
    potion = make_item(ItemKind.HEAL, 6, 5)
    session.entities.add(potion)
    session.log.add("hello")
    tracker = _visible(session)

    frame = build_frame(session, tracker, mouse=(6, 5))
    assert (frame.width, frame.height) == (20, 12)
    assert frame.tile_color(5, 5) == colors.COLOR_LIGHT_GROUND
    assert frame.tile_color(19, 11) is None
    assert frame.entities == [potion, session.player]
    assert frame.names_under_mouse == "healing potion"
    assert [m.text for m in frame.messages] == ["hello"]
    assert len(frame.bars) == 8
    assert frame.dungeon_level == 1


def test_mouse_outside_map(session):
    frame = build_frame(session, _visible(session), mouse=(50, 50))
    assert frame.names_under_mouse == ""
