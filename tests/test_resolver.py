import pytest

from lardum.dungeon.tiles import Tile
from lardum.engine.commands import Command, MoveCommand, PlayerAction
from lardum.engine.prompts import ScriptedPrompter
from lardum.engine.resolver import DROP_HEADER, USE_HEADER, ActionResolver, UIContext
from lardum.engine.session import DESCEND_TEXT
from lardum.entities.components import ItemKind
from lardum.entities.entity import Entity
from lardum.entities.factory import make_item, make_stairs
from lardum.fov.visibility import VisibilityTracker


@pytest.fixture
def resolver(generator):
    return ActionResolver(generator, VisibilityTracker())


@pytest.fixture
def prompter():
    return ScriptedPrompter()


@pytest.fixture
def context(prompter):
    return UIContext(prompter=prompter)


def test_move_into_open_tile(resolver, session, context):
    action = resolver.handle(MoveCommand(1, 0), session, context)
    assert action is PlayerAction.TOOK_TURN
    assert session.player.pos() == (6, 5)


def test_move_into_wall_still_takes_turn(resolver, session, context):
    session.grid.set(6, 5, Tile.wall())
    assert resolver.handle(MoveCommand(1, 0), session, context) is PlayerAction.TOOK_TURN
    assert session.player.pos() == (5, 5)


def test_blocking_entity_stops_movement(resolver, session, context):
    session.entities.add(Entity(5, 4, "r", "rat", blocks=True, alive=True))
    resolver.handle(MoveCommand(0, -1), session, context)
    assert session.player.pos() == (5, 5)
    # Items do not block
    session.entities.add(make_item(ItemKind.HEAL, 4, 4))
    resolver.handle(MoveCommand(-1, -1), session, context)
    assert session.player.pos() == (4, 4)


def test_wait_takes_turn(resolver, session, context):
    assert resolver.handle(Command.WAIT, session, context) is PlayerAction.TOOK_TURN


def test_dead_player_cannot_act(resolver, session, context):
    session.player.alive = False
    assert resolver.handle(MoveCommand(1, 0), session, context) is PlayerAction.DIDNT_TAKE_TURN
    assert session.player.pos() == (5, 5)
    assert resolver.handle(Command.QUIT, session, context) is PlayerAction.EXIT


def test_pick_up_does_not_take_turn(resolver, session, context):
    potion = make_item(ItemKind.HEAL, 5, 5)
    session.entities.add(potion)
    assert resolver.handle(Command.PICK_UP, session, context) is PlayerAction.DIDNT_TAKE_TURN
    assert session.inventory.items() == [potion]


def test_pick_up_with_nothing_here(resolver, session, context):
    resolver.handle(Command.PICK_UP, session, context)
    assert len(session.inventory) == 0
    assert len(session.log) == 0


def test_use_through_menu(resolver, session, context, prompter):
    session.player.stats.bladder = 10
    session.inventory.append(make_item(ItemKind.HEAL, 0, 0))
    prompter.push_keys("a")
    assert resolver.handle(Command.USE, session, context) is PlayerAction.DIDNT_TAKE_TURN
    assert session.player.stats.bladder == 30
    assert prompter.menus[0].header == USE_HEADER
    assert prompter.menus[0].width == context.ui.inventory_width


def test_cancelled_menu_does_nothing(resolver, session, context, prompter):
    session.inventory.append(make_item(ItemKind.HEAL, 0, 0))
    prompter.push_keys("z")
    resolver.handle(Command.USE, session, context)
    assert len(session.inventory) == 1


def test_empty_inventory_menu(resolver, session, context, prompter):
    prompter.push_keys("a")
    resolver.handle(Command.DROP, session, context)
    assert prompter.menus[0].options == ["Inventory is empty."]
    assert len(session.log) == 0


def test_drop_through_menu(resolver, session, context, prompter):
    scroll = make_item(ItemKind.FIREBALL, 0, 0)
    session.inventory.append(scroll)
    prompter.push_keys("a")
    resolver.handle(Command.DROP, session, context)
    assert prompter.menus[0].header == DROP_HEADER
    assert scroll.pos() == (5, 5)
    assert scroll.id in session.entities


def test_descend_only_on_stairs(resolver, session, context):
    grid = session.grid
    resolver.handle(Command.DESCEND, session, context)
    assert session.dungeon_level == 1
    assert session.grid is grid

    session.entities.add(make_stairs(5, 5))
    resolver.handle(Command.DESCEND, session, context)
    assert session.dungeon_level == 2
    assert session.grid is not grid
    assert session.log.last().text == DESCEND_TEXT


def test_character_sheet(resolver, session, context, prompter):
    prompter.push_keys("x")
    resolver.handle(Command.CHARACTER_SHEET, session, context)
    text = prompter.messages[0]
    assert text.startswith("Character information")
    assert "Hunger: 100  Energy: 100" in text
    assert "Bladder: 100 Room: 100" in text


def test_fullscreen_toggle_callback(resolver, session, prompter):
    calls = []
    context = UIContext(prompter=prompter, toggle_fullscreen=lambda: calls.append(1))
    assert resolver.handle(Command.TOGGLE_FULLSCREEN, session, context) is PlayerAction.DIDNT_TAKE_TURN
    assert calls == [1]


def test_unbound_key_is_ignored(resolver, session, context):
    assert resolver.handle(Command.NONE, session, context) is PlayerAction.DIDNT_TAKE_TURN
