"""
Turn engine: commands, prompts, the action resolver and the game session.

``lardum.engine.loop`` is imported on its own; it depends on the render
helpers in ``lardum.ui`` which in turn depend on this package.
"""
from .commands import Command, MoveCommand, PlayerAction, PlayerCommand
from .prompts import EventPrompter, InputEvent, MenuPrompt, MouseButton, PromptState, ScriptedPrompter, TargetPrompt
from .resolver import ActionResolver, UIContext
from .session import GameSession

__all__ = [
    "ActionResolver",
    "Command",
    "EventPrompter",
    "GameSession",
    "InputEvent",
    "MenuPrompt",
    "MouseButton",
    "MoveCommand",
    "PlayerAction",
    "PlayerCommand",
    "PromptState",
    "ScriptedPrompter",
    "TargetPrompt",
    "UIContext",
]
