"""
对局模块

包含不可变的对局状态、走子与悔棋，以及JSON存档。
"""

from ..rules_engine.rule_engine import GameStatus
from .game_state import (
    GameState, MoveOutcome, reset, apply_move, play_human_move, computer_move, undo_move
)
from .serialization import state_to_dict, state_from_dict, dumps, loads, save_game, load_game

__all__ = [
    'GameStatus', 'GameState', 'MoveOutcome', 'reset', 'apply_move', 'play_human_move',
    'computer_move', 'undo_move', 'state_to_dict', 'state_from_dict', 'dumps', 'loads',
    'save_game', 'load_game'
]
