"""
中国象棋规则与搜索引擎

包括规则引擎（走法生成、将军与将死检测）、三档难度的电脑搜索、
不可变的对局状态和JSON存档。
"""

__version__ = "1.0.0"
__author__ = "Xiangqi AI Team"

# 导入核心组件
from .rules_engine import (
    Side, PieceKind, Piece, Move, MoveRecord, ChessBoard, RuleEngine, GameStatus,
    pseudo_moves, is_attacked, is_in_check, legal_moves, is_legal_move,
    all_legal_moves, has_legal_move, is_checkmate, is_stalemate
)
from .search_algorithm import Difficulty, evaluate, select_move
from .game import GameState, MoveOutcome, apply_move, play_human_move, computer_move, undo_move
from .config import ConfigManager, SearchConfig, EvaluationConfig, GameConfig, SystemConfig
from .utils import setup_logger, get_logger, XiangqiError

__all__ = [
    "__version__", "__author__",
    "Side", "PieceKind", "Piece", "Move", "MoveRecord", "ChessBoard", "RuleEngine", "GameStatus",
    "pseudo_moves", "is_attacked", "is_in_check", "legal_moves", "is_legal_move",
    "all_legal_moves", "has_legal_move", "is_checkmate", "is_stalemate",
    "Difficulty", "evaluate", "select_move",
    "GameState", "MoveOutcome", "apply_move", "play_human_move", "computer_move", "undo_move",
    "ConfigManager", "SearchConfig", "EvaluationConfig", "GameConfig", "SystemConfig",
    "setup_logger", "get_logger", "XiangqiError"
]
