"""
象棋规则引擎模块

包含棋局表示、走法生成、将军检测和合法性验证等核心功能。
"""

from .pieces import Side, PieceKind, Piece
from .move import Move, MoveRecord, Position, parse_square, square_name
from .chess_board import ChessBoard, parse_fen
from .move_generator import MoveGenerator
from .board_validator import BoardValidator
from .rule_engine import (
    RuleEngine, GameStatus, default_engine,
    pseudo_moves, is_attacked, is_in_check, legal_moves, is_legal_move,
    all_legal_moves, has_legal_move, is_checkmate, is_stalemate, game_status
)

__all__ = [
    'Side', 'PieceKind', 'Piece', 'Move', 'MoveRecord', 'Position', 'parse_square', 'square_name',
    'ChessBoard', 'parse_fen', 'MoveGenerator', 'BoardValidator', 'RuleEngine', 'GameStatus',
    'default_engine', 'pseudo_moves', 'is_attacked', 'is_in_check', 'legal_moves', 'is_legal_move',
    'all_legal_moves', 'has_legal_move', 'is_checkmate', 'is_stalemate', 'game_status'
]
