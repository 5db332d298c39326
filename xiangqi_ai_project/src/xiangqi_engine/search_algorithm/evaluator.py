"""
静态局面评估

评估 = 子力 + 位置 + 战术（将军、将死）。分数从指定一方的视角计算，越大越好。
"""

from typing import Dict, Optional

import numpy as np

from ..config.engine_config import (
    DEFAULT_EVALUATION_CONFIG, STALEMATE_DRAW, STALEMATE_LOSS, EvaluationConfig
)
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import BOARD_FILES, BOARD_RANKS
from ..rules_engine.pieces import Piece, PieceKind, Side
from ..rules_engine.rule_engine import RuleEngine, default_engine

# 子力价值：帅/将远大于其余子力之和，作为将死的近似
PIECE_VALUES: Dict[PieceKind, int] = {
    PieceKind.GENERAL: 10000,
    PieceKind.CHARIOT: 450,
    PieceKind.HORSE: 400,
    PieceKind.CANNON: 400,
    PieceKind.ADVISOR: 20,
    PieceKind.ELEPHANT: 20,
    PieceKind.SOLDIER: 10,
}

# 位置分表，按红方视角 [行, 列] 索引，黑方上下镜像。目前全部为0
POSITION_TABLE = np.zeros((BOARD_RANKS, BOARD_FILES), dtype=np.int32)
POSITION_TABLE.setflags(write=False)


def piece_value(piece: Optional[Piece]) -> int:
    """棋子的子力价值，None为0"""
    return PIECE_VALUES[piece.kind] if piece else 0


def position_bonus(piece: Piece, file: int, rank: int) -> int:
    """位置分，黑方按上下镜像查表"""
    table_rank = rank if piece.side is Side.RED else BOARD_RANKS - 1 - rank
    return int(POSITION_TABLE[table_rank, file])


def material_score(board: ChessBoard, perspective: Side) -> int:
    """子力与位置分之和：己方为正，对方为负"""
    score = 0
    for (file, rank), piece in board.pieces():
        value = PIECE_VALUES[piece.kind] + position_bonus(piece, file, rank)
        score += value if piece.side is perspective else -value
    return score


def evaluate(board: ChessBoard, perspective: Side,
             config: Optional[EvaluationConfig] = None,
             engine: Optional[RuleEngine] = None,
             stalemate_policy: str = STALEMATE_LOSS) -> int:
    """
    评估局面

    每次调用都重新计算将军和无子可动状态，不做缓存。无子可动的一方在被将军
    或缺少帅/将时按将死处理；未被将军（困毙）时按策略处理，判负与将死相同，
    判和不加减分。

    Args:
        board: 棋盘
        perspective: 评估视角
        config: 评估配置，None时使用默认配置
        engine: 规则引擎，None时使用默认引擎
        stalemate_policy: 困毙处理策略，'loss' 或 'draw'

    Returns:
        int: 评估分数
    """
    config = config or DEFAULT_EVALUATION_CONFIG
    engine = engine or default_engine

    score = material_score(board, perspective)

    for sign, side in ((-1, perspective), (1, perspective.opponent)):
        in_check = engine.is_in_check(board, side)
        if in_check:
            score += sign * config.check_bonus
        lost_when_stuck = (in_check or stalemate_policy != STALEMATE_DRAW
                           or board.find_general(side) is None)
        if lost_when_stuck and not engine.has_legal_move(board, side):
            score += sign * config.checkmate_bonus

    return score
