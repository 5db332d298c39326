"""
象棋规则引擎

在伪合法走法的基础上实现攻击判定、将军检测、合法性过滤和终局状态判定。
所有操作都是对棋盘快照的纯函数，模拟走子时总是在副本上进行。
"""

import logging
from enum import Enum
from typing import List, Optional

from ..config.engine_config import STALEMATE_DRAW, STALEMATE_LOSS, STALEMATE_POLICIES
from .chess_board import ChessBoard
from .move import Move, Position, is_on_board
from .move_generator import MoveGenerator, default_generator
from .pieces import Side

logger = logging.getLogger(__name__)


class GameStatus(Enum):
    """对局状态，终局状态不再转移"""
    PLAYING = 'playing'
    RED_WIN = 'red_win'
    BLACK_WIN = 'black_win'
    DRAW = 'draw'

    @property
    def is_over(self) -> bool:
        return self is not GameStatus.PLAYING

    @classmethod
    def win_for(cls, side: Side) -> 'GameStatus':
        """指定一方获胜的状态"""
        return cls.RED_WIN if side is Side.RED else cls.BLACK_WIN

    @property
    def winner(self) -> Optional[Side]:
        if self is GameStatus.RED_WIN:
            return Side.RED
        if self is GameStatus.BLACK_WIN:
            return Side.BLACK
        return None


class RuleEngine:
    """
    象棋规则引擎

    负责攻击判定、合法走法生成、将死与困毙检测。
    引擎本身无状态，多个线程可以共享同一个实例。
    """

    def __init__(self, generator: Optional[MoveGenerator] = None):
        """
        初始化规则引擎

        Args:
            generator: 伪合法走法生成器，None时使用默认生成器
        """
        self.generator = generator or default_generator

    # ==================== 攻击与将军 ====================

    def pseudo_moves(self, board: ChessBoard, pos: Position) -> List[Position]:
        """生成指定位置棋子的伪合法落点"""
        return self.generator.generate(board, pos)

    def is_attacked(self, board: ChessBoard, target: Position, by_side: Side) -> bool:
        """
        检查目标位置是否受到指定一方的攻击

        Args:
            board: 棋盘
            target: 目标位置
            by_side: 进攻方

        Returns:
            bool: 进攻方任一棋子的伪合法落点包含目标位置时为True
        """
        for pos, piece in board.pieces(by_side):
            if target in self.generator.generate_for(board, pos, piece):
                return True
        return False

    def is_in_check(self, board: ChessBoard, side: Side) -> bool:
        """
        检查指定一方是否被将军

        Args:
            board: 棋盘
            side: 执子方

        Returns:
            bool: 是否被将军，没有帅/将时返回False
        """
        general_pos = board.find_general(side)
        if general_pos is None:
            return False
        return self.is_attacked(board, general_pos, side.opponent)

    def _would_be_in_check(self, board: ChessBoard, from_pos: Position, to_pos: Position, side: Side) -> bool:
        """检查走子后己方是否被将军（在副本上模拟）"""
        new_board = board.apply_positions(from_pos, to_pos)
        return self.is_in_check(new_board, side)

    # ==================== 合法走法 ====================

    def legal_moves(self, board: ChessBoard, pos: Position) -> List[Position]:
        """
        生成指定位置棋子的合法落点

        Args:
            board: 棋盘
            pos: 棋子位置

        Returns:
            List[Position]: 走后不会被将军的落点，空位或己方无帅/将时为空列表
        """
        piece = board.at(pos)
        if piece is None or board.find_general(piece.side) is None:
            return []

        return [
            target for target in self.generator.generate_for(board, pos, piece)
            if not self._would_be_in_check(board, pos, target, piece.side)
        ]

    def is_legal_move(self, board: ChessBoard, from_pos, to_pos, side: Side) -> bool:
        """
        检查走法是否合法，任何非法输入都返回False而不抛异常

        Args:
            board: 棋盘
            from_pos: 起点
            to_pos: 终点
            side: 走子方

        Returns:
            bool: 是否合法
        """
        if not is_on_board(from_pos) or not is_on_board(to_pos):
            logger.debug(f"坐标超出棋盘: {from_pos} -> {to_pos}")
            return False

        from_pos, to_pos = tuple(from_pos), tuple(to_pos)
        piece = board.at(from_pos)
        if piece is None:
            logger.debug(f"起点没有棋子: {from_pos}")
            return False
        if piece.side is not side:
            logger.debug(f"不能移动对方棋子: {from_pos}")
            return False
        if board.find_general(side) is None:
            return False
        if to_pos not in self.generator.generate_for(board, from_pos, piece):
            logger.debug(f"不符合走法规则: {piece} {from_pos} -> {to_pos}")
            return False
        if self._would_be_in_check(board, from_pos, to_pos, side):
            logger.debug(f"走后会被将军: {piece} {from_pos} -> {to_pos}")
            return False
        return True

    def all_legal_moves(self, board: ChessBoard, side: Side) -> List[Move]:
        """
        生成指定一方的所有合法走法

        顺序：按棋盘扫描顺序（第0行到第9行，每行从左到右），同一棋子内按生成顺序。

        Args:
            board: 棋盘
            side: 执子方

        Returns:
            List[Move]: 合法走法列表
        """
        if board.find_general(side) is None:
            return []

        moves = []
        for pos, piece in board.pieces(side):
            for target in self.generator.generate_for(board, pos, piece):
                if not self._would_be_in_check(board, pos, target, side):
                    moves.append(Move(pos, target))
        return moves

    def has_legal_move(self, board: ChessBoard, side: Side) -> bool:
        """检查指定一方是否存在合法走法，找到第一个即返回"""
        if board.find_general(side) is None:
            return False

        for pos, piece in board.pieces(side):
            for target in self.generator.generate_for(board, pos, piece):
                if not self._would_be_in_check(board, pos, target, side):
                    return True
        return False

    # ==================== 终局判定 ====================

    def is_checkmate(self, board: ChessBoard, side: Side) -> bool:
        """
        检查指定一方是否被将死

        Args:
            board: 棋盘
            side: 执子方

        Returns:
            bool: 被将军且没有任何合法走法时为True
        """
        # 首先必须被将军
        if not self.is_in_check(board, side):
            return False
        return not self.has_legal_move(board, side)

    def is_stalemate(self, board: ChessBoard, side: Side) -> bool:
        """
        检查指定一方是否被困毙

        Args:
            board: 棋盘
            side: 执子方

        Returns:
            bool: 未被将军但没有合法走法时为True（己方无帅/将不算困毙）
        """
        if board.find_general(side) is None:
            return False
        if self.is_in_check(board, side):
            return False
        return not self.has_legal_move(board, side)

    def game_status(self, board: ChessBoard, side_to_move: Side,
                    stalemate_policy: str = STALEMATE_LOSS) -> GameStatus:
        """
        根据局面判定对局状态

        Args:
            board: 棋盘
            side_to_move: 轮到走子的一方
            stalemate_policy: 困毙处理策略，'loss' 判负或 'draw' 判和

        Returns:
            GameStatus: 对局状态
        """
        if stalemate_policy not in STALEMATE_POLICIES:
            raise ValueError(f"无效的困毙策略: {stalemate_policy}")

        # 缺少帅/将的一方已经输棋
        for side in (side_to_move, side_to_move.opponent):
            if board.find_general(side) is None:
                return GameStatus.win_for(side.opponent)

        if self.has_legal_move(board, side_to_move):
            return GameStatus.PLAYING

        if self.is_in_check(board, side_to_move):
            return GameStatus.win_for(side_to_move.opponent)
        if stalemate_policy == STALEMATE_DRAW:
            return GameStatus.DRAW
        return GameStatus.win_for(side_to_move.opponent)


# 共享的默认规则引擎
default_engine = RuleEngine()

pseudo_moves = default_engine.pseudo_moves
is_attacked = default_engine.is_attacked
is_in_check = default_engine.is_in_check
legal_moves = default_engine.legal_moves
is_legal_move = default_engine.is_legal_move
all_legal_moves = default_engine.all_legal_moves
has_legal_move = default_engine.has_legal_move
is_checkmate = default_engine.is_checkmate
is_stalemate = default_engine.is_stalemate
game_status = default_engine.game_status
