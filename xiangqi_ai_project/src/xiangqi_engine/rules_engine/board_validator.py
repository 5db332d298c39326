"""
棋局合法性验证器

检查外部来源（存档、FEN、命令行）的棋局是否满足基本约束。
"""

from typing import Any, Iterable, List, Tuple

from .chess_board import ChessBoard
from .move import is_on_board
from .move_generator import count_between, in_home_half, in_palace
from .pieces import Piece, PieceKind, Side


class BoardValidator:
    """
    棋局合法性验证器

    每个验证函数返回 (是否合法, 错误信息列表)，便于汇总成报告。
    """

    def __init__(self):
        """初始化验证器"""
        # 每方棋子数量上限
        self.piece_limits = {
            PieceKind.GENERAL: 1,
            PieceKind.ADVISOR: 2,
            PieceKind.ELEPHANT: 2,
            PieceKind.HORSE: 2,
            PieceKind.CHARIOT: 2,
            PieceKind.CANNON: 2,
            PieceKind.SOLDIER: 5,
        }

    def validate_placements(self, placements: Iterable[Tuple[Any, Piece]]) -> Tuple[bool, List[str]]:
        """
        验证棋子摆放列表：坐标在棋盘内且没有重复格子

        Args:
            placements: [(位置, 棋子), ...]

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []
        occupied = set()

        for pos, piece in placements:
            if not is_on_board(pos):
                errors.append(f"{piece}坐标超出棋盘: {pos}")
                continue
            pos = tuple(pos)
            if pos in occupied:
                errors.append(f"格子重复放置棋子: {pos}")
            occupied.add(pos)

        return len(errors) == 0, errors

    def validate_piece_counts(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证棋子数量（每方最多一个帅/将，其余按开局数量封顶）

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for piece, count in board.count_pieces().items():
            limit = self.piece_limits[piece.kind]
            if count > limit:
                errors.append(f"{piece.side.chinese_name}{piece.glyph}数量超限: {count} > {limit}")

        return len(errors) == 0, errors

    def validate_piece_positions(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证受区域限制的棋子位置

        帅/将、仕/士必须在九宫内，相/象不能过河，兵/卒不能停在己方兵线之后。

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        for pos, piece in board.pieces():
            side_name = piece.side.chinese_name
            if piece.kind in (PieceKind.GENERAL, PieceKind.ADVISOR):
                if not in_palace(pos, piece.side):
                    errors.append(f"{side_name}{piece.glyph}位置错误: {pos}, 应在九宫内")
            elif piece.kind is PieceKind.ELEPHANT:
                if not in_home_half(pos, piece.side):
                    errors.append(f"{side_name}{piece.glyph}过河: {pos}")
            elif piece.kind is PieceKind.SOLDIER:
                rank = pos[1]
                behind = rank > 6 if piece.side is Side.RED else rank < 3
                if behind:
                    errors.append(f"{side_name}{piece.glyph}位置错误: {pos}, 不能后退")

        return len(errors) == 0, errors

    def validate_generals_facing(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        验证帅将是否照面

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 错误信息列表)
        """
        errors = []

        red_general = board.find_general(Side.RED)
        black_general = board.find_general(Side.BLACK)

        if red_general and black_general and red_general[0] == black_general[0]:
            if count_between(board, red_general, black_general) == 0:
                errors.append("帅将照面，中间无棋子阻挡")

        return len(errors) == 0, errors

    def full_validation(self, board: ChessBoard) -> Tuple[bool, List[str]]:
        """
        完整的棋局验证

        Args:
            board: 要验证的棋盘

        Returns:
            Tuple[bool, List[str]]: (是否合法, 所有错误信息列表)
        """
        all_errors = []

        validations = [
            self.validate_piece_counts,
            self.validate_piece_positions,
            self.validate_generals_facing,
        ]

        for validation_func in validations:
            _, errors = validation_func(board)
            all_errors.extend(errors)

        return len(all_errors) == 0, all_errors
