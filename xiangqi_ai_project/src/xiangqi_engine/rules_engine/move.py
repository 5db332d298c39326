"""
象棋走法数据结构

定义走法请求(Move)和历史记录(MoveRecord)，以及坐标记法和中文纵线记法。
坐标统一为 (列, 行)：列 0~8 从左到右，行 0~9 从黑方底线到红方底线。
"""

import operator
from dataclasses import dataclass
from typing import Optional, Tuple

from .pieces import Piece, Side

Position = Tuple[int, int]

BOARD_FILES = 9
BOARD_RANKS = 10

# 中文数字
CHINESE_NUMBERS = ["", "一", "二", "三", "四", "五", "六", "七", "八", "九"]


def is_on_board(pos) -> bool:
    """检查坐标是否在棋盘范围内（不抛异常），布尔值不算坐标"""
    try:
        file, rank = pos
        if isinstance(file, bool) or isinstance(rank, bool):
            return False
        file, rank = operator.index(file), operator.index(rank)
    except (TypeError, ValueError):
        return False
    return 0 <= file < BOARD_FILES and 0 <= rank < BOARD_RANKS


def square_name(pos: Position) -> str:
    """坐标转为方格名，如 (1, 7) -> 'b7'"""
    file, rank = pos
    return f"{chr(ord('a') + file)}{rank}"


def parse_square(name: str) -> Position:
    """
    方格名转为坐标

    Args:
        name: 方格名，如 'b7'

    Returns:
        Position: (列, 行)
    """
    name = name.strip().lower()
    if len(name) != 2 or not name[1].isdigit():
        raise ValueError(f"无效的方格名: {name}")
    pos = (ord(name[0]) - ord('a'), int(name[1]))
    if not is_on_board(pos):
        raise ValueError(f"方格超出棋盘: {name}")
    return pos


@dataclass(frozen=True)
class Move:
    """
    象棋走法

    只是一个走子请求，不携带棋子信息；历史记录由 MoveRecord 表示。
    """
    from_pos: Position
    to_pos: Position

    def to_coordinate_notation(self) -> str:
        """
        转换为坐标记法

        Returns:
            str: 坐标记法字符串，如 "b7e7"
        """
        return f"{square_name(self.from_pos)}{square_name(self.to_pos)}"

    @classmethod
    def from_coordinate_notation(cls, notation: str) -> 'Move':
        """
        从坐标记法创建Move对象

        Args:
            notation: 坐标记法字符串，如 "b7e7"

        Returns:
            Move: Move对象
        """
        notation = notation.strip()
        if len(notation) != 4:
            raise ValueError(f"无效的坐标记法: {notation}")
        return cls(parse_square(notation[:2]), parse_square(notation[2:]))

    def to_dict(self) -> dict:
        return {'from': list(self.from_pos), 'to': list(self.to_pos)}

    @classmethod
    def from_dict(cls, data: dict) -> 'Move':
        return cls(from_pos=tuple(data['from']), to_pos=tuple(data['to']))

    def __str__(self) -> str:
        return self.to_coordinate_notation()


@dataclass(frozen=True)
class MoveRecord:
    """
    走法历史记录

    由对局状态在执行走法时生成，包含移动的棋子和被吃的棋子。
    """
    from_pos: Position
    to_pos: Position
    piece: Piece
    captured: Optional[Piece] = None

    @property
    def move(self) -> Move:
        return Move(self.from_pos, self.to_pos)

    @property
    def is_capture(self) -> bool:
        return self.captured is not None

    def to_chinese_notation(self) -> str:
        """
        转换为中文纵线记法

        Returns:
            str: 中文记法字符串，如 "炮二平五"、"馬八进七"
        """
        piece = self.piece
        from_file, from_rank = self.from_pos
        to_file, to_rank = self.to_pos

        def file_number(file: int) -> str:
            # 红方从右往左数，黑方从左往右数
            return CHINESE_NUMBERS[9 - file] if piece.side is Side.RED else CHINESE_NUMBERS[file + 1]

        suffix = '吃' if self.is_capture else ''
        prefix = f"{piece.glyph}{file_number(from_file)}"

        if from_rank == to_rank:
            return f"{prefix}平{file_number(to_file)}{suffix}"

        forward = to_rank < from_rank if piece.side is Side.RED else to_rank > from_rank
        direction = '进' if forward else '退'

        if from_file == to_file:
            steps = abs(to_rank - from_rank)
            return f"{prefix}{direction}{CHINESE_NUMBERS[steps]}{suffix}"
        # 马、相、仕斜走时记落点所在的纵线
        return f"{prefix}{direction}{file_number(to_file)}{suffix}"

    def to_dict(self) -> dict:
        return {
            'from': list(self.from_pos),
            'to': list(self.to_pos),
            'piece': self.piece.to_dict(),
            'captured': self.captured.to_dict() if self.captured else None
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'MoveRecord':
        captured = data.get('captured')
        return cls(
            from_pos=tuple(data['from']),
            to_pos=tuple(data['to']),
            piece=Piece.from_dict(data['piece']),
            captured=Piece.from_dict(captured) if captured else None
        )

    def __str__(self) -> str:
        return self.to_chinese_notation()


__all__ = [
    'Position', 'Move', 'MoveRecord', 'BOARD_FILES', 'BOARD_RANKS',
    'is_on_board', 'square_name', 'parse_square'
]
