"""
棋子定义

定义执子方、棋子类型和棋子值对象。棋盘矩阵中用带符号整数存储棋子：
类型编码 1~7，红方为正数，黑方为负数。
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict


class Side(Enum):
    """执子方：红方在下方(第5~9行)，黑方在上方(第0~4行)"""
    RED = 1
    BLACK = -1

    @property
    def opponent(self) -> 'Side':
        """对方"""
        return Side.BLACK if self is Side.RED else Side.RED

    @property
    def label(self) -> str:
        """小写英文名，用于存档和命令行"""
        return self.name.lower()

    @property
    def chinese_name(self) -> str:
        return '红方' if self is Side.RED else '黑方'

    @classmethod
    def parse(cls, value) -> 'Side':
        """
        从字符串或整数解析执子方

        Args:
            value: 'red' / 'black' / 'w' / 'b' / 1 / -1 或 Side

        Returns:
            Side: 执子方
        """
        if isinstance(value, Side):
            return value
        if isinstance(value, int):
            return cls(value)
        key = str(value).strip().lower()
        if key in ('red', 'r', 'w'):
            return cls.RED
        if key in ('black', 'b'):
            return cls.BLACK
        raise ValueError(f"无效的执子方: {value}")


class PieceKind(IntEnum):
    """棋子类型，编码与棋盘矩阵一致"""
    GENERAL = 1     # 帅/将
    ADVISOR = 2     # 仕/士
    ELEPHANT = 3    # 相/象
    HORSE = 4       # 马
    CHARIOT = 5     # 车
    CANNON = 6      # 炮
    SOLDIER = 7     # 兵/卒

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, value) -> 'PieceKind':
        """从英文名或编码解析棋子类型"""
        if isinstance(value, PieceKind):
            return value
        if isinstance(value, int):
            return cls(value)
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise ValueError(f"无效的棋子类型: {value}") from None


# 显示用字形 (红方, 黑方)
PIECE_GLYPHS: Dict[PieceKind, tuple] = {
    PieceKind.GENERAL: ('帥', '將'),
    PieceKind.ADVISOR: ('仕', '士'),
    PieceKind.ELEPHANT: ('相', '象'),
    PieceKind.HORSE: ('馬', '馬'),
    PieceKind.CHARIOT: ('車', '車'),
    PieceKind.CANNON: ('炮', '砲'),
    PieceKind.SOLDIER: ('兵', '卒'),
}

# FEN记法中的棋子符号（红方大写）
FEN_LETTERS: Dict[PieceKind, str] = {
    PieceKind.GENERAL: 'K',
    PieceKind.ADVISOR: 'A',
    PieceKind.ELEPHANT: 'B',
    PieceKind.HORSE: 'N',
    PieceKind.CHARIOT: 'R',
    PieceKind.CANNON: 'C',
    PieceKind.SOLDIER: 'P',
}


@dataclass(frozen=True)
class Piece:
    """
    棋子值对象

    棋子没有独立身份，规则上只由所在格子区分。
    """
    kind: PieceKind
    side: Side

    @property
    def code(self) -> int:
        """棋盘矩阵中的整数编码"""
        return int(self.kind) * self.side.value

    @property
    def glyph(self) -> str:
        red_glyph, black_glyph = PIECE_GLYPHS[self.kind]
        return red_glyph if self.side is Side.RED else black_glyph

    @property
    def fen_letter(self) -> str:
        letter = FEN_LETTERS[self.kind]
        return letter if self.side is Side.RED else letter.lower()

    @classmethod
    def from_code(cls, code: int) -> 'Piece':
        """从整数编码获取棋子（共享实例）"""
        try:
            return _PIECES_BY_CODE[int(code)]
        except KeyError:
            raise ValueError(f"无效的棋子编码: {code}") from None

    @classmethod
    def from_fen_letter(cls, letter: str) -> 'Piece':
        try:
            return _PIECES_BY_FEN[letter]
        except KeyError:
            raise ValueError(f"无效的FEN棋子符号: {letter}") from None

    def to_dict(self) -> dict:
        return {'kind': self.kind.label, 'side': self.side.label}

    @classmethod
    def from_dict(cls, data: dict) -> 'Piece':
        return cls(kind=PieceKind.parse(data['kind']), side=Side.parse(data['side']))

    def __str__(self) -> str:
        return self.glyph


_PIECES_BY_CODE: Dict[int, Piece] = {
    kind * side.value: Piece(kind, side) for kind in PieceKind for side in Side
}
_PIECES_BY_FEN: Dict[str, Piece] = {piece.fen_letter: piece for piece in _PIECES_BY_CODE.values()}
