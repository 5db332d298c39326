"""
象棋棋盘数据结构

定义象棋棋盘的表示、查询和格式转换功能。

棋盘按约定不可变：所有“落子”操作都返回新的棋盘对象，原棋盘保持不变。
"""

from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from .move import BOARD_FILES, BOARD_RANKS, Move, Position, is_on_board
from .pieces import Piece, PieceKind, Side


class ChessBoard:
    """
    象棋棋盘类

    内部为 10x9 的整数矩阵，按 [行, 列] 索引；对外坐标统一为 (列, 行)。
    """

    EMPTY = 0

    # 初始局面，第0行为黑方底线
    INITIAL_LAYOUT = np.array([
        [-5, -4, -3, -2, -1, -2, -3, -4, -5],   # 车马象士将士象马车
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, -6, 0, 0, 0, 0, 0, -6, 0],          # 炮
        [-7, 0, -7, 0, -7, 0, -7, 0, -7],       # 卒
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [7, 0, 7, 0, 7, 0, 7, 0, 7],            # 兵
        [0, 6, 0, 0, 0, 0, 0, 6, 0],            # 炮
        [0, 0, 0, 0, 0, 0, 0, 0, 0],
        [5, 4, 3, 2, 1, 2, 3, 4, 5],            # 车马相仕帅仕相马车
    ], dtype=np.int8)
    INITIAL_LAYOUT.setflags(write=False)

    def __init__(self, matrix: Optional[np.ndarray] = None):
        """
        初始化棋盘

        Args:
            matrix: 10x9 的棋子编码矩阵，为None时创建初始局面
        """
        if matrix is None:
            self.board = self.INITIAL_LAYOUT.copy()
        else:
            matrix = np.asarray(matrix, dtype=np.int8)
            if matrix.shape != (BOARD_RANKS, BOARD_FILES):
                raise ValueError(f"棋盘尺寸错误: {matrix.shape}, 应为({BOARD_RANKS}, {BOARD_FILES})")
            self.board = matrix.copy()

    # ==================== 构造方法 ====================

    @classmethod
    def initial(cls) -> 'ChessBoard':
        """标准开局的32子局面"""
        return cls()

    @classmethod
    def empty(cls) -> 'ChessBoard':
        """空棋盘"""
        return cls(np.zeros((BOARD_RANKS, BOARD_FILES), dtype=np.int8))

    @classmethod
    def from_matrix(cls, matrix: np.ndarray) -> 'ChessBoard':
        """从矩阵创建棋盘对象"""
        return cls(matrix)

    @classmethod
    def from_pieces(cls, pieces: Iterable[Tuple[Position, Piece]]) -> 'ChessBoard':
        """
        从棋子列表创建棋盘

        Args:
            pieces: [(位置, 棋子), ...]

        Returns:
            ChessBoard: 棋盘对象
        """
        board = cls.empty()
        for pos, piece in pieces:
            board._check_pos(pos)
            file, rank = pos
            board.board[rank, file] = piece.code
        return board

    @classmethod
    def from_fen(cls, fen: str) -> 'ChessBoard':
        """从FEN字符串的棋盘部分创建棋盘"""
        return parse_fen(fen)[0]

    # ==================== 查询 ====================

    @staticmethod
    def in_bounds(pos) -> bool:
        """坐标是否在棋盘内"""
        return is_on_board(pos)

    @staticmethod
    def _check_pos(pos):
        if not is_on_board(pos):
            raise IndexError(f"坐标超出棋盘范围: {pos}")

    def code_at(self, pos: Position) -> int:
        """获取指定位置的棋子编码，0表示空"""
        self._check_pos(pos)
        file, rank = pos
        return int(self.board[rank, file])

    def at(self, pos: Position) -> Optional[Piece]:
        """
        获取指定位置的棋子

        Args:
            pos: 位置坐标 (列, 行)

        Returns:
            Optional[Piece]: 棋子，空位返回None
        """
        code = self.code_at(pos)
        return Piece.from_code(code) if code else None

    def is_empty(self, pos: Position) -> bool:
        return self.code_at(pos) == self.EMPTY

    def find_general(self, side: Side) -> Optional[Position]:
        """
        找到指定一方的帅/将

        Args:
            side: 执子方

        Returns:
            Optional[Position]: 帅/将的位置，不存在时返回None
        """
        found = np.argwhere(self.board == PieceKind.GENERAL * side.value)
        if len(found) == 0:
            return None
        rank, file = found[0]
        return (int(file), int(rank))

    def pieces(self, side: Optional[Side] = None) -> List[Tuple[Position, Piece]]:
        """
        获取所有棋子的位置和类型，按行优先顺序（第0行到第9行，每行从左到右）

        Args:
            side: 指定执子方，None表示双方

        Returns:
            List[Tuple[Position, Piece]]: [(位置, 棋子), ...]
        """
        if side is None:
            mask = self.board != 0
        elif side is Side.RED:
            mask = self.board > 0
        else:
            mask = self.board < 0

        ranks, files = np.nonzero(mask)
        return [
            ((int(file), int(rank)), Piece.from_code(self.board[rank, file]))
            for rank, file in zip(ranks, files)
        ]

    def count_pieces(self, side: Optional[Side] = None) -> Dict[Piece, int]:
        """统计棋子数量"""
        counts: Dict[Piece, int] = {}
        for _, piece in self.pieces(side):
            counts[piece] = counts.get(piece, 0) + 1
        return counts

    # ==================== 落子（返回新棋盘） ====================

    def place(self, pos: Position, piece: Optional[Piece]) -> 'ChessBoard':
        """
        在指定位置放置棋子或清空该位置

        Args:
            pos: 位置坐标
            piece: 棋子，None表示清空

        Returns:
            ChessBoard: 新的棋盘
        """
        self._check_pos(pos)
        new_board = self.copy()
        file, rank = pos
        new_board.board[rank, file] = piece.code if piece else self.EMPTY
        return new_board

    def apply(self, move: Move) -> 'ChessBoard':
        """
        执行走法，返回新的棋盘（不做合法性检查）

        起点清空，终点放置移动的棋子，原有棋子被移除。
        """
        return self.apply_positions(move.from_pos, move.to_pos)

    def apply_positions(self, from_pos: Position, to_pos: Position) -> 'ChessBoard':
        self._check_pos(from_pos)
        self._check_pos(to_pos)
        new_board = self.copy()
        from_file, from_rank = from_pos
        to_file, to_rank = to_pos
        new_board.board[to_rank, to_file] = self.board[from_rank, from_file]
        new_board.board[from_rank, from_file] = self.EMPTY
        return new_board

    def copy(self) -> 'ChessBoard':
        """创建棋盘副本"""
        new_board = ChessBoard.__new__(ChessBoard)
        new_board.board = self.board.copy()
        return new_board

    # ==================== 格式转换 ====================

    def to_matrix(self) -> np.ndarray:
        """转换为矩阵格式（副本）"""
        return self.board.copy()

    def to_fen(self, side_to_move: Side = Side.RED) -> str:
        """
        转换为FEN格式

        Args:
            side_to_move: 轮到走子的一方

        Returns:
            str: FEN格式字符串
        """
        fen_rows = []
        for row in self.board:
            fen_row = ""
            empty_count = 0
            for code in row:
                if code == 0:
                    empty_count += 1
                    continue
                if empty_count > 0:
                    fen_row += str(empty_count)
                    empty_count = 0
                fen_row += Piece.from_code(code).fen_letter
            if empty_count > 0:
                fen_row += str(empty_count)
            fen_rows.append(fen_row)

        player_char = "w" if side_to_move is Side.RED else "b"
        return f"{'/'.join(fen_rows)} {player_char} - - 0 1"

    def to_visual_string(self) -> str:
        """
        转换为可视化字符串

        Returns:
            str: 可视化的棋盘字符串
        """
        lines = ["   a  b  c  d  e  f  g  h  i"]
        for rank in range(BOARD_RANKS):
            cells = []
            for file in range(BOARD_FILES):
                piece = self.at((file, rank))
                cells.append(piece.glyph if piece else "十")
            lines.append(f"{rank}  " + " ".join(cells))
            if rank == 4:
                lines.append("   ~~~~~~ 楚河  汉界 ~~~~~~")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.to_visual_string()

    def __repr__(self) -> str:
        return f"ChessBoard('{self.to_fen()}')"

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChessBoard):
            return NotImplemented
        return np.array_equal(self.board, other.board)

    def __hash__(self) -> int:
        return hash(self.board.tobytes())


def parse_fen(fen: str) -> Tuple[ChessBoard, Side]:
    """
    解析FEN字符串

    Args:
        fen: FEN格式字符串，至少包含棋盘部分

    Returns:
        Tuple[ChessBoard, Side]: (棋盘, 轮到走子的一方)
    """
    parts = fen.split()
    if not parts:
        raise ValueError("无效的FEN格式")

    rows = parts[0].split("/")
    if len(rows) != BOARD_RANKS:
        raise ValueError(f"FEN格式应包含{BOARD_RANKS}行")

    matrix = np.zeros((BOARD_RANKS, BOARD_FILES), dtype=np.int8)
    for rank, row in enumerate(rows):
        file = 0
        for char in row:
            if char.isdigit():
                file += int(char)
                continue
            if file >= BOARD_FILES:
                raise ValueError(f"第{rank + 1}行列数超出范围")
            matrix[rank, file] = Piece.from_fen_letter(char).code
            file += 1
        if file != BOARD_FILES:
            raise ValueError(f"第{rank + 1}行列数应为{BOARD_FILES}")

    side = Side.BLACK if len(parts) > 1 and parts[1].lower() == "b" else Side.RED
    return ChessBoard(matrix), side
