"""
伪合法走法生成

按棋子类型生成走法，只考虑棋子的走法规则和阻挡，不考虑走后己方是否被将军。
"""

from typing import Callable, Dict, List, Optional, Tuple

from .chess_board import ChessBoard
from .move import BOARD_FILES, BOARD_RANKS, Position
from .pieces import PieceKind, Piece, Side

# 方向以 (列增量, 行增量) 表示
ORTHOGONAL_DIRECTIONS = ((0, -1), (0, 1), (-1, 0), (1, 0))
DIAGONAL_DIRECTIONS = ((-1, -1), (1, -1), (-1, 1), (1, 1))

# 马：日字落点及对应的马腿（沿长边方向紧邻起点的一格）
HORSE_OFFSETS = (
    ((-2, -1), (-1, 0)),
    ((-2, 1), (-1, 0)),
    ((2, -1), (1, 0)),
    ((2, 1), (1, 0)),
    ((-1, -2), (0, -1)),
    ((1, -2), (0, -1)),
    ((-1, 2), (0, 1)),
    ((1, 2), (0, 1)),
)

# 相/象：田字落点及象眼
ELEPHANT_OFFSETS = tuple(((2 * df, 2 * dr), (df, dr)) for df, dr in DIAGONAL_DIRECTIONS)

PALACE_FILES = range(3, 6)
PALACE_RANKS = {Side.RED: range(7, 10), Side.BLACK: range(0, 3)}
HOME_HALF_RANKS = {Side.RED: range(5, 10), Side.BLACK: range(0, 5)}


def _on_board(file: int, rank: int) -> bool:
    return 0 <= file < BOARD_FILES and 0 <= rank < BOARD_RANKS


def _belongs_to(code: int, side: Side) -> bool:
    return code != 0 and (code > 0) == (side is Side.RED)


def in_palace(pos: Position, side: Side) -> bool:
    """检查位置是否在指定一方的九宫内"""
    file, rank = pos
    return file in PALACE_FILES and rank in PALACE_RANKS[side]


def in_home_half(pos: Position, side: Side) -> bool:
    """检查位置是否在指定一方的己方半场（未过河）"""
    return pos[1] in HOME_HALF_RANKS[side]


def count_between(board: ChessBoard, from_pos: Position, to_pos: Position) -> int:
    """
    统计同一直线上两点之间（不含两端）的棋子数量

    不在同一行或同一列时返回0。
    """
    from_file, from_rank = from_pos
    to_file, to_rank = to_pos
    grid = board.board

    if from_file == to_file:
        low, high = sorted((from_rank, to_rank))
        return int((grid[low + 1:high, from_file] != 0).sum())
    if from_rank == to_rank:
        low, high = sorted((from_file, to_file))
        return int((grid[from_rank, low + 1:high] != 0).sum())
    return 0


class MoveGenerator:
    """
    伪合法走法生成器

    无状态，按棋子类型分派到对应的生成函数。每种棋子的生成顺序固定，
    搜索引擎直接使用这一顺序。
    """

    def __init__(self):
        self._generators: Dict[PieceKind, Callable[[ChessBoard, Position, Side], List[Position]]] = {
            PieceKind.GENERAL: self._generate_general_moves,
            PieceKind.ADVISOR: self._generate_advisor_moves,
            PieceKind.ELEPHANT: self._generate_elephant_moves,
            PieceKind.HORSE: self._generate_horse_moves,
            PieceKind.CHARIOT: self._generate_chariot_moves,
            PieceKind.CANNON: self._generate_cannon_moves,
            PieceKind.SOLDIER: self._generate_soldier_moves,
        }

    def generate(self, board: ChessBoard, pos: Position) -> List[Position]:
        """
        生成指定位置棋子的所有伪合法落点

        Args:
            board: 棋盘
            pos: 棋子位置 (列, 行)

        Returns:
            List[Position]: 落点列表，空位返回空列表
        """
        piece = board.at(pos)
        if piece is None:
            return []
        return self.generate_for(board, pos, piece)

    def generate_for(self, board: ChessBoard, pos: Position, piece: Piece) -> List[Position]:
        """为已知棋子生成落点，省去一次查询"""
        return self._generators[piece.kind](board, pos, piece.side)

    def _step_targets(self, board: ChessBoard, pos: Position, side: Side,
                      directions, allowed: Callable[[Position], bool]) -> List[Position]:
        """单步走子：落点需满足区域限制且不是己方棋子"""
        file, rank = pos
        grid = board.board
        moves = []
        for df, dr in directions:
            new_file, new_rank = file + df, rank + dr
            if not _on_board(new_file, new_rank) or not allowed((new_file, new_rank)):
                continue
            if not _belongs_to(grid[new_rank, new_file], side):
                moves.append((new_file, new_rank))
        return moves

    def _generate_general_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成帅/将的走法，包括飞将"""
        moves = self._step_targets(board, pos, side, ORTHOGONAL_DIRECTIONS,
                                   lambda target: in_palace(target, side))

        # 飞将：两将同列且中间无子时可直接吃对方将帅
        enemy_general = board.find_general(side.opponent)
        if (enemy_general is not None and enemy_general[0] == pos[0]
                and count_between(board, pos, enemy_general) == 0):
            moves.append(enemy_general)

        return moves

    def _generate_advisor_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成仕/士的走法"""
        return self._step_targets(board, pos, side, DIAGONAL_DIRECTIONS,
                                  lambda target: in_palace(target, side))

    def _generate_elephant_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成相/象的走法"""
        file, rank = pos
        grid = board.board
        moves = []

        for (df, dr), (eye_df, eye_dr) in ELEPHANT_OFFSETS:
            new_file, new_rank = file + df, rank + dr
            if not _on_board(new_file, new_rank):
                continue
            # 不能过河
            if not in_home_half((new_file, new_rank), side):
                continue
            # 塞象眼
            if grid[rank + eye_dr, file + eye_df] != 0:
                continue
            if not _belongs_to(grid[new_rank, new_file], side):
                moves.append((new_file, new_rank))

        return moves

    def _generate_horse_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成马的走法"""
        file, rank = pos
        grid = board.board
        moves = []

        for (df, dr), (leg_df, leg_dr) in HORSE_OFFSETS:
            new_file, new_rank = file + df, rank + dr
            if not _on_board(new_file, new_rank):
                continue
            # 蹩马腿
            if grid[rank + leg_dr, file + leg_df] != 0:
                continue
            if not _belongs_to(grid[new_rank, new_file], side):
                moves.append((new_file, new_rank))

        return moves

    def _generate_chariot_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成车的走法"""
        file, rank = pos
        grid = board.board
        moves = []

        for df, dr in ORTHOGONAL_DIRECTIONS:
            new_file, new_rank = file + df, rank + dr
            while _on_board(new_file, new_rank):
                target = grid[new_rank, new_file]
                if target == 0:
                    moves.append((new_file, new_rank))
                else:
                    if not _belongs_to(target, side):
                        moves.append((new_file, new_rank))
                    break
                new_file, new_rank = new_file + df, new_rank + dr

        return moves

    def _generate_cannon_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成炮的走法：平移到空位，或隔一个炮架吃子"""
        file, rank = pos
        grid = board.board
        moves = []

        for df, dr in ORTHOGONAL_DIRECTIONS:
            found_screen = False
            new_file, new_rank = file + df, rank + dr
            while _on_board(new_file, new_rank):
                target = grid[new_rank, new_file]
                if not found_screen:
                    if target == 0:
                        moves.append((new_file, new_rank))
                    else:
                        found_screen = True
                elif target != 0:
                    if not _belongs_to(target, side):
                        moves.append((new_file, new_rank))
                    break
                new_file, new_rank = new_file + df, new_rank + dr

        return moves

    def _generate_soldier_moves(self, board: ChessBoard, pos: Position, side: Side) -> List[Position]:
        """生成兵/卒的走法：过河前只能前进，过河后可左右平移，不能后退"""
        forward = -1 if side is Side.RED else 1
        directions: Tuple[Tuple[int, int], ...] = ((0, forward),)
        if not in_home_half(pos, side):
            directions += ((-1, 0), (1, 0))
        return self._step_targets(board, pos, side, directions, lambda target: True)


# 共享的默认生成器（无状态，可跨线程使用）
default_generator = MoveGenerator()


def pseudo_moves(board: ChessBoard, pos: Position, generator: Optional[MoveGenerator] = None) -> List[Position]:
    """生成指定位置棋子的伪合法落点"""
    return (generator or default_generator).generate(board, pos)
