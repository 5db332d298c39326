"""
极小极大搜索器（困难难度）

固定深度的 alpha-beta 剪枝搜索，按走法生成顺序展开，不使用置换表。
"""

import math
from typing import List, Optional

from ..config.engine_config import DEFAULT_SEARCH_CONFIG, STALEMATE_DRAW, SearchConfig
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move
from ..rules_engine.pieces import Side
from .base_searcher import BaseSearcher

# 判负策略下，困毙取胜比同一层的将死少计的分数
STALEMATE_DISCOUNT = 1


class MinimaxSearcher(BaseSearcher):
    """
    极小极大搜索器

    极大层为搜索方，极小层为对手，叶节点用搜索方视角的静态评估。
    内部节点遇到无子可动时直接返回终局分：被将死（或缺少帅/将）的一方得
    -(mate_score - ply)，ply 为离根节点的距离，越快的杀棋分数越高；
    困毙按配置的策略处理，判负时比同一层的将死低 STALEMATE_DISCOUNT 分。
    """

    strategy = 'minimax'

    def __init__(self, config: Optional[SearchConfig] = None, depth: Optional[int] = None, **kwargs):
        """
        Args:
            config: 搜索配置
            depth: 搜索深度，覆盖配置中的值
        """
        self.config = config or DEFAULT_SEARCH_CONFIG
        kwargs.setdefault('stalemate_policy', self.config.stalemate_policy)
        super().__init__(**kwargs)
        self.depth = depth if depth is not None else self.config.depth
        if self.depth < 1:
            raise ValueError(f"搜索深度必须至少为1: {self.depth}")

    def choose(self, board: ChessBoard, side: Side, moves: List[Move]) -> Move:
        best_move = moves[0]
        best_score = -math.inf
        alpha, beta = -math.inf, math.inf

        for move in moves:
            self.nodes += 1
            score = self._minimax(board.apply(move), self.depth - 1, alpha, beta, False, side, 1)
            if score > best_score:
                best_score = score
                best_move = move
            alpha = max(alpha, best_score)

        self.logger.debug(f"极小极大最佳走法: {best_move}, 分数: {best_score}, 深度: {self.depth}")
        return best_move

    def _terminal_score(self, board: ChessBoard, to_move: Side, side: Side, ply: int) -> int:
        """无子可动时的终局分（搜索方视角）"""
        mated = board.find_general(to_move) is None or self.engine.is_in_check(board, to_move)
        if mated:
            score = self.config.mate_score - ply
        elif self.stalemate_policy != STALEMATE_DRAW:
            score = self.config.mate_score - ply - STALEMATE_DISCOUNT
        else:
            return 0

        return -score if to_move is side else score

    def _minimax(self, board: ChessBoard, depth: int, alpha: float, beta: float,
                 maximizing: bool, side: Side, ply: int) -> float:
        """
        alpha-beta 极小极大搜索

        Args:
            board: 当前局面
            depth: 剩余深度
            alpha: 下界
            beta: 上界
            maximizing: 是否为极大层（搜索方走子）
            side: 搜索方
            ply: 离根节点的距离

        Returns:
            float: 搜索方视角的分数
        """
        if depth <= 0:
            return self.evaluate(board, side)

        to_move = side if maximizing else side.opponent
        moves = self.engine.all_legal_moves(board, to_move)
        if not moves:
            return self._terminal_score(board, to_move, side, ply)

        if maximizing:
            value = -math.inf
            for move in moves:
                self.nodes += 1
                value = max(value, self._minimax(board.apply(move), depth - 1, alpha, beta, False, side, ply + 1))
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value

        value = math.inf
        for move in moves:
            self.nodes += 1
            value = min(value, self._minimax(board.apply(move), depth - 1, alpha, beta, True, side, ply + 1))
            beta = min(beta, value)
            if beta <= alpha:
                break
        return value
