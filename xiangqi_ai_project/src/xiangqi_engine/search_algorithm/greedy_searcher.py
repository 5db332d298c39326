"""
贪心搜索器（中等难度）

只看一步：走后局面的评估分加上吃子价值的额外奖励。
"""

from typing import List

from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move
from ..rules_engine.pieces import Side
from .base_searcher import BaseSearcher
from .evaluator import piece_value


class GreedySearcher(BaseSearcher):
    """
    贪心搜索器

    分数 = evaluate(走后局面, 走子方) + capture_weight × 被吃棋子价值。
    只有严格更高的分数才替换当前最佳，分数相同时保留先出现的走法。
    """

    strategy = 'greedy'

    def score_move(self, board: ChessBoard, side: Side, move: Move) -> int:
        """计算单步走法的贪心分数"""
        captured = board.at(move.to_pos)
        score = self.evaluate(board.apply(move), side)
        if captured is not None:
            score += self.evaluation_config.capture_weight * piece_value(captured)
        return score

    def choose(self, board: ChessBoard, side: Side, moves: List[Move]) -> Move:
        best_move = moves[0]
        best_score = None

        for move in moves:
            self.nodes += 1
            score = self.score_move(board, side, move)
            if best_score is None or score > best_score:
                best_score = score
                best_move = move

        self.logger.debug(f"贪心最佳走法: {best_move}, 分数: {best_score}")
        return best_move
