"""
随机搜索器（简单难度）
"""

import random
from typing import List, Optional

from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move
from ..rules_engine.pieces import Side
from .base_searcher import BaseSearcher


class RandomSearcher(BaseSearcher):
    """在所有合法走法中均匀随机选择"""

    strategy = 'random'

    def __init__(self, rng: Optional[random.Random] = None, seed: Optional[int] = None, **kwargs):
        """
        Args:
            rng: 随机数生成器，便于测试时注入
            seed: 未提供rng时用于创建生成器的种子
        """
        super().__init__(**kwargs)
        self.rng = rng or random.Random(seed)

    def choose(self, board: ChessBoard, side: Side, moves: List[Move]) -> Move:
        self.nodes = len(moves)
        return self.rng.choice(moves)
