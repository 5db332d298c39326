"""
搜索算法模块

包含静态评估以及随机、贪心、极小极大三种难度的搜索器。
"""

from .evaluator import PIECE_VALUES, POSITION_TABLE, evaluate, piece_value
from .base_searcher import BaseSearcher
from .random_searcher import RandomSearcher
from .greedy_searcher import GreedySearcher
from .minimax_searcher import MinimaxSearcher
from .move_selector import Difficulty, create_searcher, select_move

__all__ = [
    'PIECE_VALUES', 'POSITION_TABLE', 'evaluate', 'piece_value',
    'BaseSearcher', 'RandomSearcher', 'GreedySearcher', 'MinimaxSearcher',
    'Difficulty', 'create_searcher', 'select_move'
]
