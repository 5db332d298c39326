"""
搜索器基类

统一处理合法走法生成、无子可动的情况和搜索统计，具体策略由子类实现。
"""

import time
from typing import Dict, List, Optional

from ..config.engine_config import DEFAULT_EVALUATION_CONFIG, STALEMATE_LOSS, EvaluationConfig
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move
from ..rules_engine.pieces import Side
from ..rules_engine.rule_engine import RuleEngine, default_engine
from ..utils.logger import LoggerMixin, performance_logger
from .evaluator import evaluate


class BaseSearcher(LoggerMixin):
    """
    搜索器基类

    搜索器不保存对局状态，只保留诊断用的统计计数。
    """

    strategy = 'base'

    def __init__(self, engine: Optional[RuleEngine] = None,
                 evaluation_config: Optional[EvaluationConfig] = None,
                 stalemate_policy: str = STALEMATE_LOSS):
        """
        初始化搜索器

        Args:
            engine: 规则引擎
            evaluation_config: 评估配置
            stalemate_policy: 困毙处理策略
        """
        self.engine = engine or default_engine
        self.evaluation_config = evaluation_config or DEFAULT_EVALUATION_CONFIG
        self.stalemate_policy = stalemate_policy
        self.nodes = 0
        self.reset_stats()

    def search(self, board: ChessBoard, side: Side) -> Optional[Move]:
        """
        为指定一方选择走法

        Args:
            board: 棋盘（不会被修改）
            side: 走子方

        Returns:
            Optional[Move]: 选中的走法，没有合法走法时返回None
        """
        start_time = time.perf_counter()
        self.nodes = 0

        moves = self.engine.all_legal_moves(board, side)
        if moves:
            best_move = self.choose(board, side, moves)
        else:
            self.logger.info(f"{side.chinese_name}没有合法走法")
            best_move = None

        search_time = time.perf_counter() - start_time
        self.stats['total_searches'] += 1
        self.stats['total_nodes'] += self.nodes
        self.stats['total_search_time'] += search_time
        self.stats['last_nodes'] = self.nodes
        self.stats['last_search_time'] = search_time

        performance_logger.log_search_stats(self.strategy, self.nodes, search_time)
        self.logger.debug(f"{self.strategy}搜索完成: {side.chinese_name} 选择 {best_move}")
        return best_move

    def choose(self, board: ChessBoard, side: Side, moves: List[Move]) -> Move:
        """从非空的合法走法列表中选择一步"""
        raise NotImplementedError

    def evaluate(self, board: ChessBoard, side: Side) -> int:
        return evaluate(board, side, self.evaluation_config, self.engine, self.stalemate_policy)

    def get_stats(self) -> Dict:
        """
        获取搜索统计信息

        Returns:
            Dict: 统计信息
        """
        stats = self.stats.copy()
        if stats['total_searches'] > 0:
            stats['avg_nodes_per_search'] = stats['total_nodes'] / stats['total_searches']
        else:
            stats['avg_nodes_per_search'] = 0.0
        return stats

    def reset_stats(self):
        """重置统计信息"""
        self.stats = {
            'total_searches': 0,
            'total_nodes': 0,
            'total_search_time': 0.0,
            'last_nodes': 0,
            'last_search_time': 0.0
        }
