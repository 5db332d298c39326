"""
走法选择入口

按难度创建搜索器并选择走法。
"""

import random
from enum import Enum
from typing import Optional

from ..config.engine_config import DEFAULT_SEARCH_CONFIG, EvaluationConfig, SearchConfig
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move
from ..rules_engine.pieces import Side
from ..rules_engine.rule_engine import RuleEngine
from .base_searcher import BaseSearcher
from .greedy_searcher import GreedySearcher
from .minimax_searcher import MinimaxSearcher
from .random_searcher import RandomSearcher


class Difficulty(Enum):
    """电脑难度"""
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @classmethod
    def parse(cls, value) -> 'Difficulty':
        """从字符串解析难度，'simple' 是 'easy' 的别名"""
        if isinstance(value, Difficulty):
            return value
        key = str(value).strip().lower()
        if key == 'simple':
            return cls.EASY
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"无效的难度: {value}") from None


def create_searcher(difficulty, config: Optional[SearchConfig] = None,
                    evaluation_config: Optional[EvaluationConfig] = None,
                    engine: Optional[RuleEngine] = None,
                    rng: Optional[random.Random] = None) -> BaseSearcher:
    """
    根据难度创建搜索器

    Args:
        difficulty: 难度（Difficulty 或字符串）
        config: 搜索配置
        evaluation_config: 评估配置
        engine: 规则引擎
        rng: 简单难度使用的随机数生成器

    Returns:
        BaseSearcher: 搜索器
    """
    difficulty = Difficulty.parse(difficulty)
    config = config or DEFAULT_SEARCH_CONFIG
    common = {'engine': engine, 'evaluation_config': evaluation_config,
              'stalemate_policy': config.stalemate_policy}

    if difficulty is Difficulty.EASY:
        return RandomSearcher(rng=rng, seed=config.random_seed, **common)
    if difficulty is Difficulty.MEDIUM:
        return GreedySearcher(**common)
    return MinimaxSearcher(config=config, **common)


def select_move(board: ChessBoard, side: Side, difficulty,
                config: Optional[SearchConfig] = None,
                evaluation_config: Optional[EvaluationConfig] = None,
                rng: Optional[random.Random] = None) -> Optional[Move]:
    """
    为指定一方选择电脑走法

    Args:
        board: 棋盘（不会被修改）
        side: 走子方
        difficulty: 难度
        config: 搜索配置
        evaluation_config: 评估配置
        rng: 简单难度使用的随机数生成器

    Returns:
        Optional[Move]: 走法，当且仅当没有任何合法走法时返回None
    """
    searcher = create_searcher(difficulty, config, evaluation_config, rng=rng)
    return searcher.search(board, side)
