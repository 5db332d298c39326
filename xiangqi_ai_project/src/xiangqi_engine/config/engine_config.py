"""
引擎配置数据结构

定义搜索、评估、对局和系统配置类以及默认参数。
"""

from dataclasses import dataclass
from typing import Optional


# 困毙（无子可动且未被将军）的处理策略
STALEMATE_LOSS = 'loss'
STALEMATE_DRAW = 'draw'
STALEMATE_POLICIES = (STALEMATE_LOSS, STALEMATE_DRAW)


@dataclass
class SearchConfig:
    """搜索配置"""
    depth: int = 3                          # 困难级别的固定搜索深度(层)
    mate_score: int = 100000                # 将死分数，必须远大于评估函数的取值范围
    stalemate_policy: str = STALEMATE_LOSS  # 困毙判负('loss')或判和('draw')
    random_seed: Optional[int] = None       # 简单级别随机选择的种子


@dataclass
class EvaluationConfig:
    """静态评估配置"""
    check_bonus: int = 500                  # 将军对手的奖励 / 被将军的惩罚
    checkmate_bonus: int = 10000            # 将死对手的奖励 / 被将死的惩罚
    capture_weight: int = 2                 # 中等级别对吃子价值的额外倍数


@dataclass
class GameConfig:
    """对局配置"""
    default_difficulty: str = 'medium'      # 'easy' / 'medium' / 'hard'
    human_side: str = 'red'                 # 人类执子方
    save_path: str = 'xiangqi_save.json'    # 默认存档路径


@dataclass
class SystemConfig:
    """系统配置"""
    log_level: str = 'INFO'                 # 日志级别
    log_file: str = ''                      # 日志文件，为空则不写文件
    log_dir: str = 'logs/xiangqi_engine'    # 日志目录
    log_max_size: int = 10                  # 日志文件最大大小(MB)
    log_backup_count: int = 5               # 日志备份数量


# 默认配置实例
DEFAULT_SEARCH_CONFIG = SearchConfig()
DEFAULT_EVALUATION_CONFIG = EvaluationConfig()
DEFAULT_GAME_CONFIG = GameConfig()
DEFAULT_SYSTEM_CONFIG = SystemConfig()
