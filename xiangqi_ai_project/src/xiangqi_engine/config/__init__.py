"""
配置管理模块

包含搜索、评估、对局和系统配置。
"""

from .config_manager import ConfigManager
from .engine_config import (
    SearchConfig, EvaluationConfig, GameConfig, SystemConfig,
    STALEMATE_LOSS, STALEMATE_DRAW, STALEMATE_POLICIES
)

__all__ = [
    'ConfigManager', 'SearchConfig', 'EvaluationConfig', 'GameConfig', 'SystemConfig',
    'STALEMATE_LOSS', 'STALEMATE_DRAW', 'STALEMATE_POLICIES'
]
