"""
中国象棋AI (Xiangqi AI)

中国象棋规则引擎与分级电脑对手，附带终端对弈命令行。
"""

__version__ = "0.1.0"
__author__ = "Xiangqi AI Team"
__description__ = "中国象棋AI - 走法生成、将军检测与三档难度的电脑对手"

# 导入主要模块
from xiangqi_ai_project.src import xiangqi_engine

__all__ = [
    "xiangqi_engine",
    "__version__",
    "__author__",
    "__description__",
]
