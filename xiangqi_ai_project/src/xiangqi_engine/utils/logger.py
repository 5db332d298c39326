"""
日志系统

提供统一的日志记录功能。
"""

import logging
import logging.handlers
import sys
import time
from pathlib import Path
from typing import Dict, Optional


def setup_logger(
    name: str = 'xiangqi',
    level: str = 'INFO',
    log_file: Optional[str] = None,
    log_dir: str = 'logs/xiangqi_engine',
    max_size: int = 10,  # MB
    backup_count: int = 5,
    console_output: bool = True
) -> logging.Logger:
    """
    设置日志记录器

    Args:
        name: 日志记录器名称
        level: 日志级别
        log_file: 日志文件名
        log_dir: 日志目录
        max_size: 日志文件最大大小(MB)
        backup_count: 备份文件数量
        console_output: 是否输出到控制台

    Returns:
        logging.Logger: 配置好的日志记录器
    """
    logger = logging.getLogger(name)

    # 如果已经配置过，直接返回
    if logger.handlers:
        return logger

    log_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)

        # 使用RotatingFileHandler实现日志轮转
        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_path / log_file,
            maxBytes=max_size * 1024 * 1024,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str = 'xiangqi') -> logging.Logger:
    """
    获取日志记录器

    Args:
        name: 日志记录器名称

    Returns:
        logging.Logger: 日志记录器
    """
    return logging.getLogger(name)


class LoggerMixin:
    """
    日志记录器混入类

    为类提供以类名命名的日志记录器。
    """

    @property
    def logger(self) -> logging.Logger:
        """获取日志记录器"""
        return get_logger(f'xiangqi.{self.__class__.__name__}')


class PerformanceLogger:
    """
    性能日志记录器

    记录搜索耗时和节点统计。计时器按操作名区分，
    同一个实例不应在多个线程中对同名操作并发计时。
    """

    def __init__(self, name: str = 'performance'):
        self.logger = get_logger(f'xiangqi.{name}')
        self.start_times: Dict[str, float] = {}

    def start_timer(self, operation: str):
        """开始计时"""
        self.start_times[operation] = time.perf_counter()
        self.logger.debug(f"开始计时: {operation}")

    def end_timer(self, operation: str) -> float:
        """结束计时并返回耗时"""
        if operation not in self.start_times:
            self.logger.warning(f"未找到计时器: {operation}")
            return 0.0

        elapsed = time.perf_counter() - self.start_times.pop(operation)
        self.logger.debug(f"操作完成: {operation}, 耗时: {elapsed:.3f}秒")
        return elapsed

    def log_search_stats(self, strategy: str, nodes: int, time_used: float):
        """记录搜索统计信息"""
        nodes_per_second = nodes / time_used if time_used > 0 else 0.0
        self.logger.info(
            f"搜索统计 - 策略: {strategy}, "
            f"节点数: {nodes}, "
            f"耗时: {time_used:.3f}秒, "
            f"速度: {nodes_per_second:.0f} nodes/sec"
        )


# 全局性能日志记录器实例
performance_logger = PerformanceLogger()
