"""
配置管理器

负责加载、保存和管理各种配置。
"""

import json
import logging
from dataclasses import asdict, fields, replace
from pathlib import Path
from typing import Any, Dict, Type, TypeVar

import yaml

from .engine_config import (
    SearchConfig, EvaluationConfig, GameConfig, SystemConfig, STALEMATE_POLICIES,
    DEFAULT_SEARCH_CONFIG, DEFAULT_EVALUATION_CONFIG, DEFAULT_GAME_CONFIG, DEFAULT_SYSTEM_CONFIG
)
from ..utils.exceptions import ConfigurationError

T = TypeVar('T')

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    配置管理器

    每类配置对应配置目录下的一个YAML文件，文件缺失或损坏时回退到默认配置。
    """

    def __init__(self, config_dir: str = "configs/xiangqi_engine", create_defaults: bool = True):
        """
        初始化配置管理器

        Args:
            config_dir: 配置文件目录
            create_defaults: 是否为缺失的配置写入默认文件
        """
        self.config_dir = Path(config_dir)

        self.config_files = {
            'search': self.config_dir / 'search_config.yaml',
            'evaluation': self.config_dir / 'evaluation_config.yaml',
            'game': self.config_dir / 'game_config.yaml',
            'system': self.config_dir / 'system_config.yaml'
        }

        self.default_configs = {
            'search': DEFAULT_SEARCH_CONFIG,
            'evaluation': DEFAULT_EVALUATION_CONFIG,
            'game': DEFAULT_GAME_CONFIG,
            'system': DEFAULT_SYSTEM_CONFIG
        }

        self.config_types = {
            'search': SearchConfig,
            'evaluation': EvaluationConfig,
            'game': GameConfig,
            'system': SystemConfig
        }

        if create_defaults:
            self._initialize_default_configs()

    def _initialize_default_configs(self):
        """初始化默认配置文件"""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        for config_name, config_obj in self.default_configs.items():
            config_file = self.config_files[config_name]
            if not config_file.exists():
                self.save_config(config_name, config_obj)
                logger.info(f"创建默认配置文件: {config_file}")

    def _default(self, config_name: str) -> Any:
        # 默认实例是模块级共享对象，返回副本避免被调用方修改
        return replace(self.default_configs[config_name])

    def load_config(self, config_name: str, config_class: Type[T]) -> T:
        """
        加载配置

        Args:
            config_name: 配置名称
            config_class: 配置类

        Returns:
            配置对象
        """
        config_file = self.config_files.get(config_name)
        if config_file is None:
            raise ConfigurationError(config_name, "未知的配置名称")
        if not config_file.exists():
            logger.warning(f"配置文件不存在: {config_file}，使用默认配置")
            return self._default(config_name)

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix == '.yaml':
                    data = yaml.safe_load(f)
                else:
                    data = json.load(f)

            config = self._dict_to_dataclass(data or {}, config_class)
            logger.debug(f"成功加载配置: {config_file}")
            return config

        except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
            logger.error(f"加载配置文件失败: {config_file}, 错误: {e}")
            return self._default(config_name)

    def save_config(self, config_name: str, config_obj: Any):
        """
        保存配置

        Args:
            config_name: 配置名称
            config_obj: 配置对象
        """
        config_file = self.config_files.get(config_name)
        if not config_file:
            raise ConfigurationError(config_name, "未知的配置名称")

        data = asdict(config_obj)
        config_file.parent.mkdir(parents=True, exist_ok=True)

        with open(config_file, 'w', encoding='utf-8') as f:
            if config_file.suffix == '.yaml':
                yaml.dump(data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(f"成功保存配置: {config_file}")

    def get_search_config(self) -> SearchConfig:
        """获取搜索配置"""
        return self.load_config('search', SearchConfig)

    def get_evaluation_config(self) -> EvaluationConfig:
        """获取评估配置"""
        return self.load_config('evaluation', EvaluationConfig)

    def get_game_config(self) -> GameConfig:
        """获取对局配置"""
        return self.load_config('game', GameConfig)

    def get_system_config(self) -> SystemConfig:
        """获取系统配置"""
        return self.load_config('system', SystemConfig)

    def update_config(self, config_name: str, **kwargs):
        """
        更新配置

        Args:
            config_name: 配置名称
            **kwargs: 要更新的配置项
        """
        config_class = self.config_types[config_name]
        config = self.load_config(config_name, config_class)

        for key, value in kwargs.items():
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"配置项不存在: {key}")

        self.save_config(config_name, config)

    def reset_config(self, config_name: str):
        """重置配置为默认值"""
        self.save_config(config_name, self.default_configs[config_name])
        logger.info(f"配置已重置为默认值: {config_name}")

    def validate_config(self, config_name: str, raise_on_error: bool = False) -> bool:
        """
        验证配置的有效性

        Args:
            config_name: 配置名称
            raise_on_error: 无效时是否抛出 ConfigurationError

        Returns:
            bool: 配置是否有效
        """
        if config_name not in self.config_types:
            raise ConfigurationError(config_name, "未知的配置名称")

        config = self.load_config(config_name, self.config_types[config_name])
        problems = []

        if config_name == 'search':
            if config.depth < 1:
                problems.append(f"depth必须至少为1: {config.depth}")
            if config.mate_score <= 0:
                problems.append(f"mate_score必须为正数: {config.mate_score}")
            if config.stalemate_policy not in STALEMATE_POLICIES:
                problems.append(f"stalemate_policy无效: {config.stalemate_policy}")
        elif config_name == 'evaluation':
            for key in ('check_bonus', 'checkmate_bonus', 'capture_weight'):
                if getattr(config, key) < 0:
                    problems.append(f"{key}不能为负数: {getattr(config, key)}")
        elif config_name == 'game':
            if config.default_difficulty not in ('easy', 'simple', 'medium', 'hard'):
                problems.append(f"default_difficulty无效: {config.default_difficulty}")
            if config.human_side not in ('red', 'black'):
                problems.append(f"human_side无效: {config.human_side}")
        elif config_name == 'system':
            if str(config.log_level).upper() not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
                problems.append(f"log_level无效: {config.log_level}")

        if problems:
            logger.warning(f"配置验证失败: {config_name}, {'; '.join(problems)}")
            if raise_on_error:
                raise ConfigurationError(config_name, '; '.join(problems))
            return False
        return True

    def get_all_configs(self) -> Dict[str, Any]:
        """获取所有配置"""
        return {
            config_name: self.load_config(config_name, config_class)
            for config_name, config_class in self.config_types.items()
        }

    def export_configs(self, export_path: str):
        """
        导出所有配置到文件

        Args:
            export_path: 导出文件路径 (.yaml 或 .json)
        """
        export_data = {
            config_name: asdict(config_obj)
            for config_name, config_obj in self.get_all_configs().items()
        }

        export_file = Path(export_path)
        with open(export_file, 'w', encoding='utf-8') as f:
            if export_file.suffix in ('.yaml', '.yml'):
                yaml.dump(export_data, f, default_flow_style=False,
                          allow_unicode=True, indent=2)
            else:
                json.dump(export_data, f, ensure_ascii=False, indent=2)

        logger.info(f"配置已导出到: {export_path}")

    def _dict_to_dataclass(self, data: Dict[str, Any], dataclass_type: Type[T]) -> T:
        """将字典转换为数据类对象，忽略未知字段"""
        if not isinstance(data, dict):
            raise TypeError(f"配置内容应为映射，实际为 {type(data).__name__}")

        field_names = {f.name for f in fields(dataclass_type)}
        filtered_data = {k: v for k, v in data.items() if k in field_names}

        return dataclass_type(**filtered_data)
