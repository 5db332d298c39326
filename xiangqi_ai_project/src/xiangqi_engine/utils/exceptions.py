"""
异常定义

定义象棋引擎的各种异常类型。规则引擎和搜索引擎本身不因棋局原因抛出异常，
这些异常只在对局状态管理、配置和存档读写中使用。
"""


class XiangqiError(Exception):
    """
    象棋引擎基础异常

    所有象棋引擎相关异常的基类。
    """

    def __init__(self, message: str, error_code: str = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__

    def __str__(self):
        return f"[{self.error_code}] {self.message}"


class InvalidMoveError(XiangqiError):
    """
    非法走法异常

    当对局状态拒绝执行一个走法时抛出。
    """

    def __init__(self, move_str: str, reason: str = ""):
        message = f"非法走法: {move_str}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "INVALID_MOVE")
        self.move_str = move_str
        self.reason = reason


class GameStateError(XiangqiError):
    """
    游戏状态异常

    当对局已结束仍尝试走子等状态不一致时抛出。
    """

    def __init__(self, state_description: str, reason: str = ""):
        message = f"游戏状态错误: {state_description}"
        if reason:
            message += f" - {reason}"
        super().__init__(message, "GAME_STATE_ERROR")
        self.state_description = state_description
        self.reason = reason


class ConfigurationError(XiangqiError):
    """
    配置错误异常

    当配置参数无效时抛出。
    """

    def __init__(self, config_name: str, reason: str = ""):
        message = f"配置错误 - {config_name}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "CONFIG_ERROR")
        self.config_name = config_name
        self.reason = reason


class DataError(XiangqiError):
    """
    数据相关异常

    当存档或FEN数据格式错误时抛出。
    """

    def __init__(self, data_type: str, reason: str = ""):
        message = f"数据错误 - {data_type}"
        if reason:
            message += f": {reason}"
        super().__init__(message, "DATA_ERROR")
        self.data_type = data_type
        self.reason = reason
