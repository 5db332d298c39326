"""
对局存档

JSON格式的对局快照，包含棋子摆放、走子方、走法历史和对局状态。
读取时校验结构和棋盘约束，任何格式问题都转换为 DataError。
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

from ..rules_engine.board_validator import BoardValidator
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import MoveRecord, is_on_board
from ..rules_engine.pieces import Piece, Side
from ..rules_engine.rule_engine import GameStatus
from ..utils.exceptions import DataError
from .game_state import GameState

logger = logging.getLogger(__name__)

FORMAT_VERSION = 1

_validator = BoardValidator()


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """
    对局状态转换为可JSON序列化的字典

    Args:
        state: 对局状态

    Returns:
        Dict[str, Any]: 存档字典
    """
    return {
        'version': FORMAT_VERSION,
        'pieces': [
            {'kind': piece.kind.label, 'side': piece.side.label, 'file': file, 'rank': rank}
            for (file, rank), piece in state.board.pieces()
        ],
        'side_to_move': state.side_to_move.label,
        'history': [record.to_dict() for record in state.history],
        'status': state.status.value
    }


def _parse_pieces(entries: Any) -> List[Tuple[Any, Piece]]:
    if not isinstance(entries, list):
        raise DataError("存档", "pieces 应为列表")

    placements = []
    for index, entry in enumerate(entries):
        try:
            piece = Piece.from_dict(entry)
            pos = (entry['file'], entry['rank'])
        except (KeyError, TypeError, ValueError) as e:
            raise DataError("存档", f"第{index + 1}个棋子格式错误: {e}") from e
        placements.append((pos, piece))
    return placements


def _parse_history(entries: Any) -> Tuple[MoveRecord, ...]:
    if not isinstance(entries, list):
        raise DataError("存档", "history 应为列表")

    records = []
    for index, entry in enumerate(entries):
        try:
            record = MoveRecord.from_dict(entry)
        except (KeyError, TypeError, ValueError) as e:
            raise DataError("存档", f"第{index + 1}步走法格式错误: {e}") from e
        if not is_on_board(record.from_pos) or not is_on_board(record.to_pos):
            raise DataError("存档", f"第{index + 1}步走法坐标超出棋盘")
        records.append(record)
    return tuple(records)


def state_from_dict(data: Dict[str, Any]) -> GameState:
    """
    从存档字典恢复对局状态

    Args:
        data: 存档字典

    Returns:
        GameState: 对局状态

    Raises:
        DataError: 格式错误或棋盘不满足约束
    """
    if not isinstance(data, dict):
        raise DataError("存档", "顶层应为对象")

    version = data.get('version')
    if version != FORMAT_VERSION:
        raise DataError("存档", f"不支持的版本: {version}")

    placements = _parse_pieces(data.get('pieces'))
    is_valid, errors = _validator.validate_placements(placements)
    if not is_valid:
        raise DataError("存档", "; ".join(errors))

    board = ChessBoard.from_pieces(placements)
    is_valid, errors = _validator.full_validation(board)
    if not is_valid:
        raise DataError("存档", "; ".join(errors))

    try:
        side_to_move = Side.parse(data.get('side_to_move'))
        status = GameStatus(data.get('status', GameStatus.PLAYING.value))
    except ValueError as e:
        raise DataError("存档", str(e)) from e

    return GameState(
        board=board,
        side_to_move=side_to_move,
        history=_parse_history(data.get('history', [])),
        status=status
    )


def dumps(state: GameState, indent: int = 2) -> str:
    """对局状态序列化为JSON字符串"""
    return json.dumps(state_to_dict(state), ensure_ascii=False, indent=indent)


def loads(text: str) -> GameState:
    """从JSON字符串恢复对局状态"""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise DataError("存档", f"JSON解析失败: {e}") from e
    return state_from_dict(data)


def save_game(state: GameState, path: Union[str, Path]):
    """
    保存对局到文件

    Args:
        state: 对局状态
        path: 存档路径
    """
    save_path = Path(path)
    save_path.parent.mkdir(parents=True, exist_ok=True)
    save_path.write_text(dumps(state), encoding='utf-8')
    logger.info(f"对局已保存: {save_path}")


def load_game(path: Union[str, Path]) -> GameState:
    """
    从文件加载对局

    Args:
        path: 存档路径

    Returns:
        GameState: 对局状态
    """
    load_path = Path(path)
    try:
        text = load_path.read_text(encoding='utf-8')
    except OSError as e:
        raise DataError("存档文件", f"无法读取 {load_path}: {e}") from e

    state = loads(text)
    logger.info(f"对局已加载: {load_path}, 共{state.move_count}步")
    return state
