"""
对局状态

对局状态是不可变的值：走子、悔棋都返回新的 GameState，规则引擎本身保持无状态。
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Tuple

from ..config.engine_config import DEFAULT_SEARCH_CONFIG, EvaluationConfig, SearchConfig
from ..rules_engine.chess_board import ChessBoard
from ..rules_engine.move import Move, MoveRecord, Position
from ..rules_engine.pieces import Piece, Side
from ..rules_engine.rule_engine import GameStatus, RuleEngine, default_engine
from ..search_algorithm.move_selector import select_move
from ..utils.exceptions import GameStateError, InvalidMoveError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameState:
    """
    不可变的对局状态

    Attributes:
        board: 当前棋盘
        side_to_move: 轮到走子的一方
        history: 走法历史
        status: 对局状态
    """
    board: ChessBoard
    side_to_move: Side = Side.RED
    history: Tuple[MoveRecord, ...] = field(default_factory=tuple)
    status: GameStatus = GameStatus.PLAYING

    @classmethod
    def new(cls) -> 'GameState':
        """新对局：标准开局，红方先走"""
        return cls(board=ChessBoard.initial(), side_to_move=Side.RED,
                   history=(), status=GameStatus.PLAYING)

    @property
    def is_over(self) -> bool:
        return self.status.is_over

    @property
    def last_record(self) -> Optional[MoveRecord]:
        return self.history[-1] if self.history else None

    @property
    def move_count(self) -> int:
        return len(self.history)


@dataclass(frozen=True)
class MoveOutcome:
    """人类走子请求的结果"""
    legal: bool
    board: Optional[ChessBoard] = None
    captured: Optional[Piece] = None
    opponent_in_check: bool = False
    opponent_checkmated: bool = False


def reset() -> GameState:
    """重新开始对局"""
    return GameState.new()


def apply_move(state: GameState, move: Move,
               config: Optional[SearchConfig] = None,
               engine: Optional[RuleEngine] = None) -> GameState:
    """
    执行走法，返回新的对局状态

    Args:
        state: 当前对局状态
        move: 走法
        config: 搜索配置（提供困毙处理策略）
        engine: 规则引擎

    Returns:
        GameState: 走子后的对局状态

    Raises:
        GameStateError: 对局已经结束
        InvalidMoveError: 走法不合法
    """
    config = config or DEFAULT_SEARCH_CONFIG
    engine = engine or default_engine

    if state.is_over:
        raise GameStateError(state.status.value, "对局已结束，不能继续走子")

    board = state.board
    side = state.side_to_move
    if not engine.is_legal_move(board, move.from_pos, move.to_pos, side):
        raise InvalidMoveError(f"{move.from_pos} -> {move.to_pos}", f"{side.chinese_name}不能这样走")

    move = Move(tuple(move.from_pos), tuple(move.to_pos))
    record = MoveRecord(
        from_pos=move.from_pos,
        to_pos=move.to_pos,
        piece=board.at(move.from_pos),
        captured=board.at(move.to_pos)
    )
    new_board = board.apply(move)
    next_side = side.opponent
    status = engine.game_status(new_board, next_side, config.stalemate_policy)

    logger.debug(f"第{len(state.history) + 1}步: {record.to_chinese_notation()} ({move})")
    if status.is_over:
        logger.info(f"对局结束: {status.value}")

    return GameState(
        board=new_board,
        side_to_move=next_side,
        history=state.history + (record,),
        status=status
    )


def play_human_move(board: ChessBoard, from_pos: Position, to_pos: Position, side: Side,
                    engine: Optional[RuleEngine] = None) -> MoveOutcome:
    """
    处理人类走子请求

    Args:
        board: 当前棋盘（不会被修改）
        from_pos: 起点
        to_pos: 终点
        side: 走子方

    Returns:
        MoveOutcome: 非法时 legal 为 False 且 board 为 None
    """
    engine = engine or default_engine

    if not engine.is_legal_move(board, from_pos, to_pos, side):
        return MoveOutcome(legal=False)

    from_pos, to_pos = tuple(from_pos), tuple(to_pos)
    captured = board.at(to_pos)
    new_board = board.apply_positions(from_pos, to_pos)
    opponent = side.opponent

    return MoveOutcome(
        legal=True,
        board=new_board,
        captured=captured,
        opponent_in_check=engine.is_in_check(new_board, opponent),
        opponent_checkmated=engine.is_checkmate(new_board, opponent)
    )


def computer_move(state: GameState, difficulty,
                  config: Optional[SearchConfig] = None,
                  evaluation_config: Optional[EvaluationConfig] = None,
                  rng=None) -> Optional[Move]:
    """
    为轮到走子的一方计算电脑走法

    Returns:
        Optional[Move]: 走法，对局已结束或无子可动时返回None
    """
    if state.is_over:
        return None
    return select_move(state.board, state.side_to_move, difficulty,
                       config=config, evaluation_config=evaluation_config, rng=rng)


def undo_move(state: GameState) -> GameState:
    """
    悔一步棋

    根据最后一条记录还原棋盘（包括被吃的棋子），走子方回退，状态恢复为进行中。
    没有历史时原样返回。
    """
    record = state.last_record
    if record is None:
        return state

    board = state.board.place(record.from_pos, record.piece).place(record.to_pos, record.captured)
    logger.debug(f"悔棋: {record.to_chinese_notation()}")

    return GameState(
        board=board,
        side_to_move=record.piece.side,
        history=state.history[:-1],
        status=GameStatus.PLAYING
    )
