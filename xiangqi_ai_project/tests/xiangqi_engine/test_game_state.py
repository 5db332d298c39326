"""
测试对局状态

测试不可变的对局状态、走子、悔棋和终局判定。
"""

import random

import pytest

from xiangqi_ai_project.src.xiangqi_engine.config import SearchConfig
from xiangqi_ai_project.src.xiangqi_engine.game import (
    GameState, GameStatus, MoveOutcome, apply_move, computer_move, play_human_move, reset, undo_move
)
from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    ChessBoard, Move, Piece, PieceKind, Side, is_legal_move
)
from xiangqi_ai_project.src.xiangqi_engine.utils import GameStateError, InvalidMoveError

RED = Side.RED
BLACK = Side.BLACK


def make_board(*placements) -> ChessBoard:
    return ChessBoard.from_pieces(
        (pos, Piece(kind, side)) for pos, kind, side in placements
    )


def mate_in_one_board() -> ChessBoard:
    return make_board(
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((3, 9), PieceKind.GENERAL, RED),
        ((8, 5), PieceKind.CHARIOT, RED),
        ((5, 7), PieceKind.CHARIOT, RED),
    )


def stalemate_in_one_board() -> ChessBoard:
    """红车退到(0,1)后黑将无子可动但未被将军"""
    return make_board(
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((3, 9), PieceKind.GENERAL, RED),
        ((5, 7), PieceKind.CHARIOT, RED),
        ((0, 3), PieceKind.CHARIOT, RED),
    )


class TestGameState:
    """GameState与apply_move的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.state = GameState.new()

    def test_new_game(self):
        assert self.state.board == ChessBoard.initial()
        assert self.state.side_to_move is RED
        assert self.state.history == ()
        assert self.state.status is GameStatus.PLAYING
        assert not self.state.is_over
        assert reset() == self.state

    def test_apply_move(self):
        """测试执行合法走法"""
        new_state = apply_move(self.state, Move((7, 7), (4, 7)))

        assert new_state.side_to_move is BLACK
        assert new_state.move_count == 1
        assert new_state.last_record.piece == Piece(PieceKind.CANNON, RED)
        assert new_state.last_record.captured is None
        assert new_state.last_record.to_chinese_notation() == '炮二平五'
        assert new_state.board.at((4, 7)) == Piece(PieceKind.CANNON, RED)
        assert new_state.status is GameStatus.PLAYING

        # 原状态不变
        assert self.state.board.at((4, 7)) is None
        assert self.state.history == ()

    def test_apply_capture(self):
        new_state = apply_move(self.state, Move((1, 7), (1, 0)))
        assert new_state.last_record.captured == Piece(PieceKind.HORSE, BLACK)
        assert new_state.last_record.is_capture

    def test_illegal_move_raises(self):
        with pytest.raises(InvalidMoveError):
            apply_move(self.state, Move((0, 6), (0, 4)))
        # 不能走对方的棋子
        with pytest.raises(InvalidMoveError):
            apply_move(self.state, Move((0, 3), (0, 4)))
        with pytest.raises(InvalidMoveError):
            apply_move(self.state, Move((9, 9), (8, 9)))

    def test_illegal_move_error_details(self):
        with pytest.raises(InvalidMoveError) as exc_info:
            apply_move(self.state, Move((4, 4), (4, 3)))
        assert exc_info.value.error_code == "INVALID_MOVE"

    def test_checkmate_ends_game(self):
        """测试将死后红方获胜"""
        state = GameState(board=mate_in_one_board(), side_to_move=RED)
        new_state = apply_move(state, Move((8, 5), (4, 5)))

        assert new_state.status is GameStatus.RED_WIN
        assert new_state.status.winner is RED
        assert new_state.is_over

    def test_no_moves_after_game_over(self):
        state = GameState(board=mate_in_one_board(), side_to_move=RED)
        finished = apply_move(state, Move((8, 5), (4, 5)))

        with pytest.raises(GameStateError):
            apply_move(finished, Move((4, 0), (5, 0)))
        assert computer_move(finished, 'easy') is None

    def test_stalemate_policy(self):
        """测试困毙策略对对局状态的影响"""
        state = GameState(board=stalemate_in_one_board(), side_to_move=RED)
        move = Move((0, 3), (0, 1))

        loss = apply_move(state, move, SearchConfig(stalemate_policy='loss'))
        draw = apply_move(state, move, SearchConfig(stalemate_policy='draw'))

        assert loss.status is GameStatus.RED_WIN
        assert draw.status is GameStatus.DRAW
        assert draw.status.winner is None

    def test_undo_restores_capture(self):
        """测试悔棋恢复被吃的棋子"""
        captured = apply_move(self.state, Move((1, 7), (1, 0)))
        restored = undo_move(captured)

        assert restored.board == self.state.board
        assert restored.side_to_move is RED
        assert restored.history == ()
        assert restored.status is GameStatus.PLAYING

    def test_undo_reopens_finished_game(self):
        state = GameState(board=mate_in_one_board(), side_to_move=RED)
        finished = apply_move(state, Move((8, 5), (4, 5)))

        reopened = undo_move(finished)
        assert reopened.status is GameStatus.PLAYING
        assert reopened.board == state.board
        assert reopened.side_to_move is RED

    def test_undo_empty_history(self):
        assert undo_move(self.state) is self.state

    def test_state_is_immutable(self):
        with pytest.raises(AttributeError):
            self.state.side_to_move = BLACK

    def test_computer_move(self):
        move = computer_move(self.state, 'easy', rng=random.Random(3))
        assert is_legal_move(self.state.board, move.from_pos, move.to_pos, RED)

        state = apply_move(self.state, move)
        reply = computer_move(state, 'medium')
        assert is_legal_move(state.board, reply.from_pos, reply.to_pos, BLACK)


class TestPlayHumanMove:
    """play_human_move 的测试"""

    def setup_method(self):
        self.board = ChessBoard.initial()

    def test_legal_move(self):
        outcome = play_human_move(self.board, (7, 7), (4, 7), RED)
        assert isinstance(outcome, MoveOutcome)
        assert outcome.legal
        assert outcome.board.at((4, 7)) == Piece(PieceKind.CANNON, RED)
        assert outcome.captured is None
        assert not outcome.opponent_in_check
        assert not outcome.opponent_checkmated
        assert self.board.at((4, 7)) is None

    def test_illegal_move(self):
        outcome = play_human_move(self.board, (4, 4), (4, 3), RED)
        assert not outcome.legal
        assert outcome.board is None

        outcome = play_human_move(self.board, (0, 3), (0, 4), RED)
        assert not outcome.legal

        outcome = play_human_move(self.board, (0, 6), (0, 42), RED)
        assert not outcome.legal

    def test_capture_reported(self):
        outcome = play_human_move(self.board, (1, 7), (1, 0), RED)
        assert outcome.legal
        assert outcome.captured == Piece(PieceKind.HORSE, BLACK)

    def test_checkmating_move(self):
        outcome = play_human_move(mate_in_one_board(), (8, 5), (4, 5), RED)
        assert outcome.legal
        assert outcome.opponent_in_check
        assert outcome.opponent_checkmated
