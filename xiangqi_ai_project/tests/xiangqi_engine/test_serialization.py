"""
测试对局存档
"""

import json

import pytest

from xiangqi_ai_project.src.xiangqi_engine.game import (
    GameState, GameStatus, apply_move, dumps, load_game, loads, save_game, state_from_dict, state_to_dict
)
from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    ChessBoard, Move, Piece, PieceKind, Side, is_checkmate
)
from xiangqi_ai_project.src.xiangqi_engine.search_algorithm import evaluate
from xiangqi_ai_project.src.xiangqi_engine.utils import DataError


def checkmate_state() -> GameState:
    board = ChessBoard.from_pieces([
        ((4, 0), Piece(PieceKind.GENERAL, Side.BLACK)),
        ((3, 9), Piece(PieceKind.GENERAL, Side.RED)),
        ((4, 5), Piece(PieceKind.CHARIOT, Side.RED)),
        ((5, 7), Piece(PieceKind.CHARIOT, Side.RED)),
    ])
    return GameState(board=board, side_to_move=Side.BLACK, status=GameStatus.RED_WIN)


class TestSerialization:
    """存档格式的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        state = GameState.new()
        state = apply_move(state, Move((7, 7), (4, 7)))
        state = apply_move(state, Move((7, 0), (6, 2)))
        state = apply_move(state, Move((4, 7), (4, 3)))
        self.state = state

    def test_dict_layout(self):
        data = state_to_dict(GameState.new())

        assert data['version'] == 1
        assert len(data['pieces']) == 32
        assert data['pieces'][0] == {'kind': 'chariot', 'side': 'black', 'file': 0, 'rank': 0}
        assert data['side_to_move'] == 'red'
        assert data['history'] == []
        assert data['status'] == 'playing'

    def test_history_layout(self):
        data = state_to_dict(self.state)
        assert data['history'][0] == {
            'from': [7, 7], 'to': [4, 7],
            'piece': {'kind': 'cannon', 'side': 'red'},
            'captured': None
        }
        assert data['history'][2]['captured'] == {'kind': 'soldier', 'side': 'black'}

    def test_round_trip(self):
        """测试存档往返后状态一致"""
        restored = loads(dumps(self.state))

        assert restored == self.state
        assert restored.board == self.state.board
        assert restored.side_to_move is Side.BLACK
        assert restored.history == self.state.history

    def test_round_trip_preserves_evaluation(self):
        """往返后评估和将死检测结果一致"""
        state = checkmate_state()
        restored = state_from_dict(json.loads(json.dumps(state_to_dict(state))))

        assert restored.status is GameStatus.RED_WIN
        for side in (Side.RED, Side.BLACK):
            assert evaluate(restored.board, side) == evaluate(state.board, side)
            assert is_checkmate(restored.board, side) == is_checkmate(state.board, side)

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "saves" / "game.json"
        save_game(self.state, path)

        assert path.exists()
        assert load_game(path) == self.state
        assert json.loads(path.read_text(encoding='utf-8'))['version'] == 1

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(DataError):
            load_game(tmp_path / "missing.json")

    def test_invalid_json(self):
        with pytest.raises(DataError):
            loads("{not json")

    def test_unsupported_version(self):
        data = state_to_dict(self.state)
        data['version'] = 2
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_not_an_object(self):
        with pytest.raises(DataError):
            state_from_dict([1, 2, 3])

    def test_out_of_range_coordinate(self):
        data = state_to_dict(self.state)
        data['pieces'][0]['rank'] = 10
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_boolean_coordinate(self):
        data = state_to_dict(self.state)
        data['pieces'][0]['file'] = True
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_duplicate_square(self):
        data = state_to_dict(self.state)
        data['pieces'].append(dict(data['pieces'][0]))
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_too_many_generals(self):
        data = state_to_dict(GameState.new())
        data['pieces'].append({'kind': 'general', 'side': 'red', 'file': 4, 'rank': 8})
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_generals_facing_rejected(self):
        """帅将照面的存档无法载入"""
        board = ChessBoard.from_pieces([
            ((4, 0), Piece(PieceKind.GENERAL, Side.BLACK)),
            ((4, 9), Piece(PieceKind.GENERAL, Side.RED)),
        ])
        data = state_to_dict(GameState(board=board))
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_piece_outside_its_area_rejected(self):
        data = state_to_dict(self.state)
        general = next(entry for entry in data['pieces'] if entry['kind'] == 'general')
        general['rank'] = 5 if general['side'] == 'red' else 4
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_unknown_piece_kind(self):
        data = state_to_dict(self.state)
        data['pieces'][0]['kind'] = 'queen'
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_bad_side_and_status(self):
        data = state_to_dict(self.state)
        data['side_to_move'] = 'green'
        with pytest.raises(DataError):
            state_from_dict(data)

        data = state_to_dict(self.state)
        data['status'] = 'abandoned'
        with pytest.raises(DataError):
            state_from_dict(data)

    def test_bad_history_entry(self):
        data = state_to_dict(self.state)
        data['history'][0] = {'from': [7, 7]}
        with pytest.raises(DataError):
            state_from_dict(data)

        data = state_to_dict(self.state)
        data['history'][0]['to'] = [4, 12]
        with pytest.raises(DataError):
            state_from_dict(data)
