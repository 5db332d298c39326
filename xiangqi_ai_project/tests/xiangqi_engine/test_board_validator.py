"""
测试棋局合法性验证器
"""

from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    BoardValidator, ChessBoard, Piece, PieceKind, Side
)

RED = Side.RED
BLACK = Side.BLACK


def make_board(*placements) -> ChessBoard:
    return ChessBoard.from_pieces(
        (pos, Piece(kind, side)) for pos, kind, side in placements
    )


def generals(*extra) -> ChessBoard:
    """帅将不在同一列，附加其他棋子"""
    return make_board(
        ((4, 9), PieceKind.GENERAL, RED),
        ((3, 0), PieceKind.GENERAL, BLACK),
        *extra
    )


class TestBoardValidator:
    """BoardValidator类的测试"""

    def setup_method(self):
        """每个测试方法前的设置"""
        self.validator = BoardValidator()

    def test_initial_board_is_valid(self):
        is_valid, errors = self.validator.full_validation(ChessBoard.initial())
        assert is_valid
        assert errors == []

    def test_validate_placements(self):
        """测试坐标范围和重复格子"""
        chariot = Piece(PieceKind.CHARIOT, RED)
        assert self.validator.validate_placements([((0, 9), chariot), ((8, 9), chariot)])[0]

        is_valid, errors = self.validator.validate_placements([((0, 9), chariot), ((0, 9), chariot)])
        assert not is_valid
        assert len(errors) == 1

        for pos in [(9, 0), (0, 10), (True, 9), "a9"]:
            assert not self.validator.validate_placements([(pos, chariot)])[0]

    def test_piece_counts(self):
        board = generals(
            ((0, 9), PieceKind.CHARIOT, RED),
            ((1, 9), PieceKind.CHARIOT, RED),
            ((2, 9), PieceKind.CHARIOT, RED),
        )
        is_valid, errors = self.validator.validate_piece_counts(board)
        assert not is_valid
        assert len(errors) == 1

        assert self.validator.validate_piece_counts(ChessBoard.initial())[0]

    def test_general_and_advisor_stay_in_palace(self):
        """测试帅/将、仕/士必须在九宫内"""
        assert self.validator.validate_piece_positions(generals(((3, 9), PieceKind.ADVISOR, RED)))[0]

        is_valid, errors = self.validator.validate_piece_positions(make_board(
            ((4, 6), PieceKind.GENERAL, RED),
            ((0, 0), PieceKind.ADVISOR, BLACK),
        ))
        assert not is_valid
        assert len(errors) == 2

    def test_elephant_cannot_cross_river(self):
        assert self.validator.validate_piece_positions(generals(((2, 5), PieceKind.ELEPHANT, RED)))[0]
        assert not self.validator.validate_piece_positions(generals(((2, 4), PieceKind.ELEPHANT, RED)))[0]
        assert not self.validator.validate_piece_positions(generals(((2, 5), PieceKind.ELEPHANT, BLACK)))[0]

    def test_soldier_cannot_stand_behind_start(self):
        """兵/卒不能位于己方兵线之后"""
        assert self.validator.validate_piece_positions(generals(
            ((0, 6), PieceKind.SOLDIER, RED),
            ((0, 3), PieceKind.SOLDIER, BLACK),
            ((4, 2), PieceKind.SOLDIER, RED),
        ))[0]
        assert not self.validator.validate_piece_positions(generals(((0, 7), PieceKind.SOLDIER, RED)))[0]
        assert not self.validator.validate_piece_positions(generals(((0, 2), PieceKind.SOLDIER, BLACK)))[0]

    def test_generals_facing(self):
        """测试帅将照面"""
        facing = make_board(
            ((4, 9), PieceKind.GENERAL, RED),
            ((4, 0), PieceKind.GENERAL, BLACK),
        )
        is_valid, errors = self.validator.validate_generals_facing(facing)
        assert not is_valid
        assert len(errors) == 1

        blocked = facing.place((4, 5), Piece(PieceKind.CANNON, BLACK))
        assert self.validator.validate_generals_facing(blocked)[0]
        assert self.validator.validate_generals_facing(generals())[0]
        assert self.validator.validate_generals_facing(ChessBoard.empty())[0]

    def test_full_validation_collects_all_errors(self):
        board = make_board(
            ((4, 9), PieceKind.GENERAL, RED),
            ((4, 0), PieceKind.GENERAL, BLACK),
            ((0, 8), PieceKind.SOLDIER, RED),
            ((6, 6), PieceKind.ADVISOR, BLACK),
        )
        is_valid, errors = self.validator.full_validation(board)
        assert not is_valid
        assert len(errors) == 3
