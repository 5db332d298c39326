"""
测试搜索算法

测试三档难度的走法选择、无子可动时的返回值和搜索统计。
"""

import random
from collections import Counter

import pytest

from xiangqi_ai_project.src.xiangqi_engine.config import SearchConfig
from xiangqi_ai_project.src.xiangqi_engine.rules_engine import (
    ChessBoard, Move, Piece, PieceKind, Side, all_legal_moves, is_stalemate
)
from xiangqi_ai_project.src.xiangqi_engine.search_algorithm import (
    Difficulty, GreedySearcher, MinimaxSearcher, RandomSearcher, create_searcher, select_move
)

RED = Side.RED
BLACK = Side.BLACK


def make_board(*placements) -> ChessBoard:
    return ChessBoard.from_pieces(
        (pos, Piece(kind, side)) for pos, kind, side in placements
    )


def three_move_board() -> ChessBoard:
    """红方只有帅，恰好有三个合法走法"""
    return make_board(
        ((4, 9), PieceKind.GENERAL, RED),
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((4, 1), PieceKind.ADVISOR, BLACK),
    )


def mate_in_one_board() -> ChessBoard:
    """红车平到中路即可将死黑将"""
    return make_board(
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((3, 9), PieceKind.GENERAL, RED),
        ((8, 5), PieceKind.CHARIOT, RED),
        ((5, 7), PieceKind.CHARIOT, RED),
    )


def checkmated_board() -> ChessBoard:
    return make_board(
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((3, 9), PieceKind.GENERAL, RED),
        ((4, 5), PieceKind.CHARIOT, RED),
        ((5, 7), PieceKind.CHARIOT, RED),
    )


def stalemate_board() -> ChessBoard:
    return make_board(
        ((4, 0), PieceKind.GENERAL, BLACK),
        ((3, 9), PieceKind.GENERAL, RED),
        ((5, 7), PieceKind.CHARIOT, RED),
        ((0, 1), PieceKind.CHARIOT, RED),
    )


MATING_MOVE = Move((8, 5), (4, 5))
STALEMATING_MOVE = Move((8, 5), (8, 1))


class TestDifficulty:
    """难度解析的测试"""

    def test_parse(self):
        assert Difficulty.parse('easy') is Difficulty.EASY
        assert Difficulty.parse('simple') is Difficulty.EASY
        assert Difficulty.parse('Medium') is Difficulty.MEDIUM
        assert Difficulty.parse(Difficulty.HARD) is Difficulty.HARD
        with pytest.raises(ValueError):
            Difficulty.parse('impossible')

    def test_create_searcher(self):
        assert isinstance(create_searcher('easy'), RandomSearcher)
        assert isinstance(create_searcher('medium'), GreedySearcher)
        searcher = create_searcher('hard', SearchConfig(depth=2))
        assert isinstance(searcher, MinimaxSearcher)
        assert searcher.depth == 2


class TestRandomSearcher:
    """简单难度的测试"""

    def test_three_move_position(self):
        assert len(all_legal_moves(three_move_board(), RED)) == 3

    def test_all_moves_are_chosen(self):
        """1000次随机选择应覆盖全部三个合法走法"""
        board = three_move_board()
        rng = random.Random(42)
        counts = Counter(select_move(board, RED, 'easy', rng=rng) for _ in range(1000))

        assert set(counts) == set(all_legal_moves(board, RED))
        assert all(count > 0 for count in counts.values())

    def test_injected_rng_is_deterministic(self):
        board = ChessBoard.initial()
        first = [RandomSearcher(rng=random.Random(7)).search(board, RED) for _ in range(3)]
        second = [RandomSearcher(rng=random.Random(7)).search(board, RED) for _ in range(3)]
        assert first == second

    def test_seed_from_config(self):
        board = ChessBoard.initial()
        config = SearchConfig(random_seed=11)
        assert select_move(board, RED, 'easy', config) == select_move(board, RED, 'easy', config)


class TestGreedySearcher:
    """中等难度的测试"""

    def setup_method(self):
        self.searcher = GreedySearcher()

    def test_prefers_most_valuable_capture(self):
        board = make_board(
            ((4, 9), PieceKind.GENERAL, RED),
            ((3, 0), PieceKind.GENERAL, BLACK),
            ((0, 5), PieceKind.CHARIOT, RED),
            ((0, 2), PieceKind.CHARIOT, BLACK),
            ((8, 5), PieceKind.SOLDIER, BLACK),
        )
        assert self.searcher.search(board, RED) == Move((0, 5), (0, 2))

    def test_capture_bonus(self):
        board = make_board(
            ((4, 9), PieceKind.GENERAL, RED),
            ((3, 0), PieceKind.GENERAL, BLACK),
            ((0, 5), PieceKind.CHARIOT, RED),
            ((8, 5), PieceKind.SOLDIER, BLACK),
        )
        plain = self.searcher.score_move(board, RED, Move((0, 5), (1, 5)))
        capture = self.searcher.score_move(board, RED, Move((0, 5), (8, 5)))
        assert capture == plain + 10 + 2 * 10

    def test_finds_mate_in_one(self):
        assert self.searcher.search(mate_in_one_board(), RED) == MATING_MOVE

    def test_first_move_wins_ties(self):
        """所有走法分数相同时选择第一个"""
        board = three_move_board()
        assert self.searcher.search(board, RED) == all_legal_moves(board, RED)[0]


class TestMinimaxSearcher:
    """困难难度的测试"""

    def test_mate_in_one_at_depth_three(self):
        """深度3的搜索必须找到一步杀"""
        board = mate_in_one_board()
        assert select_move(board, RED, 'hard', SearchConfig(depth=3)) == MATING_MOVE

    def test_does_not_mutate_board(self):
        board = mate_in_one_board()
        before = board.to_matrix()
        MinimaxSearcher(depth=2).search(board, RED)
        assert (board.to_matrix() == before).all()

    def test_invalid_depth(self):
        with pytest.raises(ValueError):
            MinimaxSearcher(depth=0)

    def test_terminal_score_policies(self):
        """测试困毙在搜索中的评分"""
        board = stalemate_board()
        loss = MinimaxSearcher(config=SearchConfig(stalemate_policy='loss'))
        draw = MinimaxSearcher(config=SearchConfig(stalemate_policy='draw'))

        assert loss._terminal_score(board, BLACK, RED, 1) == 100000 - 1 - 1
        assert loss._terminal_score(board, BLACK, BLACK, 1) == -(100000 - 1 - 1)
        assert draw._terminal_score(board, BLACK, RED, 1) == 0

    def test_checkmate_outranks_stalemate(self):
        """同一层的将死分数高于困毙"""
        searcher = MinimaxSearcher()
        mated = searcher._terminal_score(checkmated_board(), BLACK, RED, 1)
        stalemated = searcher._terminal_score(stalemate_board(), BLACK, RED, 1)
        assert mated > stalemated > 0

    def test_prefers_mate_over_earlier_stalemate(self):
        """困毙走法先生成时，仍然选择将死"""
        board = mate_in_one_board()
        moves = all_legal_moves(board, RED)
        assert moves.index(STALEMATING_MOVE) < moves.index(MATING_MOVE)
        assert is_stalemate(board.apply(STALEMATING_MOVE), BLACK)

        for depth in (1, 2, 3):
            assert MinimaxSearcher(depth=depth).search(board, RED) == MATING_MOVE

    def test_stalemate_policy_passed_to_evaluation(self):
        searcher = MinimaxSearcher(config=SearchConfig(stalemate_policy='draw'))
        assert searcher.stalemate_policy == 'draw'
        assert create_searcher('medium', SearchConfig(stalemate_policy='draw')).stalemate_policy == 'draw'

    def test_faster_mate_scores_higher(self):
        board = checkmated_board()
        searcher = MinimaxSearcher()
        assert searcher._terminal_score(board, BLACK, RED, 1) > searcher._terminal_score(board, BLACK, RED, 3)

    def test_search_stats(self):
        searcher = MinimaxSearcher(depth=2)
        searcher.search(mate_in_one_board(), RED)

        stats = searcher.get_stats()
        assert stats['total_searches'] == 1
        assert stats['last_nodes'] > 0
        assert stats['total_search_time'] >= 0

        searcher.reset_stats()
        assert searcher.get_stats()['total_searches'] == 0


class TestSelectMove:
    """select_move 入口的测试"""

    @pytest.mark.parametrize('difficulty', ['easy', 'medium', 'hard'])
    def test_no_legal_moves_returns_none(self, difficulty):
        assert select_move(stalemate_board(), BLACK, difficulty, SearchConfig(depth=2)) is None

    @pytest.mark.parametrize('difficulty', ['easy', 'medium', 'hard'])
    def test_returns_legal_move(self, difficulty):
        board = three_move_board()
        move = select_move(board, RED, difficulty, SearchConfig(depth=2), rng=random.Random(1))
        assert move in all_legal_moves(board, RED)

    def test_missing_general_returns_none(self):
        board = make_board(
            ((4, 9), PieceKind.GENERAL, RED),
            ((0, 0), PieceKind.CHARIOT, BLACK),
        )
        assert select_move(board, BLACK, 'medium') is None
