"""
Lookahead search: recursion values, immediate-win detection, tie-breaking
and parallel/sequential equivalence.
"""

import pytest

from dropfour.ai.search import SearchEngine, choose_counter_move, pick_best
from dropfour.ai.search_agent import SearchAgent
from dropfour.core.board import Board
from dropfour.core.scoring import ZERO, Score, score_drop
from dropfour.game.state import GameState
from dropfour.types import Move

SEQUENTIAL = SearchEngine(parallel_levels=0)
PARALLEL = SearchEngine(parallel_levels=3, max_workers=4)


def _three_in_bottom_row(player="X"):
    board = Board()
    for col in (0, 1, 2):
        board.drop(col, player)
    return board


class TestValue:

    def test_depth_zero_is_neutral(self):
        assert SEQUENTIAL.value(0, Move(3), "X", Board()) == ZERO

    def test_depth_one_is_the_heuristic(self):
        board = Board()
        for col in range(board.cols):
            assert SEQUENTIAL.value(1, Move(col), "X", board) == score_drop(board, col, "X").total

    def test_immediate_win_short_circuits(self):
        board = _three_in_bottom_row()
        for depth in (1, 2, 3):
            assert SEQUENTIAL.value(depth, Move(3), "X", board) == Score.win()

    def test_depth_two_subtracts_best_reply(self):
        # X in the corner scores 3; the hypothetical puts O's coin at (5, 0)
        # and O's best reply (column 3) then scores 9.
        assert SEQUENTIAL.value(2, Move(0), "X", Board()) == Score.finite(3 - 9)

    def test_negative_depth_is_neutral(self):
        assert SEQUENTIAL.value(-1, Move(3), "X", Board()) == ZERO
        assert SEQUENTIAL.choose_counter_move(Board(), depth=-3, player="X") == 0

    def test_opponent_immediate_win_becomes_loss(self):
        board = _three_in_bottom_row("O")
        board.drop(6, "X")
        # whatever X plays, O still has column 3 for four in a row
        assert SEQUENTIAL.value(2, Move(0), "X", board) == Score.loss(1)
        assert PARALLEL.value(2, Move(0), "X", board) == Score.loss(1)

    def test_win_found_through_the_recursion(self):
        # X holds (5,1)..(5,3) with both ends open: every O reply leaves X a
        # four at column 0 or column 4.
        board = Board.from_rows([
            ".......",
            ".......",
            ".......",
            ".......",
            ".......",
            ".XXX...",
        ])
        assert SEQUENTIAL.value(3, Move(6), "X", board) == Score.win(2)
        assert PARALLEL.value(3, Move(6), "X", board) == Score.win(2)

        scores = SEQUENTIAL.score_columns(3, "X", board)
        assert scores[Move(0)] == scores[Move(4)] == Score.win()
        assert SEQUENTIAL.choose_counter_move(board, 3, "X") == 0

    def test_best_response_on_full_board_is_neutral(self):
        full = Board.from_rows(["XOX", "OXO", "XOX"])
        assert SEQUENTIAL.best_response(2, "O", full) == ZERO

    def test_search_never_mutates_board(self):
        board = Board()
        for col, p in [(3, "X"), (3, "O"), (2, "X"), (4, "O")]:
            board.drop(col, p)
        before = list(board.slots)
        PARALLEL.choose_counter_move(board, depth=3, player="X")
        assert board.slots == before


class TestChooseCounterMove:

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_takes_the_only_immediate_win(self, depth):
        board = _three_in_bottom_row("X")
        board.drop(6, "O")
        assert choose_counter_move(board, depth, player="X") == 3

    @pytest.mark.parametrize("depth", [1, 2])
    def test_takes_vertical_win_for_o(self, depth):
        board = Board()
        for _ in range(3):
            board.drop(5, "O")
        board.drop(0, "X")
        board.drop(1, "X")
        assert choose_counter_move(board, depth, player="O") == 5

    def test_empty_board_prefers_center(self):
        assert SEQUENTIAL.choose_counter_move(Board(), depth=1, player="O") == 3

    def test_tie_goes_to_lowest_column(self):
        # Even width: columns 3 and 4 score the same.
        board = Board(6, 8)
        scores = SEQUENTIAL.score_columns(1, "X", board)
        assert scores[Move(3)] == scores[Move(4)] == Score.finite(7)
        assert SEQUENTIAL.choose_counter_move(board, 1, "X") == 3
        assert PARALLEL.choose_counter_move(board, 1, "X") == 3

    @pytest.mark.parametrize("depth", [1, 2, 3])
    def test_parallel_matches_sequential(self, depth):
        board = Board()
        for col, p in [(3, "X"), (2, "O"), (3, "X"), (4, "O")]:
            board.drop(col, p)
        seq = SEQUENTIAL.score_columns(depth, "X", board)
        par = PARALLEL.score_columns(depth, "X", board)
        assert seq == par
        assert SEQUENTIAL.choose_counter_move(board, depth, "X") == PARALLEL.choose_counter_move(board, depth, "X")

    def test_full_columns_are_never_candidates(self):
        board = Board(4, 4)
        for n in range(4):
            board.drop(0, "X" if n % 2 else "O")
        scores = SEQUENTIAL.score_columns(2, "X", board)
        assert Move(0) not in scores
        assert SEQUENTIAL.choose_counter_move(board, 2, "X") != 0

    def test_no_valid_moves(self):
        with pytest.raises(ValueError):
            choose_counter_move(Board.from_rows(["XOX", "OXO", "XOX"]), 2)


class TestPickBest:

    def test_strict_greater_keeps_first(self):
        scores = {Move(0): Score.finite(1), Move(1): Score.finite(5), Move(2): Score.finite(5)}
        assert pick_best(scores) == 1

    def test_immediate_win_beats_later_win(self):
        scores = {Move(0): Score.win(2), Move(4): Score.win()}
        assert pick_best(scores) == 4

    def test_empty(self):
        assert pick_best({}) is None


class TestSearchAgent:

    def test_plays_for_side_to_move(self):
        board = _three_in_bottom_row("O")
        agent = SearchAgent(depth=2, engine=SEQUENTIAL)
        move = agent.choose_move(GameState(board=board, current="O"))
        assert move == 3
        assert agent.last_info["move_col"] == 4
        assert agent.last_info["eval"] == "WIN"
        assert agent.last_info["depth"] == 2
        assert set(agent.last_info["scores"]) == set(range(1, 8))
