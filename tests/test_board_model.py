import itertools

import pytest

from board_model import (
    DRAW,
    EMPTY,
    IN_PROGRESS,
    LINES,
    O,
    X,
    InvalidMove,
    Outcome,
    apply_move,
    empty_cells,
    evaluate,
    new_board,
    winning_line,
)


def board_from(text):
    return tuple("" if ch == "_" else ch for ch in text)


def test_new_board_is_empty():
    board = new_board()
    assert board == (EMPTY,) * 9
    assert evaluate(board) == IN_PROGRESS
    assert empty_cells(board) == list(range(9))


@pytest.mark.parametrize("line", LINES)
@pytest.mark.parametrize("player", [X, O])
def test_every_line_wins_for_its_owner(line, player):
    cells = [EMPTY] * 9
    for idx in line:
        cells[idx] = player
    board = tuple(cells)
    assert evaluate(board) == Outcome.win(player)
    assert winning_line(board) == line


@pytest.mark.parametrize("line", LINES)
def test_mixed_line_does_not_win(line):
    cells = [EMPTY] * 9
    cells[line[0]] = X
    cells[line[1]] = X
    cells[line[2]] = O
    assert evaluate(tuple(cells)) == IN_PROGRESS


def test_evaluate_matches_line_rule_on_all_boards():
    for cells in itertools.product((EMPTY, X, O), repeat=9):
        uniform = [cells[a] for a, b, c in LINES if cells[a] and cells[a] == cells[b] == cells[c]]
        outcome = evaluate(cells)
        if uniform:
            assert outcome.kind == "win"
            assert outcome.winner in uniform
        elif all(cells):
            assert outcome == DRAW
        else:
            assert outcome == IN_PROGRESS


def test_full_board_without_line_is_draw():
    assert evaluate(board_from("XOXXOOOXX")) == DRAW


def test_apply_move_is_pure():
    board = new_board()
    after = apply_move(board, 4, X)
    assert board == new_board()
    assert after[4] == X
    assert empty_cells(after) == [0, 1, 2, 3, 5, 6, 7, 8]


@pytest.mark.parametrize("index", [-1, 9, 42, None, "4", 1.0, True])
def test_apply_move_rejects_bad_index(index):
    with pytest.raises(InvalidMove):
        apply_move(new_board(), index, X)


def test_apply_move_rejects_occupied_cell():
    board = apply_move(new_board(), 0, X)
    with pytest.raises(InvalidMove) as info:
        apply_move(board, 0, O)
    assert info.value.index == 0
    assert isinstance(info.value, ValueError)


def test_row_completion_wins_immediately():
    board = new_board()
    for idx, player in [(0, X), (3, O), (1, X), (4, O)]:
        board = apply_move(board, idx, player)
        assert evaluate(board) == IN_PROGRESS
    board = apply_move(board, 2, X)
    assert evaluate(board) == Outcome.win(X)
    assert str(evaluate(board)) == "win(X)"
