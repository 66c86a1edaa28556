import copy

import pytest

from klondike.engine import MoveOutcome, activate_stock, attempt_move
from klondike.positions import STOCK, WASTE, Foundation, Tableau

from builders import card, cards, down, make_board, up


def test_ace_from_waste_to_empty_foundation():
    board = make_board(stock=["AS"])
    assert activate_stock(board).executed
    assert board.waste == [card("AS")]

    result = attempt_move(board, WASTE, Foundation(0))
    assert result.outcome is MoveOutcome.EXECUTED
    assert board.foundations[0] == [card("AS")]
    assert board.waste == []
    assert set(result.affected) == {WASTE, Foundation(0)}


def test_foundation_suit_mismatch_is_rejected():
    board = make_board(waste=["2D"], foundations=[["AH", "2H"]])
    result = attempt_move(board, WASTE, Foundation(0))
    assert result.outcome is MoveOutcome.REJECTED
    assert board.foundations[0] == cards("AH", "2H")
    assert board.waste == [card("2D")]


def test_empty_foundation_needs_an_ace():
    board = make_board(waste=["2H"])
    assert attempt_move(board, WASTE, Foundation(1)).outcome is MoveOutcome.REJECTED


def test_empty_tableau_takes_only_kings():
    board = make_board(waste=["KC", "5C"])
    assert attempt_move(board, WASTE, Tableau(3, 0)).outcome is MoveOutcome.REJECTED
    assert board.tableaus[3] == []

    board.waste.pop()
    result = attempt_move(board, WASTE, Tableau(3, 0))
    assert result.outcome is MoveOutcome.EXECUTED
    assert [(p.card, p.visible) for p in board.tableaus[3]] == [(card("KC"), True)]


def test_recycle_reverses_waste_into_stock():
    board = make_board(waste=["AH", "2H", "3H"])
    result = activate_stock(board)
    assert result.executed
    assert board.waste == []
    assert board.stock == cards("3H", "2H", "AH")
    # draws replay the original draw order
    drawn = []
    while board.stock:
        activate_stock(board)
        drawn.append(board.waste[-1])
    assert drawn == cards("AH", "2H", "3H")


def test_recycle_can_be_refused():
    board = make_board(waste=["AH"])
    assert activate_stock(board, allow_recycle=False).outcome is MoveOutcome.REJECTED
    assert board.waste == [card("AH")]


def test_activate_with_both_piles_empty_is_a_noop():
    board = make_board()
    result = activate_stock(board)
    assert result.executed
    assert result.affected == ()


def test_same_position_is_a_noop():
    board = make_board(waste=["5C"], tableaus=[up("9D")])
    before = copy.deepcopy(board)
    for pos in (WASTE, Tableau(0, 0), Foundation(2)):
        result = attempt_move(board, pos, pos)
        assert result.outcome is MoveOutcome.EXECUTED
        assert result.affected == ()
    assert board == before


@pytest.mark.parametrize("a, b", [(0, 1), (2, 0), (1, 5), (3, 3)])
def test_same_pile_different_depth_is_a_noop(a, b):
    board = make_board(tableaus=[down("QS") + up("JH", "10S", "9H")])
    before = copy.deepcopy(board)
    result = attempt_move(board, Tableau(0, a), Tableau(0, b))
    assert result.outcome is MoveOutcome.EXECUTED
    assert board == before


def test_run_moves_in_order_and_reveals_source():
    board = make_board(
        tableaus=[
            down("2C", "QS") + up("9H", "8S", "7D"),
            up("10C"),
        ]
    )
    result = attempt_move(board, Tableau(0, 2), Tableau(1, 0))
    assert result.outcome is MoveOutcome.EXECUTED
    assert [p.card for p in board.tableaus[1]] == cards("10C", "9H", "8S", "7D")
    assert all(p.visible for p in board.tableaus[1])
    assert [p.card for p in board.tableaus[0]] == cards("2C", "QS")
    assert board.tableaus[0][-1].visible
    assert not board.tableaus[0][0].visible
    assert set(result.affected) == {Tableau(0, 0), Tableau(1, 0)}


@pytest.mark.parametrize("depth", [0, 1, 2])
def test_run_integrity_moves_depth_plus_one_cards(depth):
    run = ["KD", "QC", "JH"]
    board = make_board(tableaus=[up(*run), [], up("AS")])
    # pick a destination that accepts the run's root
    root = run[len(run) - 1 - depth]
    board.tableaus[1] = [] if root == "KD" else up({"QC": "KH", "JH": "QS"}[root])
    before = len(board.tableaus[1])
    assert attempt_move(board, Tableau(0, depth), Tableau(1, 0)).executed
    assert len(board.tableaus[1]) - before == depth + 1
    assert len(board.tableaus[0]) == len(run) - depth - 1
    assert [p.card for p in board.tableaus[1][before:]] == cards(*run[len(run) - 1 - depth:])


def test_tableau_to_foundation_reveals_new_top():
    board = make_board(tableaus=[down("9D") + up("AS")])
    result = attempt_move(board, Tableau(0, 0), Foundation(3))
    assert result.executed
    assert board.foundations[3] == [card("AS")]
    assert board.tableaus[0][-1].visible


def test_run_onto_foundation_is_rejected():
    board = make_board(foundations=[["AH"]], tableaus=[up("3S", "2H")])
    result = attempt_move(board, Tableau(0, 1), Foundation(0))
    assert result.outcome is MoveOutcome.REJECTED
    assert len(board.tableaus[0]) == 2


def test_waste_is_never_a_target():
    board = make_board(tableaus=[up("5H")])
    assert attempt_move(board, Tableau(0, 0), WASTE).outcome is MoveOutcome.REJECTED


def test_stock_target_is_invalid():
    board = make_board(waste=["5H"])
    assert attempt_move(board, WASTE, STOCK).outcome is MoveOutcome.INVALID
    assert board.waste == [card("5H")]


def test_stock_feeding_a_tableau_is_invalid():
    board = make_board(stock=["KH"])
    assert attempt_move(board, STOCK, Tableau(0, 0)).outcome is MoveOutcome.INVALID
    assert board.stock == [card("KH")]


def test_empty_source_is_invalid():
    board = make_board(tableaus=[[], up("KS")])
    assert attempt_move(board, WASTE, Tableau(1, 0)).outcome is MoveOutcome.INVALID
    assert attempt_move(board, Tableau(0, 0), Tableau(1, 0)).outcome is MoveOutcome.INVALID


def test_face_down_source_is_invalid():
    board = make_board(tableaus=[down("KS") + up("QH"), []])
    assert attempt_move(board, Tableau(0, 1), Tableau(1, 0)).outcome is MoveOutcome.INVALID
    assert len(board.tableaus[0]) == 2


def test_foundation_card_back_to_tableau():
    board = make_board(foundations=[["AS", "2S"]], tableaus=[up("3H")])
    assert attempt_move(board, Foundation(0), Tableau(0, 0)).executed
    assert board.foundations[0] == [card("AS")]
    assert board.tableaus[0][-1].card == card("2S")


def test_tableau_color_rule():
    board = make_board(waste=["9D"], tableaus=[up("10H"), up("10C")])
    assert attempt_move(board, WASTE, Tableau(0, 0)).outcome is MoveOutcome.REJECTED
    assert attempt_move(board, WASTE, Tableau(1, 0)).executed
