import pytest

from klondike.errors import ContractViolation
from klondike.positions import (
    LINEAR_ORDER,
    STOCK,
    WASTE,
    Foundation,
    Tableau,
    head,
    is_last,
    next_position,
    pop,
    prev_position,
    push,
    top_card,
)

from builders import card, down, make_board, up


def test_linear_order():
    assert LINEAR_ORDER[0] == STOCK
    assert LINEAR_ORDER[1] == WASTE
    assert LINEAR_ORDER[2:6] == tuple(Foundation(n) for n in range(4))
    assert LINEAR_ORDER[6:] == tuple(Tableau(n, 0) for n in range(7))


def test_next_and_prev_walk_the_order():
    pos = STOCK
    walked = [pos]
    while not is_last(pos):
        pos = next_position(pos)
        walked.append(pos)
    assert tuple(walked) == LINEAR_ORDER
    for later, earlier in zip(walked[1:], walked[:-1]):
        assert prev_position(later) == earlier


def test_stepping_from_depth_lands_on_head():
    assert next_position(Tableau(2, 4)) == Tableau(3, 0)
    assert prev_position(Tableau(0, 3)) == Foundation(3)


def test_prev_of_stock_is_undefined():
    with pytest.raises(ContractViolation):
        prev_position(STOCK)


def test_next_of_last_tableau_is_undefined():
    with pytest.raises(ContractViolation):
        next_position(Tableau(6, 2))


@pytest.mark.parametrize("args", [(7, 0), (-1, 0), (0, -1)])
def test_tableau_bounds(args):
    with pytest.raises(ContractViolation):
        Tableau(*args)


def test_foundation_bounds():
    with pytest.raises(ContractViolation):
        Foundation(4)


def test_positions_are_hashable_values():
    assert Tableau(3, 1) == Tableau(3, 1)
    assert len({Foundation(1), Foundation(1), STOCK}) == 2
    assert head(Tableau(3, 5)) == Tableau(3, 0)


def test_top_card_addresses_depth():
    board = make_board(tableaus=[down("9D") + up("8S", "7H")])
    assert top_card(board, Tableau(0, 0)) == card("7H")
    assert top_card(board, Tableau(0, 1)) == card("8S")
    assert top_card(board, Tableau(0, 2)) == card("9D")
    assert top_card(board, Tableau(0, 3)) is None
    assert top_card(board, Tableau(1, 0)) is None


def test_top_card_of_flat_piles():
    board = make_board(stock=["2C", "3C"], waste=["4D"], foundations=[[], ["AH"]])
    assert top_card(board, STOCK) == card("3C")
    assert top_card(board, WASTE) == card("4D")
    assert top_card(board, Foundation(0)) is None
    assert top_card(board, Foundation(1)) == card("AH")


def test_pop_top_of_each_pile():
    board = make_board(stock=["2C"], waste=["4D"], foundations=[["AH"]], tableaus=[up("KS")])
    assert pop(board, STOCK) == card("2C")
    assert pop(board, WASTE) == card("4D")
    assert pop(board, Foundation(0)) == card("AH")
    assert pop(board, Tableau(0, 0)) == card("KS")
    assert pop(board, STOCK) is None
    assert pop(board, Tableau(0, 0)) is None


def test_pop_below_tableau_top_fails():
    board = make_board(tableaus=[up("9D", "8S")])
    with pytest.raises(ContractViolation):
        pop(board, Tableau(0, 1))
    assert len(board.tableaus[0]) == 2


@pytest.mark.parametrize("target", [STOCK, WASTE])
def test_push_to_stock_or_waste_fails(target):
    board = make_board()
    with pytest.raises(ContractViolation):
        push(board, target, card("AS"))


def test_push_to_tableau_is_face_up():
    board = make_board()
    push(board, Tableau(4, 0), card("KD"))
    assert board.tableaus[4][-1].card == card("KD")
    assert board.tableaus[4][-1].visible


def test_push_to_foundation():
    board = make_board()
    push(board, Foundation(2), card("AC"))
    assert board.foundations[2] == [card("AC")]
