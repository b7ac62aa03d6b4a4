import pytest

from blockfall.pieces import (
    CLOCKWISE,
    COUNTERCLOCKWISE,
    Piece,
    PieceO,
    PieceType,
    create_piece,
)
from blockfall.playfield import CELL_HEIGHT, CELL_WIDTH, CellState, Playfield


SPAWNS = {
    PieceType.I: [(3, 0), (4, 0), (5, 0), (6, 0)],
    PieceType.J: [(3, 0), (3, 1), (4, 1), (5, 1)],
    PieceType.L: [(3, 1), (4, 1), (5, 1), (5, 0)],
    PieceType.O: [(4, 0), (5, 0), (4, 1), (5, 1)],
    PieceType.S: [(3, 1), (4, 1), (4, 0), (5, 0)],
    PieceType.T: [(3, 1), (4, 1), (4, 0), (5, 1)],
    PieceType.Z: [(3, 0), (4, 0), (4, 1), (5, 1)],
}


def _moving_cells(field):
    return {
        (x, y)
        for x in range(CELL_WIDTH)
        for y in range(CELL_HEIGHT)
        if field.get_cell((x, y)) is CellState.MOVING
    }


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_spawn_positions(piece_type):
    piece = create_piece(piece_type)
    assert piece.blocks == SPAWNS[piece_type]
    assert piece.has_been_placed is False
    assert piece.touched_down is False


def test_piece_type_order():
    letters = ["I", "J", "L", "O", "S", "T", "Z"]
    types = [PieceType(letter) for letter in letters]
    assert types == list(PieceType)
    spawned = [create_piece(piece_type).blocks for piece_type in types]
    assert spawned == [SPAWNS[piece_type] for piece_type in types]


def test_create_piece_rejects_unknown():
    with pytest.raises(ValueError):
        create_piece("Q")


def test_piece_needs_four_blocks():
    with pytest.raises(ValueError):
        Piece([(0, 0), (1, 0)], 0)


def test_fall_moves_down_one_row():
    field = Playfield(20)
    piece = create_piece(PieceType.T)
    before = list(piece.blocks)
    assert piece.fall(field) is True
    assert piece.blocks == [(x, y + 1) for x, y in before]
    assert _moving_cells(field) == set(piece.blocks)
    assert piece.touched_down is False


def test_fall_stops_at_bottom():
    field = Playfield(20)
    piece = create_piece(PieceType.I)
    while piece.fall(field):
        pass
    assert piece.touched_down is True
    assert max(y for _, y in piece.blocks) == CELL_HEIGHT - 1


def test_fall_stops_on_occupied_cell():
    field = Playfield(20)
    field.set_cell(CellState.OCCUPIED, (4, 5))
    piece = create_piece(PieceType.I)
    while piece.fall(field):
        pass
    assert piece.touched_down is True
    assert all(y == 4 for _, y in piece.blocks)


def test_move_right_and_left_round_trip():
    field = Playfield(20)
    piece = create_piece(PieceType.T)
    piece.fall(field)
    start = list(piece.blocks)
    assert piece.move((1, 0), field) is True
    assert piece.blocks == [(x + 1, y) for x, y in start]
    assert piece.move((-1, 0), field) is True
    assert piece.blocks == start
    assert _moving_cells(field) == set(start)


def test_move_blocked_by_wall():
    field = Playfield(20)
    piece = create_piece(PieceType.I)
    piece.fall(field)
    while piece.move((-1, 0), field):
        pass
    assert min(x for x, _ in piece.blocks) == 0
    assert piece.is_colliding(field, (-1, 0)) is True
    before = list(piece.blocks)
    assert piece.move((-1, 0), field) is False
    assert piece.blocks == before


def test_move_blocked_by_occupied_cell():
    field = Playfield(20)
    piece = create_piece(PieceType.I)
    piece.fall(field)
    x_max = max(x for x, _ in piece.blocks)
    field.set_cell(CellState.OCCUPIED, (x_max + 1, 1))
    assert piece.is_colliding(field, (1, 0)) is True
    assert piece.is_colliding(field, (-1, 0)) is False


def test_rotation_inverse():
    field = Playfield(20)
    piece = create_piece(PieceType.T)
    for _ in range(3):
        piece.fall(field)
    start = list(piece.blocks)
    assert piece.rotate(field, CLOCKWISE) is True
    assert piece.blocks != start
    assert piece.rotate(field, COUNTERCLOCKWISE) is True
    assert piece.blocks == start


@pytest.mark.parametrize("piece_type", [PieceType.J, PieceType.L, PieceType.S, PieceType.T, PieceType.Z])
def test_four_rotations_are_identity(piece_type):
    field = Playfield(20)
    piece = create_piece(piece_type)
    for _ in range(5):
        piece.fall(field)
    start = list(piece.blocks)
    pivot = piece.blocks[piece.pivot_block]
    for _ in range(4):
        assert piece.rotate(field) is True
        assert piece.blocks[piece.pivot_block] == pivot
    assert piece.blocks == start
    assert _moving_cells(field) == set(start)


def test_rotation_kicks_off_the_ceiling():
    field = Playfield(20)
    piece = create_piece(PieceType.I)
    assert piece.rotate(field, CLOCKWISE) is True
    assert set(piece.blocks) == {(4, 0), (4, 1), (4, 2), (4, 3)}


def test_rotation_fails_when_every_kick_is_blocked():
    field = Playfield(20)
    for x in range(CELL_WIDTH):
        for y in range(CELL_HEIGHT):
            field.set_cell(CellState.OCCUPIED, (x, y))
    piece = create_piece(PieceType.T)
    for pos in piece.blocks:
        field.set_cell(CellState.EMPTY, pos)
    before = list(piece.blocks)
    assert piece.rotate(field) is False
    assert piece.blocks == before


def test_o_piece_does_not_rotate():
    field = Playfield(20)
    piece = PieceO()
    piece.fall(field)
    before = list(piece.blocks)
    assert piece.rotate(field, CLOCKWISE) is False
    assert piece.rotate(field, COUNTERCLOCKWISE) is False
    assert piece.blocks == before
    assert isinstance(create_piece(PieceType.O), PieceO)


def test_place_marks_cells_occupied():
    field = Playfield(20)
    piece = create_piece(PieceType.Z)
    while piece.fall(field):
        pass
    piece.place(field)
    assert piece.has_been_placed is True
    assert all(field.get_cell(pos) is CellState.OCCUPIED for pos in piece.blocks)
    assert _moving_cells(field) == set()