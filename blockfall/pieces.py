"""Falling tetromino pieces and their movement rules."""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from .playfield import CELL_HEIGHT, CELL_WIDTH, CellState, Playfield, Position

CLOCKWISE = (1, -1)
COUNTERCLOCKWISE = (-1, 1)

WALL_KICKS = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


class PieceType(Enum):
    """The seven piece shapes, in the order the randomiser draws them."""

    I = "I"  # noqa: E741
    J = "J"
    L = "L"
    O = "O"  # noqa: E741
    S = "S"
    T = "T"
    Z = "Z"


class Piece:
    """Four blocks moving together, rotating about one of them."""

    def __init__(self, blocks: Iterable[Position], pivot_block: int) -> None:
        self.blocks: list[Position] = [(int(x), int(y)) for x, y in blocks]
        if len(self.blocks) != 4:
            raise ValueError("a piece has exactly four blocks")
        if not 0 <= pivot_block < 4:
            raise ValueError("pivot block must index one of the four blocks")
        self.pivot_block = pivot_block
        self.has_been_placed = False
        self.touched_down = False
        self.touched_time = 0.0

    def _redraw(self, playfield: Playfield, blocks: list[Position]) -> None:
        playfield.clear_moving()
        self.blocks = blocks
        for pos in blocks:
            playfield.set_cell(CellState.MOVING, pos)

    def is_colliding(self, playfield: Playfield, direction: Position) -> bool:
        dx, dy = direction
        for x, y in self.blocks:
            nx, ny = x + dx, y + dy
            if not 0 <= nx < CELL_WIDTH or not 0 <= ny < CELL_HEIGHT:
                return True
            if playfield.get_cell((nx, ny)) is CellState.OCCUPIED:
                return True
        return False

    def move(self, direction: Position, playfield: Playfield) -> bool:
        """Shift sideways by direction's x if the way is clear; return whether it moved."""
        if self.is_colliding(playfield, direction):
            return False
        dx = direction[0]
        self._redraw(playfield, [(x + dx, y) for x, y in self.blocks])
        return True

    def rotate(self, playfield: Playfield, direction: Position = CLOCKWISE) -> bool:
        """Turn a quarter about the pivot, trying each wall kick in turn."""
        px, py = self.blocks[self.pivot_block]
        sx, sy = direction
        turned = [((y - py) * sy, (x - px) * sx) for x, y in self.blocks]

        for kx, ky in WALL_KICKS:
            candidate = [(px + rx + kx, py + ry + ky) for rx, ry in turned]
            if all(
                playfield.in_bounds(pos) and playfield.get_cell(pos) is not CellState.OCCUPIED
                for pos in candidate
            ):
                self._redraw(playfield, candidate)
                return True
        return False

    def fall(self, playfield: Playfield) -> bool:
        """Drop one row; on contact mark the piece as touched down instead."""
        below = [(x, y + 1) for x, y in self.blocks]
        blocked = any(
            y >= CELL_HEIGHT or playfield.get_cell((x, y)) is CellState.OCCUPIED for x, y in below
        )
        if blocked:
            self.touched_down = True
            return False
        self.touched_down = False
        self._redraw(playfield, below)
        return True

    def place(self, playfield: Playfield) -> None:
        """Settle the piece into the playfield as occupied cells."""
        self.touched_time = 0.0
        for pos in self.blocks:
            playfield.set_cell(CellState.OCCUPIED, pos)
        self.has_been_placed = True


class PieceO(Piece):
    """The square piece, which never rotates."""

    def __init__(self) -> None:
        super().__init__(_SPAWNS[PieceType.O][0], _SPAWNS[PieceType.O][1])

    def rotate(self, playfield: Playfield, direction: Position = CLOCKWISE) -> bool:
        return False


_SPAWNS: dict[PieceType, tuple[tuple[Position, ...], int]] = {
    PieceType.I: (((3, 0), (4, 0), (5, 0), (6, 0)), 1),
    PieceType.J: (((3, 0), (3, 1), (4, 1), (5, 1)), 2),
    PieceType.L: (((3, 1), (4, 1), (5, 1), (5, 0)), 1),
    PieceType.O: (((4, 0), (5, 0), (4, 1), (5, 1)), 1),
    PieceType.S: (((3, 1), (4, 1), (4, 0), (5, 0)), 1),
    PieceType.T: (((3, 1), (4, 1), (4, 0), (5, 1)), 1),
    PieceType.Z: (((3, 0), (4, 0), (4, 1), (5, 1)), 2),
}


def create_piece(piece_type: PieceType) -> Piece:
    """Build a piece of the given type at its spawn position."""
    if not isinstance(piece_type, PieceType):
        raise ValueError(f"unknown piece type: {piece_type!r}")
    if piece_type is PieceType.O:
        return PieceO()
    blocks, pivot = _SPAWNS[piece_type]
    return Piece(blocks, pivot)