"""The well: a grid of cells that pieces fall into, line clearing and scoring."""

from __future__ import annotations

from enum import Enum

import pygame

CELL_WIDTH = 10
CELL_HEIGHT = 21
LINE_SCORE = 40

EMPTY_COLOR = (193, 196, 177)
MOVING_COLOR = (94, 91, 230)
OCCUPIED_COLOR = (139, 124, 152)
BACKGROUND_COLOR = (90, 90, 90)
LINE_COLOR = (0, 0, 0)

ORIGIN = (40, 10)

Position = tuple[int, int]


class CellState(Enum):
    """What a single cell of the well holds."""

    EMPTY = "E"
    OCCUPIED = "O"
    MOVING = "M"


_CELL_COLORS = {
    CellState.EMPTY: EMPTY_COLOR,
    CellState.MOVING: MOVING_COLOR,
    CellState.OCCUPIED: OCCUPIED_COLOR,
}


class Playfield:
    """A CELL_WIDTH x CELL_HEIGHT grid; row 0 is the hidden spawn row."""

    def __init__(self, cell_size: int) -> None:
        self.cell_size = cell_size
        self.origin = ORIGIN
        self.game_over = False
        self.score = 0
        self._cells = [self._empty_row() for _ in range(CELL_HEIGHT)]

    @staticmethod
    def _empty_row() -> list[CellState]:
        return [CellState.EMPTY] * CELL_WIDTH

    @staticmethod
    def in_bounds(pos: Position) -> bool:
        x, y = pos
        return 0 <= x < CELL_WIDTH and 0 <= y < CELL_HEIGHT

    def _check(self, pos: Position) -> tuple[int, int]:
        if not self.in_bounds(pos):
            raise IndexError(f"cell {pos!r} is outside the playfield")
        x, y = pos
        return int(x), int(y)

    def get_cell(self, pos: Position) -> CellState:
        x, y = self._check(pos)
        return self._cells[y][x]

    def set_cell(self, state: CellState, pos: Position) -> None:
        x, y = self._check(pos)
        self._cells[y][x] = state

    def check_lines(self) -> int:
        """Flag game over if the spawn row holds settled blocks, then clear full rows.

        Returns the number of rows cleared; each adds LINE_SCORE to the score.
        """
        if CellState.OCCUPIED in self._cells[0]:
            self.game_over = True

        cleared = 0
        for y in range(1, CELL_HEIGHT):
            if all(cell is CellState.OCCUPIED for cell in self._cells[y]):
                self.clear_line(y)
                self.score += LINE_SCORE
                cleared += 1
        return cleared

    def clear_line(self, y_index: int) -> None:
        """Remove row y_index, shifting every row above it down by one."""
        if not 0 <= y_index < CELL_HEIGHT:
            raise IndexError(f"row {y_index} is outside the playfield")
        self._cells[1 : y_index + 1] = self._cells[0:y_index]
        self._cells[0] = self._empty_row()

    def clear_moving(self) -> None:
        """Empty every moving cell below the spawn row."""
        for row in self._cells[1:]:
            for x, cell in enumerate(row):
                if cell is CellState.MOVING:
                    row[x] = CellState.EMPTY

    def reset_score(self) -> None:
        self.score = 0

    def draw(self, surface: pygame.Surface) -> None:
        """Paint the visible rows (all but row 0) onto the surface."""
        size = self.cell_size
        ox, oy = self.origin
        for y, row in enumerate(self._cells):
            if y == 0:
                continue
            for x, cell in enumerate(row):
                left = ox + size * x
                top = oy + size * y
                pygame.draw.rect(surface, _CELL_COLORS[cell], pygame.Rect(left, top, size, size))
                pygame.draw.line(surface, LINE_COLOR, (left, top + size), (left + size, top + size))
                pygame.draw.line(surface, LINE_COLOR, (left + size, top), (left + size, top + size))