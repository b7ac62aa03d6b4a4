"""The piece queue: spawning, holding, timers and player input for the falling piece."""

from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass

import pygame

from .pieces import CLOCKWISE, COUNTERCLOCKWISE, Piece, PieceType, create_piece
from .playfield import EMPTY_COLOR, LINE_COLOR, Playfield

QUEUE_PREVIEW = 5
BOX_SIZE = 80
TEXT_COLOR = (0, 0, 0)

FALL_INTERVAL = 0.5
FAST_FALL_INTERVAL = 0.1
LOCK_DELAY = 3.0
KEY_RAMP_LIMIT = 5.0

QUEUE_ORIGIN = (280, 30)
QUEUE_LABEL_POS = (280, 15)
HOLD_ORIGIN = (50, 550)
HOLD_LABEL_POS = (50, 530)


@dataclass
class Controls:
    """The player's input for one frame: keys held down, pressed or released."""

    left: bool = False
    right: bool = False
    left_released: bool = False
    right_released: bool = False
    down: bool = False
    rotate_cw: bool = False
    rotate_ccw: bool = False
    hold: bool = False
    hard_drop: bool = False
    restart: bool = False


class QueueManager:
    """Owns the current piece, the upcoming queue and the held piece."""

    def __init__(self, playfield: Playfield, rng: random.Random | None = None) -> None:
        self.playfield = playfield
        self._rng = rng if rng is not None else random.Random()
        self.hold_type: PieceType | None = None
        self.has_switched = False
        self.falling_clock = 0.0
        self.fall_interval = FALL_INTERVAL
        self.key_pressed_time = 0.0
        self.lock_delay = LOCK_DELAY
        self.speed_factor = 1
        self.piece_queue: deque[PieceType] = self.generate_piece_queue()
        self.next_piece_queue: deque[PieceType] = deque()
        self.current_piece: Piece = self.spawn_piece(self.piece_queue[0])

    @property
    def upcoming(self) -> list[PieceType]:
        """The piece types shown in the preview, nearest first."""
        return list(self.piece_queue)[1 : 1 + QUEUE_PREVIEW]

    def generate_piece_queue(self) -> deque[PieceType]:
        """A bag holding each of the seven piece types once, in random order."""
        kinds = list(PieceType)
        return deque(self._rng.sample(kinds, len(kinds)))

    def spawn_piece(self, piece_type: PieceType) -> Piece:
        """Replace the current piece with a fresh one of the given type."""
        self.current_piece = create_piece(piece_type)
        return self.current_piece

    def pop_piece(self) -> None:
        """Advance the queue by one and spawn its new front piece."""
        self.piece_queue.popleft()
        if not self.next_piece_queue:
            self.next_piece_queue = self.generate_piece_queue()
        self.piece_queue.append(self.next_piece_queue.popleft())
        self.spawn_piece(self.piece_queue[0])
        self.has_switched = False

    def hold_piece(self) -> None:
        """Swap the current piece into the hold slot, once per piece."""
        if self.has_switched:
            return
        front = self.piece_queue[0]
        if self.hold_type is None:
            self.hold_type = front
            self.spawn_piece(self.piece_queue[1])
        else:
            self.spawn_piece(self.hold_type)
            self.hold_type = front
        self.has_switched = True

    def _ramp_key(self, dt: float) -> None:
        self.key_pressed_time += dt
        if self.key_pressed_time < KEY_RAMP_LIMIT:
            self.speed_factor = int(1.0 + self.key_pressed_time)

    def update(self, dt: float, controls: Controls) -> None:
        """Advance timers by dt seconds and apply one frame of input."""
        self.speed_factor = 1
        piece = self.current_piece
        if piece.has_been_placed:
            self.pop_piece()
            return

        self.falling_clock += dt
        if self.falling_clock > self.fall_interval:
            self.falling_clock = 0.0
            piece.fall(self.playfield)

        if piece.touched_down:
            piece.touched_time += dt
            if piece.touched_time >= self.lock_delay:
                piece.place(self.playfield)
                return

        for held, released, step in (
            (controls.left, controls.left_released, -1),
            (controls.right, controls.right_released, 1),
        ):
            if held:
                self._ramp_key(dt)
                piece.move((step, 0), self.playfield)
            elif released:
                self.key_pressed_time = 0.0

        self.fall_interval = FAST_FALL_INTERVAL if controls.down else FALL_INTERVAL

        if controls.rotate_cw:
            piece.rotate(self.playfield, CLOCKWISE)
        if controls.rotate_ccw:
            piece.rotate(self.playfield, COUNTERCLOCKWISE)

        if controls.hold:
            self.hold_piece()

        if controls.hard_drop:
            piece = self.current_piece
            while not piece.touched_down:
                piece.fall(self.playfield)
            piece.touched_time = self.lock_delay

    @staticmethod
    def _draw_box(surface: pygame.Surface, left: int, top: int) -> None:
        pygame.draw.rect(surface, EMPTY_COLOR, pygame.Rect(left, top, BOX_SIZE, BOX_SIZE))
        bottom = top + BOX_SIZE
        right = left + BOX_SIZE
        pygame.draw.line(surface, LINE_COLOR, (left, bottom), (right, bottom))
        pygame.draw.line(surface, LINE_COLOR, (right, top), (right, bottom))

    def draw_queue(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Draw the preview boxes for the upcoming pieces."""
        surface.blit(font.render("NEXT: ", True, TEXT_COLOR), QUEUE_LABEL_POS)
        left, first_top = QUEUE_ORIGIN
        for i, kind in enumerate(self.upcoming):
            top = first_top + BOX_SIZE * i
            self._draw_box(surface, left, top)
            surface.blit(font.render(kind.value, True, TEXT_COLOR), (left, top))

    def draw_hold(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Draw the hold box and the letter of the held piece, or '?'."""
        left, top = HOLD_ORIGIN
        pygame.draw.rect(surface, EMPTY_COLOR, pygame.Rect(left, top, BOX_SIZE, BOX_SIZE))
        surface.blit(font.render("HOLD:", True, TEXT_COLOR), HOLD_LABEL_POS)
        letter = self.hold_type.value if self.hold_type is not None else "?"
        surface.blit(font.render(letter, True, TEXT_COLOR), (left, top))