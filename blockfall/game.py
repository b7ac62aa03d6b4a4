"""Game state machine and the window loop that runs it."""

from __future__ import annotations

import argparse
import random

import pygame

from .playfield import BACKGROUND_COLOR, Playfield
from .queue_manager import TEXT_COLOR, Controls, QueueManager

BASE_FPS = 10
CELL_SIZE = 20
WINDOW_SIZE = (400, 800)
SCORE_POS = (250, 500)


class GameManager:
    """Switches between play and the game-over screen and tracks the best score."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()
        self.game_over = True
        self.best_score = 0
        self.target_fps = BASE_FPS
        self.playfield = Playfield(CELL_SIZE)
        self.queue_manager = QueueManager(self.playfield, self._rng)

    @property
    def score(self) -> int:
        return self.playfield.score

    def restart(self) -> None:
        """Start a new round on a fresh playfield."""
        self.playfield = Playfield(CELL_SIZE)
        self.queue_manager = QueueManager(self.playfield, self._rng)
        self.game_over = False

    def update(self, dt: float, controls: Controls) -> None:
        """Advance the game by one frame of dt seconds."""
        if self.game_over:
            if controls.restart:
                self.restart()
            return

        if self.playfield.game_over:
            self.playfield.reset_score()
            self.game_over = True
            return

        self.target_fps = BASE_FPS
        self.queue_manager.update(dt, controls)
        self.target_fps = BASE_FPS * self.queue_manager.speed_factor
        self.playfield.check_lines()
        self.best_score = max(self.best_score, self.playfield.score)

    def draw(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        """Draw either the running game or the game-over screen."""
        surface.fill(BACKGROUND_COLOR)
        if self.game_over:
            surface.blit(font.render("GAME OVER", True, TEXT_COLOR), (100, 400))
            best = f"Best Score: {self.best_score}"
            surface.blit(font.render(best, True, TEXT_COLOR), (100, 440))
            surface.blit(font.render("Press enter to try again", True, TEXT_COLOR), (100, 480))
            return
        self.playfield.draw(surface)
        self.queue_manager.draw_queue(surface, font)
        self.queue_manager.draw_hold(surface, font)
        self.draw_score(surface, font)

    def draw_score(self, surface: pygame.Surface, font: pygame.font.Font) -> None:
        surface.blit(font.render(f"SCORE: {self.score}", True, TEXT_COLOR), SCORE_POS)


def _read_controls() -> Controls | None:
    """Collect this frame's input; None when the window should close."""
    pressed: set[int] = set()
    released: set[int] = set()
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return None
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return None
            pressed.add(event.key)
        elif event.type == pygame.KEYUP:
            released.add(event.key)
    held = pygame.key.get_pressed()
    return Controls(
        left=bool(held[pygame.K_LEFT]),
        right=bool(held[pygame.K_RIGHT]),
        left_released=pygame.K_LEFT in released,
        right_released=pygame.K_RIGHT in released,
        down=bool(held[pygame.K_DOWN]),
        rotate_cw=pygame.K_UP in pressed or pygame.K_x in pressed,
        rotate_ccw=pygame.K_z in pressed,
        hold=pygame.K_c in pressed,
        hard_drop=pygame.K_SPACE in pressed,
        restart=pygame.K_RETURN in pressed,
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="blockfall", description="A falling-block puzzle game.")
    parser.add_argument("--seed", type=int, default=None, help="seed for the piece randomiser")
    args = parser.parse_args(argv)

    pygame.init()
    try:
        screen = pygame.display.set_mode(WINDOW_SIZE)
        pygame.display.set_caption("Blockfall")
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        game = GameManager(random.Random(args.seed))
        while True:
            dt = clock.tick(game.target_fps) / 1000.0
            controls = _read_controls()
            if controls is None:
                break
            game.update(dt, controls)
            game.draw(screen, font)
            pygame.display.flip()
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())