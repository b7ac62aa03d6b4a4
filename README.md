# blockfall

A small falling-block puzzle game built on pygame. Pieces drop into a well
10 cells wide. Filling a row clears it and scores 40 points. The game ends
once a settled block reaches the hidden top row.

## Installing

```
pip install .
```

## Playing

```
blockfall
```

To get the same sequence of pieces every time, pass a seed to the piece
randomiser:

```
blockfall --seed 42
```

A 400x800 window opens. The game starts on the game-over screen, which shows
the best score of the session. Press Enter to begin a round. While a round is
running, the window shows the well, the next five pieces, the hold slot and
the current score.

| Key              | Action                                                      |
|------------------|-------------------------------------------------------------|
| Left / Right     | Move the piece sideways. Holding the key speeds up the frame rate |
| Down             | Drop faster                                                 |
| Up or X          | Rotate clockwise                                            |
| Z                | Rotate anticlockwise                                        |
| C                | Hold the piece, or swap it with the held one (once per piece) |
| Space            | Hard drop. The piece locks on the next frame                |
| Enter            | Start a new round from the game-over screen                 |
| Escape           | Quit                                                        |

A piece that lands stays movable for up to three seconds before it locks.
When a plain rotation would collide, the game tries wall kicks: it shifts the
piece one cell left, right, up or down. The square piece never rotates. Pieces
come in shuffled bags that each hold all seven shapes once.

## Using the game logic in code

The game logic also works without a window:

```python
import random

from blockfall.pieces import PieceType, create_piece
from blockfall.playfield import CellState, Playfield
from blockfall.queue_manager import Controls, QueueManager

field = Playfield(20)
queue = QueueManager(field, random.Random(1))

queue.update(0.1, Controls(right=True))  # one frame of input
queue.hold_piece()
print(queue.upcoming)                    # the next five PieceType values
cleared = field.check_lines()            # rows cleared; field.score goes up by 40 each

piece = create_piece(PieceType.T)
piece.fall(field)
```

- `blockfall.playfield.Playfield` is the grid. It provides `get_cell`,
  `set_cell`, `check_lines`, `clear_line`, `clear_moving`, `reset_score` and
  `draw`. It also holds `score` and `game_over`.
- `blockfall.pieces.Piece` supports `move`, `rotate`, `fall`, `is_colliding`
  and `place`. `create_piece` builds any `PieceType` at its spawn position.
- `blockfall.queue_manager.QueueManager` handles the current piece, the queue,
  the hold slot and the fall and lock timers. `Controls` describes one frame
  of input.
- `blockfall.game.GameManager` runs a whole game with `update(dt, controls)`,
  `restart()` and `draw(surface, font)`. It keeps `best_score` across rounds.

## What it does not do

Scores are not saved. The best score lasts only until the window is closed.
There is no ghost piece, no levels or gravity increase, and no sound.

## Running the tests

```
pip install .[test]
pytest
```