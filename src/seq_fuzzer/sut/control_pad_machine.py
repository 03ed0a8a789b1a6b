"""Deterministic control-pad target used for demonstrations and tests.

The machine moves a cursor around a small grid in response to control-pad
buttons and watches for a secret button combination. Every distinct branch
of its step function sets one coverage bit, and the final state snapshot
packs the cursor position, combination progress and unlock flag.

Branch layout::

    0                 idle (no button pressed)
    1 / 2             UP blocked by wall / moved
    3 / 4             DOWN blocked by wall / moved
    5 / 6             LEFT blocked by wall / moved
    7 / 8             RIGHT blocked by wall / moved
    9                 cursor reached the far corner
    10 .. 10+k-1      combination progress reached 1 .. k
    10+k              combination broken after partial progress
    10+k+1            far corner reached while unlocked
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

import numpy as np
from loguru import logger

from seq_fuzzer.fuzzing.action_sequence import ActionAlphabet, Sequence
from seq_fuzzer.fuzzing.coverage_set import CoverageSet
from seq_fuzzer.sut.execution_result import ExecutionResult


class Button(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"


DEFAULT_SECRET = (Button.RIGHT, Button.RIGHT, Button.DOWN, Button.DOWN, Button.LEFT)

_MOVES = {
    Button.UP: (0, -1, 1),
    Button.DOWN: (0, 1, 3),
    Button.LEFT: (-1, 0, 5),
    Button.RIGHT: (1, 0, 7),
}

IDLE_BRANCH = 0
CORNER_BRANCH = 9
COMBO_BASE = 10


def control_pad_alphabet(include_noop: bool = True) -> ActionAlphabet:
    """Alphabet of the four buttons, optionally with "no button pressed"."""
    return ActionAlphabet(list(Button), include_noop=include_noop)


class ControlPadMachine:
    """Cursor-on-a-grid target with a hidden unlock combination."""

    def __init__(
        self,
        width: int = 4,
        height: int = 4,
        secret: tuple[Button, ...] = DEFAULT_SECRET,
    ):
        """Initialize the machine.

        Args:
            width: Number of grid columns (>= 1, <= 255)
            height: Number of grid rows (>= 1, <= 255)
            secret: Button combination that unlocks the machine
        """
        if not 1 <= width <= 255 or not 1 <= height <= 255:
            raise ValueError("grid dimensions must be between 1 and 255")
        if not secret or len(secret) > 255:
            raise ValueError("secret must hold between 1 and 255 buttons")
        if any(not isinstance(b, Button) for b in secret):
            raise ValueError("secret must consist of control-pad buttons")

        self.name = f"control-pad-{width}x{height}"
        self.width = width
        self.height = height
        self.secret = tuple(secret)
        self.coverage_width = COMBO_BASE + len(self.secret) + 2

    @property
    def broken_branch(self) -> int:
        return COMBO_BASE + len(self.secret)

    @property
    def treasure_branch(self) -> int:
        return COMBO_BASE + len(self.secret) + 1

    def run(self, sequence: Sequence) -> ExecutionResult:
        """Execute ``sequence`` from the initial state."""
        hits = np.zeros(self.coverage_width, dtype=np.bool_)
        x = y = 0
        progress = 0
        unlocked = False

        for action in sequence:
            if action is None:
                hits[IDLE_BRANCH] = True
                continue

            button = Button(action)
            dx, dy, branch = _MOVES[button]
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.width and 0 <= ny < self.height:
                x, y = nx, ny
                hits[branch + 1] = True
            else:
                hits[branch] = True

            if not unlocked:
                progress = self._advance_combo(button, progress, hits)
                unlocked = progress == len(self.secret)

            if (x, y) == (self.width - 1, self.height - 1):
                hits[CORNER_BRANCH] = True
                if unlocked:
                    hits[self.treasure_branch] = True

        state = bytes([x, y, progress, int(unlocked)])
        logger.debug(f"{self.name} ran {sequence}: {self.describe_state(state)}")
        return ExecutionResult(coverage=CoverageSet(hits), state=state)

    def _advance_combo(self, button: Button, progress: int, hits: np.ndarray) -> int:
        if button == self.secret[progress]:
            progress += 1
            hits[COMBO_BASE + progress - 1] = True
            return progress
        if progress > 0:
            hits[self.broken_branch] = True
        # A broken combination may still start a new attempt
        if button == self.secret[0]:
            hits[COMBO_BASE] = True
            return 1
        return 0

    def describe_state(self, state: bytes) -> Optional[dict]:
        """Decode a state snapshot produced by this machine."""
        if len(state) != 4:
            return None
        return {
            "x": state[0],
            "y": state[1],
            "progress": state[2],
            "unlocked": bool(state[3]),
        }
