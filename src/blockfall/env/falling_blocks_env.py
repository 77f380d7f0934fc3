from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from blockfall.game import Action, BoardEngine, GameConfig, MoveOutcome
from blockfall.game.pieces import CellColor


@dataclass
class EnvConfig:
    game: GameConfig = field(default_factory=GameConfig)
    gravity_interval: int = 1  # env steps per gravity tick; 0 disables gravity
    max_episode_steps: int = 5000


class FallingBlocksEnv(gym.Env):
    """Single falling-block board driven one command per step.

    Observation is the board with locked cells as positive color tags and
    the falling piece as negative tags. Reward is the number of rows cleared
    during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[EnvConfig] = None, render_mode: Optional[str] = None) -> None:
        super().__init__()
        self.config = config or EnvConfig()
        if self.config.gravity_interval < 0:
            raise ValueError("gravity_interval must be >= 0")
        self.render_mode = render_mode
        self.engine = BoardEngine(self.config.game)

        h, w = self.config.game.height, self.config.game.width
        top = len(CellColor) - 1
        self.observation_space = spaces.Box(low=-top, high=top, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> np.ndarray:
        return self.engine.snapshot().composite(mark_active=True).astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "rows_cleared_total": self.engine.rows_cleared_total,
            "pieces_locked": self.engine.pieces_locked,
            "max_height": self.engine.grid.get_max_height(),
            "holes": self.engine.grid.count_holes(),
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        # Seed the piece sequence from gymnasium's generator so reset(seed=...) is reproducible
        piece_seed = int(self.np_random.integers(0, 2**31 - 1))
        self.engine = BoardEngine(self.config.game, random.Random(piece_seed))
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        before = self.engine.rows_cleared_total
        outcome = self.engine.apply(Action(int(action)))

        self._steps += 1
        gravity = self.config.gravity_interval
        if gravity and self._steps % gravity == 0 and not self.engine.game_over:
            if self.engine.soft_drop() is MoveOutcome.LOCKED:
                outcome = MoveOutcome.LOCKED

        reward = float(self.engine.rows_cleared_total - before)
        terminated = bool(self.engine.game_over)
        truncated = not terminated and self._steps >= self.config.max_episode_steps

        info = self._get_info()
        info["outcome"] = outcome.value
        return self._get_obs(), reward, terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            from blockfall.visualization.renderer import PALETTE

            state = self.engine.snapshot().composite()
            cell = 12
            h, w = state.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    color = PALETTE.get(int(state[y, x]), (30, 30, 36))
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        # human rendering delegated to external UI; noop
        return None

    def close(self) -> None:
        pass
