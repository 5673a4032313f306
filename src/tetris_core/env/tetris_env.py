from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris_core.game import COLORS, Action, GameConfig, ScoringRules, TetrisGame


def _hex_to_rgb(color: str) -> Tuple[int, int, int]:
    color = color.lstrip("#")
    return int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16)


class TetrisEnv(gym.Env):
    metadata = {"render_modes": ["rgb_array"], "render_fps": 30}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 rules: Optional[ScoringRules] = None,
                 reward_weights: Optional[Dict[str, float]] = None,
                 gravity_every: int = 1,
                 max_episode_steps: int = 10000,
                 terminal_penalty: float = -1.0) -> None:
        super().__init__()
        self.game = TetrisGame(config, rules)
        self.render_mode = render_mode
        self.gravity_every = max(1, int(gravity_every))
        self.max_episode_steps = int(max_episode_steps)
        self.terminal_penalty = float(terminal_penalty)
        self.reward_weights: Dict[str, float] = {
            "score": 0.01,       # reward per engine point
            "holes": 0.1,        # penalize holes created
            "height": 0.02,      # penalize max height increase
        }
        if reward_weights:
            self.reward_weights.update({k: float(v) for k, v in reward_weights.items()})

        h, w = self.game.grid.height, self.game.grid.width
        n_kinds = len(COLORS) + 1
        self.observation_space = spaces.Dict(
            {
                "board": spaces.Box(low=0, high=n_kinds - 1, shape=(h, w), dtype=np.int8),
                "active": spaces.Box(low=0, high=1, shape=(h, w), dtype=np.int8),
                "next": spaces.Discrete(n_kinds),
                "hold": spaces.Discrete(n_kinds),
            }
        )
        self.action_space = spaces.Discrete(len(Action))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        state = self.game.get_state()
        board = np.where(state > 0, state, 0).astype(np.int8)
        active = (state < 0).astype(np.int8)
        game = self.game
        return {
            "board": board,
            "active": active,
            "next": int(game.next_piece) if game.next_piece is not None else 0,
            "hold": int(game.hold_piece.kind) if game.hold_piece is not None else 0,
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.game.score,
            "lines": self.game.lines,
            "level": self.game.level,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.game.seed(seed)
        self.game.reset()
        self.game.start()
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        grid = self.game.grid
        score_before = self.game.score
        holes_before = grid.count_holes()
        height_before = grid.get_max_height()

        self.game.step(Action(int(action)))
        self._steps += 1
        if self._steps % self.gravity_every == 0:
            self.game.tick()

        reward_components: Dict[str, float] = {
            "score": self.reward_weights["score"] * float(self.game.score - score_before),
            "holes": -self.reward_weights["holes"] * float(max(0, grid.count_holes() - holes_before)),
            "height": -self.reward_weights["height"] * float(max(0, grid.get_max_height() - height_before)),
        }
        terminated = self.game.game_over
        truncated = (not terminated) and self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        info = self._get_info()
        info["reward_components"] = reward_components
        return self._get_obs(), float(sum(reward_components.values())), terminated, truncated, info

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode != "rgb_array":
            return None
        state = self.game.get_state()
        cell = 12
        h, w = state.shape
        img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
        for y in range(h):
            for x in range(w):
                v = abs(int(state[y, x]))
                color = _hex_to_rgb(COLORS[v]) if v else (30, 30, 36)
                img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
        return img

    def close(self) -> None:
        pass
