import gymnasium as gym
import numpy as np
import pytest
from gymnasium.utils.env_checker import check_env

import tetris_core.env  # noqa: F401
from tetris_core.env.tetris_env import TetrisEnv
from tetris_core.game import Action, GameState
from tetris_core.rl.random_agent import run_random


@pytest.fixture
def env():
    e = TetrisEnv(render_mode="rgb_array")
    yield e
    e.close()


def test_passes_gymnasium_checks():
    check_env(TetrisEnv(), skip_render_check=True)


def test_registered():
    e = gym.make("Tetris-10x20-v0")
    obs, info = e.reset(seed=0)
    assert obs["board"].shape == (20, 10)
    e.close()


def test_reset_starts_game(env):
    obs, info = env.reset(seed=4)
    assert env.game.state is GameState.RUNNING
    assert obs["next"] == int(env.game.next_piece)
    assert obs["hold"] == 0
    assert info["score"] == 0


def test_same_seed_same_pieces(env):
    env.reset(seed=9)
    first = (env.game.current_piece.kind, env.game.next_piece)
    env.reset(seed=9)
    assert (env.game.current_piece.kind, env.game.next_piece) == first


def test_hold_shows_in_observation(env):
    env.reset(seed=0)
    kind = env.game.current_piece.kind
    obs, *_ = env.step(int(Action.HOLD))
    assert obs["hold"] == int(kind)


def test_hard_drops_end_episode(env):
    env.reset(seed=0)
    terminated = False
    for _ in range(200):
        obs, reward, terminated, truncated, info = env.step(int(Action.HARD_DROP))
        if terminated:
            break
    assert terminated
    assert info["reward_components"]["terminal"] == env.terminal_penalty
    assert env.game.state is GameState.GAME_OVER


def test_truncates_at_step_limit():
    e = TetrisEnv(max_episode_steps=3)
    e.reset(seed=0)
    results = [e.step(int(Action.NONE)) for _ in range(3)]
    assert [r[3] for r in results] == [False, False, True]


def test_render_rgb_array(env):
    env.reset(seed=0)
    img = env.render()
    assert img.shape == (240, 120, 3)
    assert img.dtype == np.uint8


def test_random_agent_runs():
    assert isinstance(run_random(steps=50, seed=0), float)
