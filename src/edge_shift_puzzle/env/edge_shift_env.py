from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from edge_shift_puzzle.game import EdgeShiftGame, GameConfig, ScoringRules
from edge_shift_puzzle.game.geometry import ORIENTATION_COUNT, orientation_from_index
from edge_shift_puzzle.game.grid import can_place
from edge_shift_puzzle.game.rng import MASK32


def _compute_action_mask(game: EdgeShiftGame) -> np.ndarray:
    k = game.config.queue_size
    mask = np.zeros((k, game.config.cols, game.config.rows, ORIENTATION_COUNT), dtype=np.bool_)
    for slot, col, row, o in game.valid_actions():
        mask[slot, col, row, o] = True
    return mask


class EdgeShiftEnv(gym.Env):
    """One step places one queued shape and plays the turn out to its final board.

    Action: (slot, x, y, orientation) where orientation o means rotation
    o % 4, horizontally mirrored when o >= 4.
    """

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 rules: Optional[ScoringRules] = None,
                 score_scale: float = 0.01,
                 invalid_action_penalty: float = -0.1,
                 step_penalty: float = 0.0,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.game = EdgeShiftGame(config, rules)

        self.score_scale = float(score_scale)
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.step_penalty = float(step_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        rows, cols = self.game.config.rows, self.game.config.cols
        k = self.game.config.queue_size
        n_shapes = len(self.game.catalog)

        # Observation space: occupancy (0/1) and catalog index per slot (-1 for empty)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(rows, cols), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=n_shapes - 1, shape=(k,), dtype=np.int16),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        self.action_space = spaces.MultiDiscrete((k, cols, rows, ORIENTATION_COUNT))
        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.game.config.queue_size
        pieces = np.full((k,), -1, dtype=np.int16)
        for i, instance in enumerate(self.game.queue.items[:k]):
            pieces[i] = self.game.catalog.index_of(instance.shape_key)
        return {
            "grid": (self.game.board != 0).astype(np.int8),
            "pieces": pieces,
            "pieces_remaining": len(self.game.queue),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.game),
            "score": self.game.stats.score,
            "steps": self.game.stats.moves,
            "seed": self.game.seed,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is None:
            seed = int(self.np_random.integers(0, MASK32 + 1))
        self.game.new_game(seed)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def _try_place(self, slot: int, x: int, y: int, o: int):
        instance = self.game.shape_at(slot)
        if instance is None:
            return None
        rotation, mirrored_h = orientation_from_index(o)
        # Leave the slot's orientation untouched when the move is illegal
        if not can_place(self.game.board, instance.oriented(rotation, mirrored_h).cells(), x, y):
            return None
        self.game.set_orientation(slot, rotation, mirrored_h)
        result = self.game.place_at(slot, x, y)
        self.game.finish_turn()
        return result.outcome

    def step(self, action: np.ndarray | Tuple[int, int, int, int]):
        slot, x, y, o = map(int, action)
        score_before = self.game.stats.score

        outcome = self._try_place(slot, x, y, o)

        reward_components: Dict[str, float] = {}
        if outcome is not None:
            reward_components["score"] = self.score_scale * float(self.game.stats.score - score_before)
        else:
            reward_components["invalid"] = self.invalid_action_penalty
        reward_components["step"] = self.step_penalty

        terminated = bool(self.game.game_over)
        self._steps += 1
        truncated = self._steps >= self.max_episode_steps
        if terminated:
            reward_components["terminal"] = self.terminal_penalty

        reward = float(sum(reward_components.values()))
        info = self._get_info()
        info["reward_components"] = reward_components
        info["engine_score_delta"] = self.game.stats.score - score_before
        if outcome is not None:
            info["combo"] = outcome.combo
            info["edge_shifts"] = outcome.edge_count
            info["displacement"] = outcome.displacement
        return self._get_obs(), reward, terminated, truncated, info
