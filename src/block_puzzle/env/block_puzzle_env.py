from __future__ import annotations

from typing import Any, Dict, Optional, Sequence, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from block_puzzle.engine import GameConfig, GameMode, Phase, Session
from block_puzzle.engine.oracle import valid_placements
from block_puzzle.engine.shapes import CATALOG, ShapeDef, shape_index


def _compute_action_mask(session: Session) -> np.ndarray:
    size = session.config.grid_size
    k = session.config.hand_size
    mask = np.zeros((k, size, size), dtype=np.bool_)
    if session.phase is not Phase.PLAYING:
        return mask
    for slot_idx, slot in enumerate(session.hand[:k]):
        if slot.placed:
            continue
        for row, col in valid_placements(session.grid, slot.shape):
            mask[slot_idx, row, col] = True
    return mask


class BlockPuzzleEnv(gym.Env):
    """Agent-facing wrapper that feeds (slot, row, col) placements to a Session."""

    metadata = {"render_modes": []}

    def __init__(self, config: Optional[GameConfig] = None,
                 mode: GameMode | str = GameMode.CLASSIC,
                 invalid_action_penalty: float = -0.1,
                 terminal_penalty: float = 0.0,
                 max_episode_steps: int = 10000,
                 catalog: Sequence[ShapeDef] = CATALOG) -> None:
        super().__init__()
        self.session = Session(config, catalog=catalog)
        self.mode = GameMode(mode)

        # Reward shaping parameters
        self.invalid_action_penalty = float(invalid_action_penalty)
        self.terminal_penalty = float(terminal_penalty)
        self.max_episode_steps = int(max_episode_steps)

        size = self.session.config.grid_size
        k = self.session.config.hand_size
        n_shapes = len(self.session.catalog)

        # Observation space: grid (0/1) and hand (catalog indices, -1 for placed)
        self.observation_space = spaces.Dict(
            {
                "grid": spaces.Box(low=0, high=1, shape=(size, size), dtype=np.int8),
                "pieces": spaces.Box(low=-1, high=n_shapes - 1, shape=(k,), dtype=np.int8),
                "pieces_remaining": spaces.Discrete(k + 1),
            }
        )

        # Action: (slot, row, col)
        self.action_space = spaces.MultiDiscrete((k, size, size))

        self._steps = 0

    def _get_obs(self) -> Dict[str, Any]:
        k = self.session.config.hand_size
        grid = (self.session.grid.grid != 0).astype(np.int8)
        pieces = np.full((k,), -1, dtype=np.int8)
        for i, slot in enumerate(self.session.hand[:k]):
            if not slot.placed:
                pieces[i] = shape_index(slot.shape, self.session.catalog)
        return {
            "grid": grid,
            "pieces": pieces,
            "pieces_remaining": len(self.session.remaining_shapes()),
        }

    def _get_info(self) -> Dict[str, Any]:
        return {
            "action_mask": _compute_action_mask(self.session),
            "score": self.session.score,
            "level": self.session.level,
            "phase": self.session.phase.value,
            "steps": self._steps,
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        super().reset(seed=seed)
        if seed is not None:
            self.session.rng.seed(seed)
        self.session.select_mode(self.mode)
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action):
        slot, row, col = map(int, action)
        outcome = self.session.place(slot, row, col)
        self._steps += 1

        if outcome.accepted:
            reward = float(outcome.gained)
        else:
            reward = self.invalid_action_penalty

        terminated = self.session.phase in (Phase.GAME_OVER, Phase.ALL_LEVELS_COMPLETE)
        truncated = self._steps >= self.max_episode_steps
        if self.session.phase is Phase.GAME_OVER:
            reward += self.terminal_penalty

        info = self._get_info()
        info["accepted"] = outcome.accepted
        info["reason"] = outcome.reason
        info["engine_score_delta"] = float(outcome.gained)
        return self._get_obs(), reward, terminated, truncated, info

    def get_action_mask(self) -> np.ndarray:
        return _compute_action_mask(self.session)

    def close(self) -> None:
        pass
