"""Gymnasium environments for the block puzzle engine."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register default Block Puzzle environment (classic mode)
register(
    id="BlockPuzzle-8x8-v0",
    entry_point="block_puzzle.env.block_puzzle_env:BlockPuzzleEnv",
)

# Progression mode: score targets unlock new shapes
register(
    id="BlockPuzzleLevels-8x8-v0",
    entry_point="block_puzzle.env.block_puzzle_env:BlockPuzzleEnv",
    kwargs={"mode": "progression"},
)

__all__ = ["BlockPuzzle-8x8-v0", "BlockPuzzleLevels-8x8-v0"]
