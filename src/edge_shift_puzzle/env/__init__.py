"""Gymnasium environments for the Edge-Shift Puzzle."""

from __future__ import annotations

from gymnasium.envs.registration import register

from .edge_shift_env import EdgeShiftEnv

# Register the canonical 12x12 board with a batch of 4 shapes
register(
    id="EdgeShift-12x12-v0",
    entry_point="edge_shift_puzzle.env.edge_shift_env:EdgeShiftEnv",
)

__all__ = ["EdgeShiftEnv"]
