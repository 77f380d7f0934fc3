"""Gymnasium environments for Blockfall."""

from __future__ import annotations

from gymnasium.envs.registration import register

# Register the default 8 wide, 10 tall board
register(
    id="Blockfall-8x10-v0",
    entry_point="blockfall.env.falling_blocks_env:FallingBlocksEnv",
)

__all__ = ["Blockfall-8x10-v0"]
