from __future__ import annotations

from collections import deque
from typing import Deque, Optional

from .core import Action, BoardEngine, GameConfig, RandomSource, Snapshot


class GameDriver:
    """Feeds queued commands and gravity ticks into a :class:`BoardEngine`.

    Each :meth:`advance` call applies every queued command first, then
    drains the gravity accumulator in fixed ``gravity_interval_ms`` steps,
    one soft drop per step. Leftover time carries over to the next call.
    """

    def __init__(
        self,
        engine: Optional[BoardEngine] = None,
        gravity_interval_ms: float = 1000,
        config: Optional[GameConfig] = None,
        rng: Optional[RandomSource] = None,
    ) -> None:
        if gravity_interval_ms <= 0:
            raise ValueError("gravity_interval_ms must be positive")
        self.config = config or (engine.config if engine is not None else GameConfig())
        self.engine = engine or BoardEngine(self.config, rng)
        self.rng = self.engine.rng
        self.gravity_interval_ms = gravity_interval_ms
        self.pending: Deque[Action] = deque()
        self.accumulated_ms: float = 0

    def push(self, action: Action) -> None:
        self.pending.append(action)

    def advance(self, elapsed_ms: float) -> Snapshot:
        while self.pending:
            self.engine.apply(self.pending.popleft())

        self.accumulated_ms += elapsed_ms
        while self.accumulated_ms >= self.gravity_interval_ms:
            self.accumulated_ms -= self.gravity_interval_ms
            if not self.engine.game_over:
                self.engine.soft_drop()

        return self.engine.snapshot()

    def restart(self) -> None:
        self.engine = BoardEngine(self.config, self.rng)
        self.pending.clear()
        self.accumulated_ms = 0
