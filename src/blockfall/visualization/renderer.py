from __future__ import annotations

from typing import Dict, Optional, Tuple

import pygame

from blockfall.game import CellColor, Snapshot


RGB = Tuple[int, int, int]

PALETTE: Dict[int, RGB] = {
    CellColor.LIGHT_BLUE: (80, 80, 200),
    CellColor.BLUE: (40, 40, 200),
    CellColor.ORANGE: (100, 40, 40),
    CellColor.YELLOW: (70, 30, 30),
    CellColor.GREEN: (30, 200, 30),
    CellColor.PURPLE: (180, 40, 180),
    CellColor.RED: (200, 30, 30),
}


def _color_for_value(v: int) -> Optional[RGB]:
    return PALETTE.get(abs(v))


def _shade(color: RGB) -> RGB:
    r, g, b = color
    return r * 7 // 8, g * 7 // 8, b * 7 // 8


class Renderer:
    def __init__(self, cell_size: int = 32, outer_margin: int = 4, inner_margin: int = 8) -> None:
        self.cell_size = cell_size
        self.outer_margin = outer_margin
        self.inner_margin = inner_margin
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, width: int, height: int) -> Tuple[int, int]:
        return width * self.cell_size, height * self.cell_size

    def draw_cell(self, surf: pygame.Surface, x: int, y: int, value: int) -> None:
        color = _color_for_value(value)
        if color is None:
            return
        for inset, fill in ((self.outer_margin, color), (self.inner_margin, _shade(color))):
            rect = pygame.Rect(
                x * self.cell_size + inset,
                y * self.cell_size + inset,
                self.cell_size - 2 * inset,
                self.cell_size - 2 * inset,
            )
            pygame.draw.rect(surf, fill, rect)

    def draw(self, screen: pygame.Surface, snapshot: Snapshot) -> None:
        screen.fill((0, 0, 0))
        state = snapshot.composite()
        h, w = state.shape
        for y in range(h):
            for x in range(w):
                self.draw_cell(screen, x, y, int(state[y, x]))

        if not snapshot.running:
            if self._font is None:
                self._font = pygame.font.SysFont(None, 28)
            text = self._font.render("Game Over - N: new game", True, (255, 255, 255))
            rect = text.get_rect(center=(screen.get_width() // 2, 20))
            screen.blit(text, rect)
