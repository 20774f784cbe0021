"""Windowed front-end built on pygame."""

from typing import AbstractSet, FrozenSet, Optional, Set

import pygame

from chipvm.constants import SCREEN_WIDTH, SCREEN_HEIGHT
from chipvm.rendering import create_color_scheme
from chipvm.interfaces.base import Interface, Pixel

KEY_MAP = {
    pygame.K_1: 0x1, pygame.K_2: 0x2, pygame.K_3: 0x3, pygame.K_4: 0xC,
    pygame.K_q: 0x4, pygame.K_w: 0x5, pygame.K_e: 0x6, pygame.K_r: 0xD,
    pygame.K_a: 0x7, pygame.K_s: 0x8, pygame.K_d: 0x9, pygame.K_f: 0xE,
    pygame.K_z: 0xA, pygame.K_x: 0x0, pygame.K_c: 0xB, pygame.K_v: 0xF,
}


class GraphicalInterface(Interface):
    """pygame window of ``64 * scale`` by ``32 * scale`` pixels."""

    def __init__(self, scale: int = 16, color_scheme: str = "classic", caption: str = "chipvm"):
        self.scale = scale
        self.on_color, self.off_color = create_color_scheme(color_scheme)
        self.caption = caption
        self.screen = None
        self.held_keys: Set[int] = set()

    def setup(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((SCREEN_WIDTH * self.scale, SCREEN_HEIGHT * self.scale))
        pygame.display.set_caption(self.caption)
        self.screen.fill(self.off_color)
        pygame.display.flip()

    def read_keys(self) -> Optional[FrozenSet[int]]:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return None
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    return None
                elif event.key in KEY_MAP:
                    self.held_keys.add(KEY_MAP[event.key])
            elif event.type == pygame.KEYUP:
                if event.key in KEY_MAP:
                    self.held_keys.discard(KEY_MAP[event.key])
        return frozenset(self.held_keys)

    def draw(self, display: AbstractSet[Pixel]) -> None:
        self.screen.fill(self.off_color)
        for x, y in display:
            if 0 <= x < SCREEN_WIDTH and 0 <= y < SCREEN_HEIGHT:
                rect = pygame.Rect(x * self.scale, y * self.scale, self.scale, self.scale)
                pygame.draw.rect(self.screen, self.on_color, rect)
        pygame.display.flip()

    def cleanup(self) -> None:
        pygame.quit()
