"""
Perimeter - Playfield renderer.

Draws one filled circle per live entity every frame. Instead of clearing
the screen, a translucent black layer is blended over the previous frame,
which leaves short fading trails behind moving circles.
"""
from typing import Optional, Tuple

import pygame

from perimeter import config
from perimeter.session import GameSession


class Renderer:
    """Renders a GameSession onto a pygame surface."""

    def __init__(self):
        self._fade: Optional[pygame.Surface] = None
        self._fonts = {}

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def _fade_layer(self, size: Tuple[int, int]) -> pygame.Surface:
        # Rebuilt when the window is resized
        if self._fade is None or self._fade.get_size() != size:
            self._fade = pygame.Surface(size, pygame.SRCALPHA)
            self._fade.fill((*config.BACKGROUND_COLOR, config.TRAIL_FADE_ALPHA))
        return self._fade

    def clear(self, screen: pygame.Surface) -> None:
        """Wipe the trails (new session, back to menu)."""
        screen.fill(config.BACKGROUND_COLOR)

    def render(self, screen: pygame.Surface, session: GameSession) -> None:
        """Draw the playfield and the points counter."""
        screen.blit(self._fade_layer(screen.get_size()), (0, 0))

        player = session.player
        if player is not None:
            self._circle(screen, player)
        for projectile in session.projectiles:
            self._circle(screen, projectile)
        for enemy in session.enemies:
            self._circle(screen, enemy)

        self.render_hud(screen, session.points)

    def render_hud(self, screen: pygame.Surface, points: int) -> None:
        """Points counter in the top-left corner."""
        font = self._font(config.FONT_SIZE_SMALL)
        label = font.render(f"Points: {points}", True, config.TEXT_COLOR, config.BACKGROUND_COLOR)
        screen.blit(label, (16, 12))

    @staticmethod
    def _circle(screen: pygame.Surface, entity) -> None:
        pygame.draw.circle(
            screen,
            entity.color.as_rgb_tuple,
            (int(round(entity.x)), int(round(entity.y))),
            max(1, int(round(entity.radius))),
        )
