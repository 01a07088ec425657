"""
Menu system for Perimeter.

Screens around the playfield: the name prompt shown at launch, the home
menu, the game-over overlay and the leaderboard list.

Classes:
    MenuScreen: Base class for keyboard/mouse navigable menus
    HomeMenu: Start, leaderboard, sound toggle, quit
    GameOverMenu: Final points with restart / back to home
    LeaderboardScreen: Ranked names and points
    NamePrompt: Text entry for the player's name
"""

from enum import Enum
from typing import List, Optional, Sequence

import pygame

from models import LeaderboardEntry, Vector2D
from perimeter import config


class MenuAction(str, Enum):
    """Actions that can be triggered from menu selections."""
    START_GAME = "start_game"
    SHOW_LEADERBOARD = "show_leaderboard"
    TOGGLE_MUTE = "toggle_mute"
    RESTART = "restart"
    BACK_TO_HOME = "back_to_home"
    SUBMIT_NAME = "submit_name"
    QUIT_GAME = "quit_game"
    NONE = "none"


class FontCache:
    """Default-font instances by point size, loaded on first use."""

    def __init__(self):
        self._fonts = {}

    def get(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    def blit_centered(self, screen: pygame.Surface, text: str, size: int, color, center) -> pygame.Rect:
        surface = self.get(size).render(text, True, color)
        rect = surface.get_rect(center=(int(center[0]), int(center[1])))
        screen.blit(surface, rect)
        return rect


class MenuItem:
    """A selectable menu item.

    Attributes:
        text: Display text for the menu item
        action: Action to perform when selected
        position: Center of the label (set by the screen layout)
        selected: Whether this item is currently selected
    """

    HIT_HALF_WIDTH = 200
    HIT_HALF_HEIGHT = 28

    def __init__(self, text: str, action: MenuAction):
        self.text = text
        self.action = action
        self.position = Vector2D(x=0.0, y=0.0)
        self.selected = False

    def contains(self, pos) -> bool:
        """Simple hit test around the label center."""
        return (abs(pos[0] - self.position.x) < self.HIT_HALF_WIDTH and
                abs(pos[1] - self.position.y) < self.HIT_HALF_HEIGHT)

    def render(self, screen: pygame.Surface, fonts: FontCache) -> None:
        color = config.HIGHLIGHT_COLOR if self.selected else config.TEXT_COLOR
        fonts.blit_centered(screen, self.text, config.FONT_SIZE_MEDIUM, color,
                            (self.position.x, self.position.y))


class MenuScreen:
    """Base class for menu screens.

    Items are stacked vertically below the title and laid out against the
    current screen size on every render, so resizing the window just works.

    Attributes:
        title: Title text
        items: Menu items, top to bottom
        selected_index: Index of the highlighted item
    """

    ITEM_SPACING = 64

    def __init__(self, title: str):
        self.title = title
        self.items: List[MenuItem] = []
        self.selected_index = 0
        self.fonts = FontCache()

    def add_item(self, text: str, action: MenuAction) -> MenuItem:
        item = MenuItem(text, action)
        self.items.append(item)
        if len(self.items) == 1:
            item.selected = True
        return item

    def items_top(self, height: int) -> float:
        """Y of the first item's center."""
        return height * 0.45

    def layout(self, width: int, height: int) -> None:
        """Position items for a screen of the given size."""
        y = self.items_top(height)
        for item in self.items:
            item.position = Vector2D(x=width / 2, y=y)
            y += self.ITEM_SPACING

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        """Handle keyboard and mouse navigation.

        Returns:
            MenuAction if an item was activated, None otherwise
        """
        for event in events:
            if event.type == pygame.KEYDOWN:
                if event.key in (pygame.K_UP, pygame.K_w):
                    self._select_previous()
                elif event.key in (pygame.K_DOWN, pygame.K_s):
                    self._select_next()
                elif event.key in (pygame.K_RETURN, pygame.K_SPACE):
                    return self._activate_selected()

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                for i, item in enumerate(self.items):
                    if item.contains(event.pos):
                        self._select_item(i)
                        return self._activate_selected()

            elif event.type == pygame.MOUSEMOTION:
                for i, item in enumerate(self.items):
                    if item.contains(event.pos):
                        self._select_item(i)
                        break

        return None

    def _select_item(self, index: int) -> None:
        if 0 <= index < len(self.items):
            if 0 <= self.selected_index < len(self.items):
                self.items[self.selected_index].selected = False
            self.selected_index = index
            self.items[index].selected = True

    def _select_next(self) -> None:
        if self.items:
            self._select_item((self.selected_index + 1) % len(self.items))

    def _select_previous(self) -> None:
        if self.items:
            self._select_item((self.selected_index - 1) % len(self.items))

    def _activate_selected(self) -> MenuAction:
        if 0 <= self.selected_index < len(self.items):
            return self.items[self.selected_index].action
        return MenuAction.NONE

    def render(self, screen: pygame.Surface) -> None:
        width, height = screen.get_size()
        self.layout(width, height)
        screen.fill(config.BACKGROUND_COLOR)
        self.fonts.blit_centered(screen, self.title, config.FONT_SIZE_LARGE, config.TEXT_COLOR,
                                 (width / 2, height * 0.2))
        for item in self.items:
            item.render(screen, self.fonts)


class HomeMenu(MenuScreen):
    """Main menu shown at launch and after leaving a game."""

    def __init__(self, player_name: str = '', muted: bool = False):
        super().__init__("PERIMETER")
        self.player_name = player_name
        self.add_item("Start Game", MenuAction.START_GAME)
        self.add_item("Leaderboard", MenuAction.SHOW_LEADERBOARD)
        self._sound_item = self.add_item("", MenuAction.TOGGLE_MUTE)
        self.add_item("Quit", MenuAction.QUIT_GAME)
        self.set_muted(muted)

    def set_muted(self, muted: bool) -> None:
        self._sound_item.text = "Sound: Off" if muted else "Sound: On"

    def render(self, screen: pygame.Surface) -> None:
        super().render(screen)
        width, height = screen.get_size()
        if self.player_name:
            self.fonts.blit_centered(screen, f"Welcome, {self.player_name}!", config.FONT_SIZE_SMALL,
                                     config.DIM_TEXT_COLOR, (width / 2, height * 0.3))
        self.fonts.blit_centered(screen, "Click to shoot. Don't let them reach the center.",
                                 config.FONT_SIZE_SMALL, config.DIM_TEXT_COLOR, (width / 2, height - 60))


class GameOverMenu(MenuScreen):
    """Overlay drawn on top of the frozen playfield after a game over."""

    def __init__(self, points: int, rank: Optional[int] = None):
        super().__init__("GAME OVER")
        self.points = points
        self.rank = rank
        self.add_item("Restart", MenuAction.RESTART)
        self.add_item("Back to Home", MenuAction.BACK_TO_HOME)

    def items_top(self, height: int) -> float:
        return height * 0.55

    def render(self, screen: pygame.Surface) -> None:
        width, height = screen.get_size()
        self.layout(width, height)

        overlay = pygame.Surface((width, height))
        overlay.set_alpha(180)
        overlay.fill(config.BACKGROUND_COLOR)
        screen.blit(overlay, (0, 0))

        self.fonts.blit_centered(screen, self.title, config.FONT_SIZE_LARGE, config.TEXT_COLOR,
                                 (width / 2, height * 0.25))
        self.fonts.blit_centered(screen, f"{self.points} points", config.FONT_SIZE_LARGE,
                                 config.HIGHLIGHT_COLOR, (width / 2, height * 0.37))
        if self.rank is not None:
            self.fonts.blit_centered(screen, f"Leaderboard rank #{self.rank}", config.FONT_SIZE_SMALL,
                                     config.DIM_TEXT_COLOR, (width / 2, height * 0.45))
        for item in self.items:
            item.render(screen, self.fonts)


class LeaderboardScreen(MenuScreen):
    """Ranked list of names and points with a back button."""

    def __init__(self, entries: Sequence[LeaderboardEntry], error: Optional[str] = None):
        super().__init__("LEADERBOARD")
        self.entries = list(entries)
        self.error = error
        self.add_item("Back", MenuAction.BACK_TO_HOME)

    def items_top(self, height: int) -> float:
        return height - 80

    def lines(self) -> List[str]:
        """Rows as shown on screen."""
        if self.error:
            return ["Leaderboard unavailable"]
        if not self.entries:
            return ["No scores yet!"]
        return [f"{i}. {entry.label}" for i, entry in enumerate(self.entries, start=1)]

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        for event in events:
            if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                return MenuAction.BACK_TO_HOME
        return super().handle_input(events)

    def render(self, screen: pygame.Surface) -> None:
        super().render(screen)
        width, height = screen.get_size()
        color = config.ERROR_COLOR if self.error else config.TEXT_COLOR
        y = height * 0.32
        for line in self.lines():
            self.fonts.blit_centered(screen, line, config.FONT_SIZE_SMALL + 4, color, (width / 2, y))
            y += 36


class NamePrompt:
    """Asks for the player's name before the home menu.

    Typing edits the name, Enter submits. Submitting an empty name flashes
    the input box red instead.
    """

    MAX_LENGTH = 20
    SHAKE_MS = 300

    def __init__(self, name: str = ''):
        self.name = name
        self.invalid = False
        self._shake_until = 0
        self.fonts = FontCache()

    @property
    def shaking(self) -> bool:
        return pygame.time.get_ticks() < self._shake_until

    def handle_input(self, events: Sequence[pygame.event.Event]) -> Optional[MenuAction]:
        for event in events:
            if event.type == pygame.TEXTINPUT:
                if len(self.name) < self.MAX_LENGTH:
                    self.name += event.text
                    self.invalid = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_BACKSPACE:
                    self.name = self.name[:-1]
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    if self.name.strip():
                        return MenuAction.SUBMIT_NAME
                    self.invalid = True
                    self._shake_until = pygame.time.get_ticks() + self.SHAKE_MS
                elif event.key == pygame.K_ESCAPE:
                    return MenuAction.QUIT_GAME
        return None

    def render(self, screen: pygame.Surface) -> None:
        width, height = screen.get_size()
        screen.fill(config.BACKGROUND_COLOR)
        self.fonts.blit_centered(screen, "Enter your name", config.FONT_SIZE_MEDIUM, config.TEXT_COLOR,
                                 (width / 2, height * 0.35))

        offset = 0
        if self.shaking:
            offset = 6 if (pygame.time.get_ticks() // 40) % 2 else -6
        box = pygame.Rect(0, 0, 420, 56)
        box.center = (width // 2 + offset, int(height * 0.5))
        border = config.ERROR_COLOR if self.invalid else config.TEXT_COLOR
        pygame.draw.rect(screen, border, box, 2)
        self.fonts.blit_centered(screen, self.name or " ", config.FONT_SIZE_MEDIUM, config.TEXT_COLOR, box.center)
        self.fonts.blit_centered(screen, "Press ENTER to continue", config.FONT_SIZE_SMALL,
                                 config.DIM_TEXT_COLOR, (width / 2, height * 0.62))
