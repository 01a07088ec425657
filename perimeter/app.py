"""
Perimeter - pygame application.

Owns the window, the frame clock and the screen flow:

    NAME_PROMPT -> HOME -> PLAYING -> GAME_OVER -> PLAYING (restart)
                    ^  \\                     |
                    |   -> LEADERBOARD        v
                    +----------------------- HOME

The game session, leaderboard and audio are wired together through one
EventBus; the app itself only listens for GAME_OVER to switch screens.
"""
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple

import pygame

from models import GameEvent, GameEventType
from perimeter import config
from perimeter.events import EventBus
from perimeter.feedback import AudioFeedback
from perimeter.input import InputManager
from perimeter.input.sources import MouseInputSource
from perimeter.leaderboard import Leaderboard, LeaderboardError
from perimeter.logging import close_all_sinks, create_sink, get_logger, register_sink
from perimeter.menu import (
    GameOverMenu,
    HomeMenu,
    LeaderboardScreen,
    MenuAction,
    NamePrompt,
)
from perimeter.renderer import Renderer
from perimeter.scheduler import TaskScheduler
from perimeter.session import GameSession

log = get_logger('app')


class AppScreen(str, Enum):
    """Which screen the app is showing."""
    NAME_PROMPT = "name_prompt"
    HOME = "home"
    PLAYING = "playing"
    GAME_OVER = "game_over"
    LEADERBOARD = "leaderboard"


class PerimeterApp:
    """Main application managing the window, game loop and screens.

    Attributes:
        screen: Pygame display surface (replaced on resize)
        clock: Pygame clock for frame timing
        running: Whether the main loop should continue
        current: Screen being shown
        session: The game session (one at a time)
        leaderboard: Persistent name -> points board
        audio: Event-driven sound effects

    Examples:
        >>> app = PerimeterApp(player_name='ada')
        >>> app.run()
    """

    def __init__(
        self,
        width: int = config.SCREEN_WIDTH,
        height: int = config.SCREEN_HEIGHT,
        fullscreen: bool = config.FULLSCREEN,
        player_name: Optional[str] = None,
        muted: bool = False,
        audio_enabled: bool = True,
        leaderboard_path: Optional[Path] = None,
    ):
        """Initialize pygame, the window and every collaborator.

        Args:
            width: Window width in pixels
            height: Window height in pixels
            fullscreen: Use the whole display instead of a resizable window
            player_name: Skip the name prompt with this name
            muted: Start with sound muted
            audio_enabled: False disables the mixer entirely
            leaderboard_path: JSON file for the leaderboard
        """
        pygame.init()

        if fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption("Perimeter")
        log.info("Display %dx%d%s", *self.screen.get_size(), " (fullscreen)" if fullscreen else "")

        self.clock = pygame.time.Clock()
        self.running = True

        self.events = EventBus()
        self.scheduler = TaskScheduler()
        self.session = GameSession(
            viewport=self.viewport,
            scheduler=self.scheduler,
            events=self.events,
        )
        self.leaderboard = Leaderboard(leaderboard_path)
        self.leaderboard.attach(self.events)

        self.audio = AudioFeedback(audio_enabled=audio_enabled)
        if muted:
            self.audio.toggle_mute()
        self.audio.attach(self.events)

        self.events.subscribe(GameEventType.GAME_OVER, self._on_game_over)
        register_sink('session', create_sink('session'))

        self.input_manager = InputManager(MouseInputSource())
        self.renderer = Renderer()

        self.name_prompt: Optional[NamePrompt] = None
        self.home_menu: Optional[HomeMenu] = None
        self.game_over_menu: Optional[GameOverMenu] = None
        self.leaderboard_screen: Optional[LeaderboardScreen] = None
        self._frozen_frame: Optional[pygame.Surface] = None

        name = (player_name or '').strip()
        if name:
            self.session.player_name = name
            self.show_home()
        else:
            self.current = AppScreen.NAME_PROMPT
            self.name_prompt = NamePrompt()
            pygame.key.start_text_input()

    def viewport(self) -> Tuple[int, int]:
        """Current (width, height) of the window."""
        return self.screen.get_size()

    # ------------------------------------------------------------------
    # Screen transitions
    # ------------------------------------------------------------------

    def show_home(self) -> None:
        self.session.reset()
        self.renderer.clear(self.screen)
        self.home_menu = HomeMenu(self.session.player_name or '', muted=self.audio.muted)
        self.current = AppScreen.HOME

    def start_game(self) -> None:
        self.renderer.clear(self.screen)
        self.input_manager.clear_events()
        self.game_over_menu = None
        self._frozen_frame = None
        self.session.start()
        self.current = AppScreen.PLAYING

    def show_leaderboard(self) -> None:
        error = None
        try:
            entries = self.leaderboard.top()
        except LeaderboardError as e:
            log.error("Leaderboard unavailable: %s", e)
            entries, error = [], str(e)
        self.leaderboard_screen = LeaderboardScreen(entries, error=error)
        self.current = AppScreen.LEADERBOARD

    def _on_game_over(self, event: GameEvent) -> None:
        rank = None
        if event.name:
            try:
                rank = self.leaderboard.rank_of(event.name)
            except LeaderboardError as e:
                log.error("Could not rank %s: %s", event.name, e)
        self.game_over_menu = GameOverMenu(event.points, rank=rank)
        self.current = AppScreen.GAME_OVER

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_events(self) -> None:
        """Process pygame events for the current screen."""
        events = pygame.event.get()

        for event in events:
            if event.type == pygame.QUIT:
                self.running = False
                return
            if event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.get_surface()
                self.renderer.clear(self.screen)

        if self.current == AppScreen.NAME_PROMPT:
            self._handle_name_prompt(events)
        elif self.current == AppScreen.HOME:
            self._handle_home(events)
        elif self.current == AppScreen.PLAYING:
            self._handle_playing(events)
        elif self.current == AppScreen.GAME_OVER:
            self._handle_game_over(events)
        elif self.current == AppScreen.LEADERBOARD:
            self._handle_leaderboard(events)

    def _handle_name_prompt(self, events: List[pygame.event.Event]) -> None:
        action = self.name_prompt.handle_input(events)
        if action == MenuAction.SUBMIT_NAME:
            self.session.player_name = self.name_prompt.name.strip()
            log.info("Player name set to %s", self.session.player_name)
            pygame.key.stop_text_input()
            self.name_prompt = None
            self.show_home()
        elif action == MenuAction.QUIT_GAME:
            self.running = False

    def _handle_home(self, events: List[pygame.event.Event]) -> None:
        action = self.home_menu.handle_input(events)
        if action == MenuAction.START_GAME:
            self.start_game()
        elif action == MenuAction.SHOW_LEADERBOARD:
            self.show_leaderboard()
        elif action == MenuAction.TOGGLE_MUTE:
            self.home_menu.set_muted(self.audio.toggle_mute())
        elif action == MenuAction.QUIT_GAME:
            self.running = False

    def _handle_playing(self, events: List[pygame.event.Event]) -> None:
        for event in events:
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.show_home()
                    return
                if event.key == pygame.K_m:
                    self.audio.toggle_mute()
            elif event.type == pygame.MOUSEBUTTONDOWN:
                # Hand clicks back to the queue for the mouse source
                pygame.event.post(event)

        self.input_manager.update(self.clock.get_time() / 1000.0)
        for input_event in self.input_manager.get_events():
            self.session.fire(input_event.position)

    def _handle_game_over(self, events: List[pygame.event.Event]) -> None:
        action = self.game_over_menu.handle_input(events)
        if action == MenuAction.RESTART:
            self.start_game()
        elif action == MenuAction.BACK_TO_HOME:
            self.show_home()

    def _handle_leaderboard(self, events: List[pygame.event.Event]) -> None:
        action = self.leaderboard_screen.handle_input(events)
        if action == MenuAction.BACK_TO_HOME:
            self.leaderboard_screen = None
            self.show_home()

    # ------------------------------------------------------------------
    # Frame
    # ------------------------------------------------------------------

    def update(self) -> None:
        """Run scheduled work (spawns, engine tick) for this frame."""
        if self.current == AppScreen.PLAYING:
            self.scheduler.run_frame()

    def render(self) -> None:
        if self.current == AppScreen.NAME_PROMPT:
            self.name_prompt.render(self.screen)
        elif self.current == AppScreen.HOME:
            self.home_menu.render(self.screen)
        elif self.current == AppScreen.PLAYING:
            self.renderer.render(self.screen, self.session)
        elif self.current == AppScreen.GAME_OVER:
            if self._frozen_frame is None or self._frozen_frame.get_size() != self.screen.get_size():
                self.renderer.render(self.screen, self.session)
                self._frozen_frame = self.screen.copy()
            self.screen.blit(self._frozen_frame, (0, 0))
            self.game_over_menu.render(self.screen)
        elif self.current == AppScreen.LEADERBOARD:
            self.leaderboard_screen.render(self.screen)

        pygame.display.flip()

    def step(self) -> None:
        """One iteration of the main loop."""
        self.handle_events()
        if not self.running:
            return
        self.update()
        self.render()
        self.clock.tick(config.FPS)

    def run(self) -> None:
        """Run until the window is closed or Quit is chosen."""
        while self.running:
            self.step()

    def quit(self) -> None:
        """Stop the session, close sinks and shut pygame down."""
        self.session.stop()
        self.scheduler.cancel_all()
        close_all_sinks()
        pygame.quit()
