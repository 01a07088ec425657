"""
Audio feedback for Perimeter.

The simulation never plays sounds itself; it emits events. This module
subscribes to them and plays a short procedurally generated clip per
occurrence:

    SESSION_STARTED  -> rising start jingle
    PROJECTILE_FIRED -> laser zap
    ENEMY_DESTROYED  -> retro jump blip
    PLAYER_DIED      -> long falling game-over tone

If the mixer cannot be initialized (no audio device, headless CI) audio is
disabled and the game carries on silently.
"""
from typing import Dict, Optional

import numpy as np
import pygame

from models import GameEvent, GameEventType
from perimeter import config
from perimeter.events import EventBus
from perimeter.logging import get_logger

log = get_logger('audio')

SAMPLE_RATE = 22050

# clip name -> (start Hz, end Hz, seconds, gain, fade-in fraction, fade-out fraction)
CLIP_SPECS = {
    'session_started': (330.0, 660.0, 0.35, 0.30, 0.05, 0.30),
    'fire': (1400.0, 350.0, 0.08, 0.20, 0.0, 0.40),
    'enemy_destroyed': (400.0, 900.0, 0.12, 0.30, 0.10, 0.20),
    'player_died': (440.0, 110.0, 0.90, 0.35, 0.02, 0.50),
}

EVENT_CLIPS = {
    GameEventType.SESSION_STARTED: 'session_started',
    GameEventType.PROJECTILE_FIRED: 'fire',
    GameEventType.ENEMY_DESTROYED: 'enemy_destroyed',
    GameEventType.PLAYER_DIED: 'player_died',
}


def generate_sweep(
    start_hz: float,
    end_hz: float,
    duration: float,
    gain: float,
    fade_in: float = 0.1,
    fade_out: float = 0.1,
    channels: int = 2,
    sample_rate: int = SAMPLE_RATE,
) -> np.ndarray:
    """Sine sweep from start_hz to end_hz as int16 samples.

    Returns:
        Array shaped (samples,) for mono or (samples, channels)
    """
    num_samples = int(sample_rate * duration)
    frequencies = np.linspace(start_hz, end_hz, num_samples)
    phase = np.cumsum(2.0 * np.pi * frequencies / sample_rate)
    wave = np.sin(phase)

    envelope = np.ones(num_samples)
    fade_in_samples = int(num_samples * fade_in)
    fade_out_samples = int(num_samples * fade_out)
    if fade_in_samples:
        envelope[:fade_in_samples] = np.linspace(0, 1, fade_in_samples)
    if fade_out_samples:
        envelope[-fade_out_samples:] = np.linspace(1, 0, fade_out_samples)
    wave *= envelope

    samples = (wave * 32767 * gain).astype(np.int16)
    if channels == 1:
        return samples
    return np.column_stack([samples] * channels)


class AudioFeedback:
    """Plays a clip for each audible game event.

    Attributes:
        sounds: Clip name -> pygame Sound
        audio_enabled: False when disabled by config or mixer failure
        muted: Toggled by the player; sounds stay loaded
    """

    def __init__(self, audio_enabled: bool = True, volume: Optional[float] = None):
        """Initialize audio and synthesize the clips.

        Args:
            audio_enabled: Whether to enable audio feedback
            volume: Clip volume 0..1 (default SFX_VOLUME * MASTER_VOLUME)
        """
        self.audio_enabled = audio_enabled and config.AUDIO_ENABLED
        self.sounds: Dict[str, pygame.mixer.Sound] = {}
        self.muted = False
        self.volume = volume if volume is not None else config.SFX_VOLUME * config.MASTER_VOLUME
        self.played: Dict[str, int] = {name: 0 for name in CLIP_SPECS}

        if self.audio_enabled:
            self._init_audio()

    def _init_audio(self) -> None:
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            frequency, _size, channels = pygame.mixer.get_init()

            for name, spec in CLIP_SPECS.items():
                samples = generate_sweep(*spec, channels=channels, sample_rate=frequency)
                sound = pygame.sndarray.make_sound(samples)
                sound.set_volume(self.volume)
                self.sounds[name] = sound
        except (pygame.error, ValueError, TypeError) as e:
            log.warning("Audio initialization failed, continuing silently: %s", e)
            self.audio_enabled = False
            self.sounds = {}

    def attach(self, events: EventBus) -> None:
        """Subscribe to every event that has a clip."""
        for event_type in EVENT_CLIPS:
            events.subscribe(event_type, self.on_event)

    def on_event(self, event: GameEvent) -> None:
        clip = EVENT_CLIPS.get(event.type)
        if clip:
            self.play(clip)

    def play(self, name: str) -> None:
        """Play a clip by name (no-op when disabled or muted)."""
        self.played[name] = self.played.get(name, 0) + 1
        if not self.audio_enabled or self.muted:
            return
        sound = self.sounds.get(name)
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            log.warning("Could not play %s: %s", name, e)

    def toggle_mute(self) -> bool:
        """Flip mute; returns the new muted flag."""
        self.muted = not self.muted
        if self.muted and self.audio_enabled:
            pygame.mixer.stop()
        log.info("Audio %s", "muted" if self.muted else "unmuted")
        return self.muted
