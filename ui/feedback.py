"""Audible feedback for workout progress.

Devices without a vibration API still get a cue: each progress signal maps
to a short sound in ``assets/sounds``. Missing files simply play nothing.
"""

from pathlib import Path

from kivy.core.audio import SoundLoader

from backend.workout_session import (
    EXERCISE_COMPLETED,
    SESSION_COMPLETED,
    SET_COMPLETED,
)

SOUNDS_DIR = Path(__file__).resolve().parents[1] / "assets" / "sounds"

SIGNAL_SOUNDS = {
    SET_COMPLETED: "tick",
    EXERCISE_COMPLETED: "release",
    SESSION_COMPLETED: "end",
}


class FeedbackSink:
    """Play the sound registered for a progress signal.

    Sounds are loaded lazily and cached, including failed loads, to keep
    memory usage minimal.
    """

    def __init__(self, enabled: bool = True, volume: float = 1.0, base: Path = SOUNDS_DIR):
        self.enabled = enabled
        self.volume = volume
        self._base = Path(base)
        self._cache: dict[str, object] = {}

    def _load(self, name: str):
        if name not in self._cache:
            self._cache[name] = SoundLoader.load(str(self._base / f"{name}.wav"))
        return self._cache[name]

    def signal(self, kind: str) -> None:
        """Play the cue for ``kind``; unknown kinds are ignored."""
        if not self.enabled:
            return
        name = SIGNAL_SOUNDS.get(kind)
        if not name:
            return
        snd = self._load(name)
        if snd:
            snd.volume = self.volume
            snd.stop()
            snd.play()
