"""Keyframe timelines for numeric wheel properties."""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Optional

from ejectwheel.animation.easing import Easing, get_easing


class PlayState(Enum):
    STOPPED = auto()
    PLAYING = auto()
    FINISHED = auto()


@dataclass
class Keyframe:
    """Value reached at normalized time `time`.

    `easing` shapes the approach to this keyframe from the previous one.
    """

    time: float
    value: float
    easing: Easing | str = Easing.LINEAR

    def __post_init__(self):
        self.time = max(0.0, min(1.0, self.time))


@dataclass
class Track:
    """Keyframes for one property, kept sorted by time."""

    name: str
    keyframes: list[Keyframe] = field(default_factory=list)

    def add_keyframe(self, time: float, value: float, easing: Easing | str = Easing.LINEAR) -> "Track":
        self.keyframes.append(Keyframe(time, value, easing))
        self.keyframes.sort(key=lambda k: k.time)
        return self

    def value_at(self, t: float) -> Optional[float]:
        if not self.keyframes:
            return None

        first, last = self.keyframes[0], self.keyframes[-1]
        if t <= first.time:
            return first.value
        if t >= last.time:
            return last.value

        prev_kf = first
        for kf in self.keyframes[1:]:
            if kf.time > t:
                span = kf.time - prev_kf.time
                local_t = (t - prev_kf.time) / span if span > 0 else 1.0
                eased = get_easing(kf.easing)(local_t)
                return prev_kf.value + (kf.value - prev_kf.value) * eased
            prev_kf = kf
        return last.value


@dataclass
class Timeline:
    """Tracks played together over `duration` milliseconds."""

    name: str
    duration: float = 1000.0
    tracks: dict[str, Track] = field(default_factory=dict)
    on_complete: Optional[Callable[["Timeline"], None]] = None

    _state: PlayState = field(default=PlayState.STOPPED, repr=False)
    _elapsed: float = field(default=0.0, repr=False)

    def add_track(self, name: str) -> Track:
        track = Track(name=name)
        self.tracks[name] = track
        return track

    def play(self, from_start: bool = False) -> "Timeline":
        if from_start:
            self._elapsed = 0.0
        self._state = PlayState.PLAYING
        return self

    def stop(self) -> "Timeline":
        self._state = PlayState.STOPPED
        self._elapsed = 0.0
        return self

    @property
    def state(self) -> PlayState:
        return self._state

    @property
    def progress(self) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, self._elapsed / self.duration)

    @property
    def is_playing(self) -> bool:
        return self._state == PlayState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self._state == PlayState.FINISHED

    def update(self, delta_ms: float) -> dict[str, Optional[float]]:
        """Advance playback and return every track's current value."""
        if self.is_playing:
            self._elapsed += delta_ms
            if self._elapsed >= self.duration:
                self._elapsed = self.duration
                self._state = PlayState.FINISHED
                if self.on_complete:
                    self.on_complete(self)

        t = self.progress
        return {name: track.value_at(t) for name, track in self.tracks.items()}

    @classmethod
    def tween(
        cls,
        track_name: str,
        start: float,
        end: float,
        duration: float,
        easing: Easing | str = Easing.EASE_OUT_CUBIC,
        name: str = "tween",
    ) -> "Timeline":
        """Single-track timeline from start to end."""
        timeline = cls(name=name, duration=duration)
        timeline.add_track(track_name).add_keyframe(0.0, start).add_keyframe(1.0, end, easing)
        return timeline
