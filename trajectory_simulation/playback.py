from dataclasses import dataclass, field
from typing import Callable, List, Optional

import numpy as np


class ShotInProgressError(RuntimeError):
    """Raised when a shot is started while the previous one is still animating."""


@dataclass
class TrajectoryPlayback:
    """Forward-only cursor over a finished trajectory.

    Presentation code steps through the points on its own timer. There is no
    way to rewind; ``stop`` ends playback early (e.g. the player left the
    level).
    """

    points: List[np.ndarray]
    index: int = 0
    stopped: bool = False
    on_finish: Optional[Callable[[], None]] = None
    _finished_notified: bool = field(default=False, init=False, repr=False)

    def __post_init__(self):
        if len(self.points) == 0:
            raise ValueError("Cannot play back an empty trajectory")
        self.points = [np.array(p, dtype=float) for p in self.points]

    @property
    def current(self) -> np.ndarray:
        return self.points[self.index]

    @property
    def finished(self) -> bool:
        return self.stopped or self.index >= len(self.points) - 1

    def advance(self) -> np.ndarray:
        if not self.finished:
            self.index += 1
        if self.finished:
            self._notify()
        return self.current

    def stop(self):
        self.stopped = True
        self._notify()

    def _notify(self):
        if self.on_finish is not None and not self._finished_notified:
            self._finished_notified = True
            self.on_finish()


@dataclass
class ShotSession:
    """Allows only one shot in flight at a time."""

    playback: Optional[TrajectoryPlayback] = None
    shots_played: int = 0

    @property
    def busy(self) -> bool:
        return self.playback is not None and not self.playback.finished

    def start(self, points, on_finish: Optional[Callable[[], None]] = None) -> TrajectoryPlayback:
        if self.busy:
            raise ShotInProgressError("Previous shot is still being animated")
        self.playback = TrajectoryPlayback(points, on_finish=on_finish)
        self.shots_played += 1
        return self.playback
