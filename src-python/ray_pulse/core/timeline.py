"""
Copyright 2026 ray-pulse authors and contributors

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.
"""

from typing import Iterator

from .ray import TimeRange


class Timeline:
    """
    Animation clock for displaying a propagated scene.

    The clock runs from -spread to t_max + spread and then wraps around, so
    that the render window [t - spread, t + spread] sweeps in and out of the
    whole [0, t_max] trace. It only keeps time; drawing is up to the caller.

    Attributes:
        t (float): Current time
        t_max (float): End of the trace
        spread (float): Half-width of the render window
        step_seconds (float): Fixed step used by step() and step_back()
        paused (bool): Whether advance() is ignored
    """

    def __init__(self, t_max: float, spread: float = 0.05, step_seconds: float = 1 / 60) -> None:
        if t_max <= 0:
            raise ValueError(f"t_max must be positive, got {t_max}")
        if spread < 0:
            raise ValueError(f"spread must be >= 0, got {spread}")
        self.t: float = 0.0
        self.t_max: float = t_max
        self.spread: float = spread
        self.step_seconds: float = step_seconds
        self.paused: bool = False

    def _wrap(self) -> None:
        if self.t > self.t_max + self.spread:
            self.t = -self.spread
        elif self.t < -self.spread:
            self.t = self.t_max + self.spread

    def advance(self, delta_seconds: float) -> float:
        """Move the clock forward unless paused. Returns the new time."""
        if not self.paused:
            self.t += delta_seconds
            self._wrap()
        return self.t

    def step(self) -> float:
        """Move one fixed step forward, even while paused."""
        self.t += self.step_seconds
        self._wrap()
        return self.t

    def step_back(self) -> float:
        """Move one fixed step backward, even while paused."""
        self.t -= self.step_seconds
        self._wrap()
        return self.t

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    @property
    def render_range(self) -> TimeRange:
        """The window [t - spread, t + spread] to display at the current time."""
        if self.spread == 0:
            # A zero-width window is not a valid TimeRange
            return TimeRange(self.t, self.t + 1e-12)
        return TimeRange(self.t - self.spread, self.t + self.spread)

    def frames(self, count: int) -> Iterator[TimeRange]:
        """
        Yield `count` render windows, stepping forward by step_seconds
        before each one.
        """
        for _ in range(count):
            self.step()
            yield self.render_range
