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

Ray Pulse
=========

A Python library for 2D time-parameterized ray propagation. Rays leave
emitters, bounce between flat and parabolic mirrors, and each ray segment
carries the time window during which light travels along it, so a trace can
be played back as an animation.

Main modules:
- core: Propagation engine (Scene, Simulator, Ray, mirrors, emitters,
  Timeline, SVGRenderer)
- analysis: CSV export and shapely-based ray queries
- examples: Example scenes and rendered animations

Quick start:
    from ray_pulse.core.scene import Scene
    from ray_pulse.core.scene_objs import LinearEmitter, ParabolicMirror
    from ray_pulse.core.simulator import Simulator
"""

__version__ = "0.1.0"

# Convenience imports for common usage
from .core.scene import Scene
from .core.simulator import Simulator
from .core.ray import Ray, TimeRange
from .core.timeline import Timeline

__all__ = [
    'Scene',
    'Simulator',
    'Ray',
    'TimeRange',
    'Timeline',
    '__version__',
]
