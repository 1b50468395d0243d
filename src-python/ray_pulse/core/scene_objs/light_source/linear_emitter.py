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

from typing import Dict, Any, List, Optional, TYPE_CHECKING

import numpy as np

# Handle both relative imports (when used as a module) and absolute imports (when run as script)
if __name__ == "__main__":
    from ray_pulse.core.scene_objs.light_source.base_emitter import BaseEmitter
    from ray_pulse.core.geometry import geometry, Point
    from ray_pulse.core.ray import Ray
else:
    from .base_emitter import BaseEmitter
    from ...geometry import geometry, Point
    from ...ray import Ray

if TYPE_CHECKING:
    from ...scene import Scene


class LinearEmitter(BaseEmitter):
    """
    Linear emitter that generates parallel rays from a line segment.

    Useful for collimated sources such as lasers or sunlight. Ray origins are
    spaced linearly from start_point to end_point, both ends included. A
    single ray starts at start_point.

    Attributes:
        start_point (dict): First ray origin {'x', 'y'}
        end_point (dict): Last ray origin {'x', 'y'}
        direction (float): Direction of every ray (radians)
        ray_count (int): Number of rays
        ray_length (float): Length of every ray
        time_range (dict): Time window {'start', 'end'} of every ray
        color (str): Color of the emitter and of every ray it emits
    """

    type = 'LinearEmitter'

    serializable_defaults = {
        'start_point': {'x': 0.0, 'y': 0.0},
        'end_point': {'x': 0.0, 'y': 100.0},
        'direction': 0.0,
        'ray_count': 10,
        'ray_length': 1000.0,
        'time_range': {'start': 0.0, 'end': 1.0},
        'color': 'red',
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def generate_rays(self) -> List[Ray]:
        count = int(self.ray_count)
        if count <= 0:
            return []
        p1 = Point.from_dict(self.start_point)
        p2 = Point.from_dict(self.end_point)
        time_range = self.get_time_range()
        return [
            Ray(geometry.lerp(p1, p2, float(t)), float(self.direction), float(self.ray_length), time_range,
                color=self.color)
            for t in np.linspace(0.0, 1.0, count)
        ]

    def draw(self, renderer: Any) -> None:
        renderer.draw_line_segment(self.start_point, self.end_point, color=self.color,
                                   stroke_width=3, label=self.name, scene_obj=self)


# Example usage and testing
if __name__ == "__main__":
    from ray_pulse.core.scene import Scene

    emitter = LinearEmitter(Scene(), {'ray_count': 4})
    for ray in emitter.generate_rays():
        print(f"  {ray}")
