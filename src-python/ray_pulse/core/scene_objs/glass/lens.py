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

import math
from typing import Dict, Any, List, Optional, TYPE_CHECKING

from ..base_optic import BaseOptic
from ...ray import Ray

if TYPE_CHECKING:
    from ...scene import Scene


class Lens(BaseOptic):
    """
    Biconvex lens placeholder.

    Refraction is not modeled. The lens never intersects a ray and
    splitting always yields no rays. It exists so that scenes can already
    reference the type.

    Attributes:
        position (dict): Center of the lens {'x', 'y'}
        focal_length (float): Nominal focal length (unused)
    """

    type = 'Lens'

    serializable_defaults = {
        'position': {'x': 0.0, 'y': 0.0},
        'focal_length': 100.0,
    }

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def distance_to_intersection(self, ray: Ray) -> float:
        return math.inf

    def split_and_reflect_segment(self, ray: Ray) -> List[Ray]:
        return []
