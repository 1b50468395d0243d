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

from .geometry import geometry, Point, Normal, Line, Geometry, SegmentIntersection
from . import constants
from .ray import Ray, TimeRange
from .scene import Scene, IdAllocator
from .simulator import Simulator, propagate, find_nearest_optic, PropagationResult
from .timeline import Timeline
from .svg_renderer import SVGRenderer

__all__ = [
    'geometry', 'Point', 'Normal', 'Line', 'Geometry', 'SegmentIntersection',
    'constants',
    'Ray', 'TimeRange',
    'Scene', 'IdAllocator',
    'Simulator', 'propagate', 'find_nearest_optic', 'PropagationResult',
    'Timeline',
    'SVGRenderer'
]
