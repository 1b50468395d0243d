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

===============================================================================
Analysis Utilities
===============================================================================
Tools for working with a propagated trace outside the engine:

- CSV export and summary statistics of ray segments
- Scene object lookup by name or type
- Shapely-based queries: rays arriving at an optic, rays crossing a region,
  and the visible parts of rays during a time window
===============================================================================
"""

from .saving import (
    save_rays_csv,
    get_ray_statistics,
)
from .ray_geometry_queries import (
    get_object_by_name,
    get_objects_by_type,
    rays_hitting_optic,
    rays_crossing_region,
    visible_segments,
)

__all__ = [
    # Ray data export and statistics
    'save_rays_csv',
    'get_ray_statistics',
    # Scene object lookup
    'get_object_by_name',
    'get_objects_by_type',
    # Ray-geometry queries
    'rays_hitting_optic',
    'rays_crossing_region',
    'visible_segments',
]
