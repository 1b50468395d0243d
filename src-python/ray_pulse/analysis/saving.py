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
Ray Data Export Utilities
===============================================================================
Utilities for exporting propagated rays to tabular files and summarizing a
trace. Every row keeps the ray's time window and the optic IDs it carries, so
a trace can be re-animated or inspected outside Python.
===============================================================================
"""

import csv
from pathlib import Path
from typing import List, Union

from ..core.ray import Ray


def save_rays_csv(
    ray_segments: List[Ray],
    output_path: Union[str, Path],
    filename: str = "rays.csv",
    precision_coords: int = 4,
    precision_time: int = 6,
) -> Path:
    """
    Export ray segment data to a CSV file.

    Exports the geometry, the time window and the spawned-by / hit optic IDs
    of every ray. Missing IDs are written as empty cells.

    Args:
        ray_segments: List of Ray objects to export.
        output_path: Directory path where the CSV file will be saved.
            Can be a string or Path object.
        filename: Name of the output CSV file (default: "rays.csv").
        precision_coords: Decimal places for coordinate values (default: 4).
        precision_time: Decimal places for time and angle values (default: 6).

    Returns:
        Path: Full path to the created CSV file.

    Raises:
        OSError: If the output directory cannot be created or file cannot be written.

    Example:
        >>> from ray_pulse.analysis import save_rays_csv
        >>> output_file = save_rays_csv(simulator.run(), "./output")
        >>> print(f"Saved to: {output_file}")
    """
    output_dir = Path(output_path)
    output_dir.mkdir(parents=True, exist_ok=True)

    csv_file = output_dir / filename

    with open(csv_file, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            'ray_index',
            'origin_x',
            'origin_y',
            'end_x',
            'end_y',
            'direction',
            'length',
            't_start',
            't_end',
            'spawned_by',
            'hit',
        ])

        coord_fmt = f"{{:.{precision_coords}f}}"
        time_fmt = f"{{:.{precision_time}f}}"

        for i, ray in enumerate(ray_segments):
            end = ray.end_point
            writer.writerow([
                i,
                coord_fmt.format(ray.origin.x),
                coord_fmt.format(ray.origin.y),
                coord_fmt.format(end.x),
                coord_fmt.format(end.y),
                time_fmt.format(ray.direction),
                coord_fmt.format(ray.length),
                time_fmt.format(ray.time_range.start),
                time_fmt.format(ray.time_range.end),
                ray.spawned_by_object_id if ray.spawned_by_object_id is not None else '',
                ray.hit_object_id if ray.hit_object_id is not None else '',
            ])

    return csv_file


def get_ray_statistics(ray_segments: List[Ray]) -> dict:
    """
    Compute statistics about a collection of ray segments.

    Args:
        ray_segments: List of Ray objects to analyze.

    Returns:
        dict: Dictionary containing:
            - total_rays: Total number of ray segments
            - emitted_rays: Segments that start at an emitter (no spawning optic)
            - reflected_rays: Segments produced by a reflection
            - terminated_rays: Segments that end on an optic
            - total_length: Sum of all ray segment lengths
            - t_min, t_max: Time span covered by the trace (None if empty)

    Example:
        >>> stats = get_ray_statistics(rays)
        >>> print(f"Reflected: {stats['reflected_rays']}")
    """
    if not ray_segments:
        return {
            'total_rays': 0,
            'emitted_rays': 0,
            'reflected_rays': 0,
            'terminated_rays': 0,
            'total_length': 0.0,
            't_min': None,
            't_max': None,
        }

    return {
        'total_rays': len(ray_segments),
        'emitted_rays': sum(1 for ray in ray_segments if ray.spawned_by_object_id is None),
        'reflected_rays': sum(1 for ray in ray_segments if ray.spawned_by_object_id is not None),
        'terminated_rays': sum(
            1 for ray in ray_segments
            if ray.hit_object_id is not None and ray.hit_object_id != ray.spawned_by_object_id
        ),
        'total_length': sum(ray.length for ray in ray_segments),
        't_min': min(ray.time_range.start for ray in ray_segments),
        't_max': max(ray.time_range.end for ray in ray_segments),
    }
