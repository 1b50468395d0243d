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

import svgwrite

from .ray import TimeRange


class SVGRenderer:
    """
    SVG renderer for animation frames of a propagated scene.

    The SVG is organized into three layers:
    - objects: Mirrors and emitters (below rays)
    - rays: The in-transit part of every ray
    - labels: Text annotations (above everything)

    Coordinate System:
        The renderer uses a Y-up coordinate system (positive Y points upward),
        which matches mathematical convention. This is achieved by applying
        a vertical flip transformation to the SVG coordinate system.

    Attributes:
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels
        viewbox (tuple): SVG viewBox (min_x, min_y, width, height), Y-down
        dwg (svgwrite.Drawing): The SVG drawing object
    """

    def __init__(self, width=800, height=600, viewbox=None, metadata_level='full',
                 background='#1a1a1a'):
        """
        Initialize the SVG renderer.

        Args:
            width (int): Canvas width in pixels (default: 800)
            height (int): Canvas height in pixels (default: 600)
            viewbox (tuple or None): SVG viewBox as (min_x, min_y, width, height)
                                    in Y-up coordinates. If None, uses (0, 0, width, height)
            metadata_level (str): Controls how much simulation metadata to embed.
                - 'none': No metadata (smallest files)
                - 'standard': id + class
                - 'full': All of 'standard' plus data-* attributes
            background (str or None): Background fill, or None for transparent
        """
        if metadata_level not in ('none', 'standard', 'full'):
            raise ValueError(f"Invalid metadata_level '{metadata_level}'")

        self.width = width
        self.height = height
        self.metadata_level = metadata_level
        self.user_viewbox = viewbox if viewbox is not None else (0, 0, width, height)

        # SVG needs the viewbox flipped: min_y becomes -(min_y + height)
        min_x, min_y, vb_width, vb_height = self.user_viewbox
        self.viewbox = (min_x, -(min_y + vb_height), vb_width, vb_height)

        # debug=False disables svgwrite's strict attribute validation, which
        # rejects data-* attributes
        self.dwg = svgwrite.Drawing(size=(f'{width}px', f'{height}px'),
                                    profile='full', debug=False)
        self.dwg.viewbox(*self.viewbox)

        if background is not None:
            self.dwg.add(self.dwg.rect(
                insert=(self.viewbox[0], self.viewbox[1]),
                size=(self.viewbox[2], self.viewbox[3]),
                fill=background
            ))

        self.layer_objects = self.dwg.add(self.dwg.g(id='layer-objects', transform='scale(1, -1)'))
        self.layer_rays = self.dwg.add(self.dwg.g(id='layer-rays', transform='scale(1, -1)'))
        self.layer_labels = self.dwg.add(self.dwg.g(id='layer-labels', transform='scale(1, -1)'))

    def _normalize_coord(self, value):
        """
        Normalize a coordinate value: -0.0 and values within 1e-10 of zero
        become 0.0.
        """
        if value == 0.0 or abs(value) < 1e-10:
            return 0.0
        return value

    def _normalize_point(self, point):
        return {
            'x': self._normalize_coord(point['x']),
            'y': self._normalize_coord(point['y'])
        }

    def draw_ray_segment(self, ray, render_range=None, color=None, opacity=1.0,
                         stroke_width=1.5):
        """
        Draw the part of a ray that is in transit during `render_range`.

        Args:
            ray (Ray): The ray to draw
            render_range (TimeRange or None): Time window; None draws the
                whole segment
            color (str or None): CSS color string; None uses the ray's own
                color, falling back to 'red'
            opacity (float): Opacity 0.0-1.0 (default: 1.0)
            stroke_width (float): Line width in pixels (default: 1.5)

        Returns:
            bool: True if anything was drawn
        """
        if render_range is None:
            segment = (ray.origin, ray.end_point)
        else:
            segment = ray.get_render_segment(render_range)
            if segment is None:
                return False

        if color is None:
            color = ray.color or 'red'

        start, end = segment
        p1 = start.to_dict()
        p2 = end.to_dict()
        if not all(math.isfinite(v) for v in (p1['x'], p1['y'], p2['x'], p2['y'])):
            return False

        p1_clipped, p2_clipped = self._clip_to_viewbox(p1, p2)
        if p1_clipped is None:
            return False
        p1 = self._normalize_point(p1_clipped)
        p2 = self._normalize_point(p2_clipped)

        line = self.dwg.line(
            start=(p1['x'], p1['y']),
            end=(p2['x'], p2['y']),
            stroke=color,
            stroke_width=stroke_width,
            stroke_opacity=opacity,
            stroke_linecap='round',
        )
        if self.metadata_level != 'none':
            line['class'] = 'ray'
        if self.metadata_level == 'full':
            self._attach_ray_data_attributes(line, ray)

        self.layer_rays.add(line)
        return True

    def _attach_ray_data_attributes(self, element, ray) -> None:
        """Attach data-* attributes from a Ray to an SVG element."""
        element['data-direction'] = f'{ray.direction:.6f}'
        element['data-length'] = f'{ray.length:.6f}'
        element['data-t-start'] = f'{ray.time_range.start:.6f}'
        element['data-t-end'] = f'{ray.time_range.end:.6f}'
        if ray.color is not None:
            element['data-color'] = ray.color
        if ray.spawned_by_object_id is not None:
            element['data-spawned-by'] = str(ray.spawned_by_object_id)
        if ray.hit_object_id is not None:
            element['data-hit'] = str(ray.hit_object_id)

    def _attach_scene_obj_metadata(self, element, scene_obj, css_class='scene-obj') -> None:
        """Attach id, class and data-* attributes from a scene object."""
        if self.metadata_level == 'none':
            return
        obj_uuid = getattr(scene_obj, 'uuid', None)
        if obj_uuid:
            element['id'] = f'{css_class}-{obj_uuid}'
        element['class'] = css_class
        if self.metadata_level == 'full':
            element['data-type'] = scene_obj.type
            obj_id = getattr(scene_obj, 'id', None)
            if obj_id is not None:
                element['data-optic-id'] = str(obj_id)

    def _draw_label(self, text, x, y, color, anchor='start'):
        font_size = '8px'
        vertical_offset = 8 * 0.35
        self.layer_labels.add(self.dwg.text(
            text,
            insert=(x, -y + vertical_offset),
            fill=color,
            font_size=font_size,
            font_family='sans-serif',
            text_anchor=anchor,
            transform='scale(1, -1)'  # Flip text back to be readable
        ))

    def draw_point(self, point, color='black', radius=3, label=None, scene_obj=None):
        """
        Draw a point (circle).

        Args:
            point (dict): Point with 'x' and 'y' keys
            color (str): Fill color (default: 'black')
            radius (float): Circle radius in pixels (default: 3)
            label (str or None): Optional text label to show near point
            scene_obj: Optional scene object for metadata
        """
        point = self._normalize_point(point)
        circle = self.dwg.circle(center=(point['x'], point['y']), r=radius, fill=color,
                                 stroke='black', stroke_width=2)
        if scene_obj is not None:
            self._attach_scene_obj_metadata(circle, scene_obj, css_class='point')
        self.layer_objects.add(circle)

        if label:
            self._draw_label(label, point['x'] + radius + 2, point['y'] - radius - 2, color)

    def draw_line_segment(self, p1, p2, color='gray', stroke_width=2, label=None,
                          scene_obj=None):
        """
        Draw a line segment (flat mirrors, linear emitters).

        Args:
            p1 (dict): Start point with 'x' and 'y' keys
            p2 (dict): End point with 'x' and 'y' keys
            color (str): Stroke color (default: 'gray')
            stroke_width (float): Line width in pixels (default: 2)
            label (str or None): Optional text label at the midpoint
            scene_obj: Optional scene object for metadata
        """
        p1 = self._normalize_point(p1)
        p2 = self._normalize_point(p2)
        line = self.dwg.line(start=(p1['x'], p1['y']), end=(p2['x'], p2['y']),
                             stroke=color, stroke_width=stroke_width)
        if scene_obj is not None:
            self._attach_scene_obj_metadata(line, scene_obj, css_class='line-segment')
        self.layer_objects.add(line)

        if label:
            mid_x = self._normalize_coord((p1['x'] + p2['x']) / 2)
            mid_y = self._normalize_coord((p1['y'] + p2['y']) / 2)
            self._draw_label(label, mid_x, mid_y, color, anchor='middle')

    def draw_polyline(self, points, color='gray', stroke_width=2, label=None, scene_obj=None):
        """
        Draw an open polyline (curved mirrors).

        Args:
            points (list): Points as dicts with 'x' and 'y' keys
            color (str): Stroke color (default: 'gray')
            stroke_width (float): Line width in pixels (default: 2)
            label (str or None): Optional text label at the middle point
            scene_obj: Optional scene object for metadata
        """
        if len(points) < 2:
            return
        pts = [self._normalize_point(p) for p in points]
        polyline = self.dwg.polyline(points=[(p['x'], p['y']) for p in pts],
                                     stroke=color, stroke_width=stroke_width, fill='none')
        if scene_obj is not None:
            self._attach_scene_obj_metadata(polyline, scene_obj, css_class='polyline')
        self.layer_objects.add(polyline)

        if label:
            mid = pts[len(pts) // 2]
            self._draw_label(label, mid['x'], mid['y'], color, anchor='middle')

    def draw_scene(self, scene, rays=None, render_range=None, ray_color=None, **ray_kwargs):
        """
        Draw all objects of a scene, then the given rays.

        Args:
            scene: The Scene to draw
            rays: Rays to draw (e.g. the output of Simulator.run())
            render_range (TimeRange or None): Time window for the rays; None
                draws every ray in full
            ray_color (str or None): Stroke color for every ray; None draws each
                ray in the color of the emitter it came from

        Returns:
            int: Number of rays drawn
        """
        for obj in scene.objs:
            obj.draw(self)

        drawn = 0
        for ray in rays or []:
            if self.draw_ray_segment(ray, render_range, color=ray_color, **ray_kwargs):
                drawn += 1
        return drawn

    def render_frame(self, scene, rays, t, spread=None, **ray_kwargs):
        """
        Draw one animation frame: the rays in transit during [t - spread, t + spread].

        Args:
            scene: The Scene to draw
            rays: Propagated rays
            t (float): Frame time
            spread (float or None): Half-width of the window; None uses
                scene.time_spread

        Returns:
            int: Number of rays drawn
        """
        if spread is None:
            spread = scene.time_spread
        render_range = TimeRange(t - spread, t + spread) if spread > 0 else TimeRange(t, t + 1e-12)
        return self.draw_scene(scene, rays, render_range, **ray_kwargs)

    def _clip_to_viewbox(self, p1, p2):
        """
        Clip a line segment to the viewbox boundaries (Liang-Barsky).

        Args:
            p1 (dict): Start point in Y-up coordinates
            p2 (dict): End point in Y-up coordinates

        Returns:
            tuple: (clipped_p1, clipped_p2) or (None, None) if completely outside
        """
        min_x, min_y, width, height = self.user_viewbox
        max_x = min_x + width
        max_y = min_y + height

        x1, y1 = p1['x'], p1['y']
        x2, y2 = p2['x'], p2['y']
        dx = x2 - x1
        dy = y2 - y1

        t0, t1 = 0.0, 1.0
        for p, q in ((-dx, x1 - min_x), (dx, max_x - x1), (-dy, y1 - min_y), (dy, max_y - y1)):
            if abs(p) < 1e-10:
                # Parallel to this edge
                if q < 0:
                    return None, None
            else:
                t = q / p
                if p < 0:
                    t0 = max(t0, t)
                else:
                    t1 = min(t1, t)

        if t0 > t1:
            return None, None

        return ({'x': x1 + t0 * dx, 'y': y1 + t0 * dy},
                {'x': x1 + t1 * dx, 'y': y1 + t1 * dy})

    def save(self, filename=None):
        """
        Save the SVG to a file.

        Args:
            filename (str): Output filename (default: 'frame.svg')
        """
        if filename is None:
            filename = "frame.svg"
        self.dwg.saveas(filename)

    def to_string(self):
        """Get the SVG as a string."""
        return self.dwg.tostring()
