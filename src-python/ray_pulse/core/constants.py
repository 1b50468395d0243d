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

"""
Constants used throughout the ray propagation engine.

Kept in a separate module so that geometry helpers, optics and the simulator
can share the same tolerances without circular imports.
"""

# Determinant threshold below which two segments are treated as parallel
PARALLEL_EPSILON = 1e-8

# Quadratic coefficient threshold below which a parabola intersection is
# solved as a linear equation
QUADRATIC_EPSILON = 1e-10

# Negative discriminants down to this value are clamped to a tangent hit
DISCRIMINANT_EPSILON = 1e-10

# Tolerance on the [0, length] root window of a parabola intersection
ROOT_EPSILON = 1e-8

# Vectors shorter than this cannot be normalized
ZERO_LENGTH_EPSILON = 1e-12

# Default number of propagation passes before the engine stops
DEFAULT_MAX_BOUNCES = 10

# Default number of samples used when a curved optic is drawn as a polyline
CURVE_SAMPLE_COUNT = 100
