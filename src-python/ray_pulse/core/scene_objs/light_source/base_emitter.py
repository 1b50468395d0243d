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

from typing import Dict, Any, List, Optional, Union, TYPE_CHECKING

from ..base_scene_obj import BaseSceneObj
from ...ray import Ray, TimeRange

if TYPE_CHECKING:
    from ...scene import Scene


class BaseEmitter(BaseSceneObj):
    """
    Base class for ray emitters.

    An emitter is a pure function of its configuration: generate_rays()
    always returns the same rays for the same settings, so a scene can be
    regenerated from scratch whenever anything changes.

    Subclasses must store their time window in a `time_range` property
    ({'start': ..., 'end': ...}) and implement generate_rays().
    """

    is_emitter = True

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(scene, json_obj)

    def generate_rays(self) -> List[Ray]:
        """
        Generate the initial rays of this emitter.

        Raises:
            ValueError: If the configured time range or ray length is invalid.
        """
        raise NotImplementedError

    def on_simulation_start(self) -> List[Ray]:
        """Called by the Simulator before propagation starts."""
        return self.generate_rays()

    def get_time_range(self) -> TimeRange:
        """The time window shared by all generated rays."""
        return TimeRange.coerce(self.time_range)

    def set_time_range(self, time_range: Union[TimeRange, Dict[str, float]]) -> None:
        self.time_range = TimeRange.coerce(time_range).to_dict()
