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

import json
import copy
import uuid as uuid_module
from typing import Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from ..scene import Scene


class BaseSceneObj:
    """
    Base class for objects (optics and emitters) in the scene.

    This class provides the fundamental interface for all scene objects:
    - Deserialization from a JSON-compatible dict, with defaults
    - Serialization of the non-default properties
    - Drawing through a renderer
    """

    # Class attributes
    type: str = ''
    """The type of the object, used as the key in serialized scenes."""

    serializable_defaults: Dict[str, Any] = {}
    """
    The default values of the properties of the object which are to be serialized.
    If some property is default, it will not be serialized and will be deserialized
    to the default value.

    Points are stored as dictionaries {'x': ..., 'y': ...}, normals as
    {'dx': ..., 'dy': ...} and time ranges as {'start': ..., 'end': ...}, so a
    scene is plain JSON. Methods convert them to geometry values when needed.
    """

    is_optical: bool = False
    """Whether the object interacts with rays."""

    is_emitter: bool = False
    """Whether the object generates rays when the simulation starts."""

    def __init__(self, scene: 'Scene', json_obj: Optional[Dict[str, Any]] = None):
        """
        Initialize the base scene object.

        Args:
            scene: The scene the object belongs to.
            json_obj: The JSON object to be deserialized, if any.
        """
        self.scene = scene
        self._uuid: str = str(uuid_module.uuid4())
        self.name: Optional[str] = None

        serializable_defaults = self.__class__.serializable_defaults
        if json_obj:
            known_keys = ['type', 'name'] + list(serializable_defaults.keys())
            for key in json_obj:
                if key not in known_keys:
                    # Stored on the scene so a later, unrelated error does not
                    # hide the fact that the scene data was not understood.
                    self.scene.error = (
                        f"Unknown object key '{key}' for type '{self.__class__.type}'"
                    )
            self.name = json_obj.get('name')
        else:
            json_obj = {}

        for prop_name, default_value in serializable_defaults.items():
            if prop_name in json_obj:
                setattr(self, prop_name, copy.deepcopy(json_obj[prop_name]))
            else:
                setattr(self, prop_name, copy.deepcopy(default_value))

    @property
    def uuid(self) -> str:
        """Auto-generated unique identifier for this object instance."""
        return self._uuid

    def serialize(self) -> Dict[str, Any]:
        """
        Serializes the object to a JSON-compatible dictionary.

        Returns:
            The serialized dictionary object.
        """
        json_obj: Dict[str, Any] = {'type': self.__class__.type}
        if self.name is not None:
            json_obj['name'] = self.name

        for prop_name, default_value in self.__class__.serializable_defaults.items():
            current_value = getattr(self, prop_name)
            if json.dumps(current_value, sort_keys=True) != json.dumps(default_value, sort_keys=True):
                json_obj[prop_name] = copy.deepcopy(current_value)

        return json_obj

    def draw(self, renderer: Any) -> None:
        """
        Draw the object with the given renderer (see SVGRenderer).
        Does nothing by default.
        """
        pass

    def rotate(self, angle: float) -> bool:
        """
        Rotate the object by the given angle (radians, counter-clockwise).

        Returns:
            True if the object supports rotation, False otherwise.
        """
        return False

    def __repr__(self) -> str:
        label = f" '{self.name}'" if self.name else ""
        return f"{self.__class__.__name__}{label}"
