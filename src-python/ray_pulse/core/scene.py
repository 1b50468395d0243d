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
import uuid as uuid_module
from typing import Any, Dict, List, Optional

from .constants import DEFAULT_MAX_BOUNCES


class IdAllocator:
    """
    Hands out unique, monotonically increasing integer IDs.

    Each Scene owns one allocator; optics draw their ID from it at
    construction time. IDs are only ever compared for identity.
    """

    def __init__(self, start: int = 0) -> None:
        self._next: int = start

    def next_id(self) -> int:
        value = self._next
        self._next += 1
        return value

    @property
    def peek(self) -> int:
        """The ID the next call to next_id() will return."""
        return self._next


class Scene:
    """
    Container for scene objects and simulation settings.

    Attributes:
        objs (list): All objects in the scene, in insertion order
        optics (list): Objects that interact with rays (is_optical=True)
        emitters (list): Objects that generate rays (is_emitter=True)
        id_allocator (IdAllocator): Source of optic IDs for this scene
        max_bounces (int): Bounce cap used by the Simulator
        time_spread (float): Half-width of the per-frame render window
        error (str or None): Error message if scene setup or simulation failed
        warning (str or None): Warning message (e.g. bounce cap reached)
        name (str or None): Optional name for the scene (used in exports)
    """

    def __init__(self, max_bounces: Optional[int] = None, time_spread: float = 0.05):
        """Initialize an empty scene."""
        self.objs: List[Any] = []
        self.optics: List[Any] = []
        self.emitters: List[Any] = []
        self.id_allocator: IdAllocator = IdAllocator()
        self._max_bounces: int = DEFAULT_MAX_BOUNCES
        if max_bounces is not None:
            self.max_bounces = max_bounces
        self.time_spread: float = time_spread
        self.error: Optional[str] = None
        self.warning: Optional[str] = None
        self.name: Optional[str] = None
        self._uuid: str = str(uuid_module.uuid4())

    @property
    def max_bounces(self) -> int:
        """Get the bounce cap."""
        return self._max_bounces

    @max_bounces.setter
    def max_bounces(self, value: int) -> None:
        """Set the bounce cap with validation."""
        if int(value) != value or value < 0:
            raise ValueError(f"max_bounces must be a non-negative integer, got {value!r}")
        self._max_bounces = int(value)

    @property
    def uuid(self) -> str:
        """Unique identifier for this scene instance."""
        return self._uuid

    def get_display_name(self) -> str:
        return self.name if self.name else f"Scene_{self._uuid[:8]}"

    def next_object_id(self) -> int:
        """Allocate the next optic ID."""
        return self.id_allocator.next_id()

    def add_object(self, obj: Any) -> Any:
        """
        Add an object to the scene.

        Optical objects are also tracked in `optics` and ray sources in
        `emitters`, so the simulator does not have to filter `objs`.

        Returns:
            The object, for chaining
        """
        self.objs.append(obj)
        if getattr(obj, 'is_optical', False):
            self.optics.append(obj)
        if getattr(obj, 'is_emitter', False):
            self.emitters.append(obj)
        return obj

    def remove_object(self, obj: Any) -> None:
        if obj in self.objs:
            self.objs.remove(obj)
        if obj in self.optics:
            self.optics.remove(obj)
        if obj in self.emitters:
            self.emitters.remove(obj)

    def clear(self) -> None:
        """Remove all objects from the scene. IDs are not reused."""
        self.objs.clear()
        self.optics.clear()
        self.emitters.clear()
        self.error = None
        self.warning = None

    def get_object_by_id(self, obj_id: int) -> Any:
        """
        Find an optic by its ID.

        Raises:
            KeyError: If no optic has that ID.
        """
        for obj in self.optics:
            if getattr(obj, 'id', None) == obj_id:
                return obj
        raise KeyError(f"No optic with id {obj_id}")

    # ==================== Serialization ====================

    def serialize(self) -> Dict[str, Any]:
        """Serialize the scene to a JSON-compatible dictionary."""
        data: Dict[str, Any] = {
            'max_bounces': self.max_bounces,
            'time_spread': self.time_spread,
            'objs': [obj.serialize() for obj in self.objs],
        }
        if self.name is not None:
            data['name'] = self.name
        return data

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.serialize(), indent=indent)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Scene':
        """
        Build a scene from a serialized dictionary.

        Objects with an unknown 'type' are skipped and reported in
        `scene.error`, the same way unknown keys are reported.
        """
        from .scene_objs import get_object_class

        scene = cls(
            max_bounces=data.get('max_bounces'),
            time_spread=data.get('time_spread', 0.05),
        )
        scene.name = data.get('name')
        for obj_data in data.get('objs', []):
            obj_type = obj_data.get('type')
            obj_cls = get_object_class(obj_type)
            if obj_cls is None:
                scene.error = f"Unknown object type '{obj_type}'"
                continue
            scene.add_object(obj_cls(scene, obj_data))
        return scene

    @classmethod
    def from_json(cls, text: str) -> 'Scene':
        return cls.from_dict(json.loads(text))

    def __repr__(self) -> str:
        return (f"Scene({self.get_display_name()}, optics={len(self.optics)}, "
                f"emitters={len(self.emitters)}, max_bounces={self.max_bounces})")
