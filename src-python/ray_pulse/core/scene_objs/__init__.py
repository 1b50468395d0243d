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

from typing import Dict, Optional, Type

from .base_scene_obj import BaseSceneObj
from .base_optic import BaseOptic
from .mirror import FlatMirror, ParabolicMirror
from .glass import Lens
from .light_source import BaseEmitter, PointEmitter, LinearEmitter

# Closed set of object types a serialized scene may contain
OBJECT_TYPES: Dict[str, Type[BaseSceneObj]] = {
    cls.type: cls
    for cls in (FlatMirror, ParabolicMirror, Lens, PointEmitter, LinearEmitter)
}


def get_object_class(type_name: Optional[str]) -> Optional[Type[BaseSceneObj]]:
    """Look up a scene object class by its serialized 'type' name."""
    if type_name is None:
        return None
    return OBJECT_TYPES.get(type_name)


__all__ = ['BaseSceneObj', 'BaseOptic', 'FlatMirror', 'ParabolicMirror', 'Lens',
           'BaseEmitter', 'PointEmitter', 'LinearEmitter', 'OBJECT_TYPES', 'get_object_class']
