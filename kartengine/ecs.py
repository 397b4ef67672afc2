"""Entities, the components they own, and the world that owns the entities."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, KeysView, Mapping, Sequence
from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

import numpy as np

from .transform import Transform

if TYPE_CHECKING:
    from .asset_loader import AssetLibrary

C = TypeVar("C", bound="Component")


class Component(ABC):
    """A data container attached to an entity; it defines the entity's role."""

    ID: ClassVar[str] = "Component"
    owner: Entity | None = None

    @abstractmethod
    def deserialize(self, data: Any) -> None:
        """Read the component's data from a JSON-like object."""


class Entity:
    """A named node in the world with a transform and a list of components."""

    def __init__(self, world: World | None) -> None:
        self.world = world
        self.name = ""
        self.parent: Entity | None = None
        self.local_transform = Transform()
        self._components: list[Component] = []

    @property
    def components(self) -> tuple[Component, ...]:
        """The components of this entity, in the order they were added."""
        return tuple(self._components)

    def local_to_world_matrix(self) -> np.ndarray:
        """Transformation from this entity's local space to world space."""
        matrix = self.local_transform.to_mat4()
        if self.parent is not None:
            return self.parent.local_to_world_matrix() @ matrix
        return matrix

    def deserialize(self, data: Any) -> None:
        """Read the name, transform and components from a JSON-like object."""
        if not isinstance(data, Mapping):
            return
        self.name = data.get("name", self.name)
        self.local_transform.deserialize(data)
        components = data.get("components")
        if isinstance(components, Sequence) and not isinstance(components, (str, bytes)):
            from .components import deserialize_component

            for component_data in components:
                deserialize_component(component_data, self)

    def add_component(self, component_type: type[C]) -> C:
        """Create a component of the given type, attach it and return it."""
        component = component_type()
        component.owner = self
        self._components.append(component)
        return component

    def get_component(self, component_type: type[C]) -> C | None:
        """Return the first component that is an instance of the type, or None."""
        return next((c for c in self._components if isinstance(c, component_type)), None)

    def component_at(self, index: int) -> Component | None:
        """Return the component at ``index``, or None if there is none."""
        if 0 <= index < len(self._components):
            return self._components[index]
        return None

    def delete_component(self, component_type: type[Component]) -> None:
        """Remove the first component that is an instance of the type, if any."""
        found = self.get_component(component_type)
        if found is not None:
            self._detach(found)

    def delete_component_at(self, index: int) -> None:
        """Remove the component at ``index``, if there is one."""
        found = self.component_at(index)
        if found is not None:
            self._detach(found)

    def remove_component(self, component: Component) -> None:
        """Remove the given component if this entity holds it."""
        if any(c is component for c in self._components):
            self._detach(component)

    def _detach(self, component: Component) -> None:
        self._components = [c for c in self._components if c is not component]
        component.owner = None

    def _destroy(self) -> None:
        for component in self._components:
            component.owner = None
        self._components.clear()

    def __repr__(self) -> str:
        return f"Entity(name={self.name!r}, components={len(self._components)})"


class World:
    """Holds a set of entities and those awaiting removal."""

    def __init__(self, assets: AssetLibrary | None = None) -> None:
        self.assets = assets
        self._entities: dict[Entity, None] = {}
        self._marked: dict[Entity, None] = {}

    @property
    def entities(self) -> KeysView[Entity]:
        """A read-only view of the entities in this world."""
        return self._entities.keys()

    def deserialize(self, data: Any, parent: Entity | None = None) -> None:
        """Add the entities described by a JSON-like list, recursing into children."""
        if not isinstance(data, Sequence) or isinstance(data, (str, bytes)):
            return
        for entity_data in data:
            entity = self.add()
            entity.parent = parent
            entity.deserialize(entity_data)
            if isinstance(entity_data, Mapping) and "children" in entity_data:
                self.deserialize(entity_data["children"], entity)

    def add(self) -> Entity:
        """Create a new entity owned by this world and return it."""
        entity = Entity(self)
        self._entities[entity] = None
        return entity

    def mark_for_removal(self, entity: Entity) -> None:
        """Mark an entity of this world to be removed by ``delete_marked_entities``."""
        if entity in self._entities:
            self._marked[entity] = None

    def delete_marked_entities(self) -> None:
        """Remove and destroy every entity marked for removal."""
        for entity in self._marked:
            self._entities.pop(entity, None)
            entity._destroy()
        self._marked.clear()

    def clear(self) -> None:
        """Destroy every entity and empty the world."""
        for entity in self._entities:
            entity._destroy()
        self._entities.clear()
        self._marked.clear()

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._entities)

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, entity: object) -> bool:
        return entity in self._entities