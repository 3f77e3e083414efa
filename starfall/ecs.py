"""
Entity Registry
================
Entities are integer ids; components live in one dict per component type.

Removal is mark-and-compact: destroy_entity() only marks an entity,
queries skip marked entities at once, and process_dead_entities()
compacts the stores between ticks. Queries iterate a snapshot of ids
in creation order, so systems may create or destroy entities while
iterating.
"""

from typing import Dict, List, Type, TypeVar, Optional, Iterator, Tuple, Any


C = TypeVar('C')


class World:
    """
    Registry of all live entities of one game session.

    Entity ids are assigned monotonically and never reused within the
    lifetime of a World.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        # dicts keep insertion order, which is creation order for ids
        self._entities: Dict[int, None] = {}
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Dict[int, None] = {}

    def create_entity(self) -> int:
        """Allocate the next entity id."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities[entity_id] = None
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction (compacted at end of tick)."""
        if entity_id in self._entities:
            self._dead_entities[entity_id] = None

    def process_dead_entities(self) -> int:
        """Remove all entities marked for destruction. Returns how many."""
        removed = 0
        for entity_id in self._dead_entities:
            if entity_id in self._entities:
                del self._entities[entity_id]
                for component_store in self._components.values():
                    component_store.pop(entity_id, None)
                removed += 1
        self._dead_entities.clear()
        return removed

    def clear(self) -> None:
        """Drop every entity. Ids keep counting up."""
        self._entities.clear()
        self._components.clear()
        self._dead_entities.clear()

    def add_component(self, entity_id: int, component: Any) -> None:
        """Attach a component, replacing one of the same type."""
        component_type = type(component)
        if component_type not in self._components:
            self._components[component_type] = {}
        self._components[component_type][entity_id] = component

    def remove_component(self, entity_id: int, component_type: Type[C]) -> None:
        """Detach a component; missing ones are ignored."""
        store = self._components.get(component_type)
        if store is not None:
            store.pop(entity_id, None)

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Component of the given type, or None."""
        store = self._components.get(component_type)
        if store is None:
            return None
        return store.get(entity_id)

    def has_component(self, entity_id: int, component_type: Type) -> bool:
        """True when the entity carries a component of this type."""
        store = self._components.get(component_type)
        return store is not None and entity_id in store

    def has_components(self, entity_id: int, *component_types: Type) -> bool:
        """True when the entity carries every listed component type."""
        return all(self.has_component(entity_id, ct) for ct in component_types)

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for all live entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        creation order. An entity destroyed or stripped of a component
        while the query runs is not yielded afterwards.
        """
        if not component_types:
            return

        first_store = self._components.get(component_types[0])
        if not first_store:
            return

        candidates: List[int] = sorted(first_store)
        for entity_id in candidates:
            if entity_id in self._dead_entities:
                continue
            components = []
            for component_type in component_types:
                store = self._components.get(component_type)
                if store is None or entity_id not in store:
                    break
                components.append(store[entity_id])
            else:
                yield (entity_id,) + tuple(components)

    def get_entities_with(self, *component_types: Type) -> Iterator[int]:
        """Ids of live entities carrying every listed component type."""
        for result in self.query(*component_types):
            yield result[0]

    def count(self, *component_types: Type) -> int:
        """Number of live entities having all specified components."""
        return sum(1 for _ in self.query(*component_types))

    def entity_count(self) -> int:
        """Entities created and not yet marked dead."""
        return len(self._entities) - len(self._dead_entities)

    def is_alive(self, entity_id: int) -> bool:
        """Live means created, not cleared and not marked dead."""
        return entity_id in self._entities and entity_id not in self._dead_entities

    @property
    def next_entity_id(self) -> int:
        return self._next_entity_id
