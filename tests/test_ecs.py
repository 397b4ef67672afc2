import numpy as np
import pytest

from kartengine.ecs import Component, Entity, World


class Dummy(Component):
    ID = "Dummy"

    def __init__(self):
        self.value = None

    def deserialize(self, data):
        self.value = data.get("value")


class SpecialDummy(Dummy):
    ID = "SpecialDummy"


class Other(Component):
    ID = "Other"

    def deserialize(self, data):
        pass


def test_component_is_abstract():
    with pytest.raises(TypeError):
        Component()


def test_add_creates_entity_owned_by_world():
    world = World()
    entity = world.add()
    assert entity.world is world
    assert entity in world
    assert list(world.entities) == [entity]


def test_add_component_sets_owner_and_returns_it():
    entity = World().add()
    component = entity.add_component(Dummy)
    assert isinstance(component, Dummy)
    assert component.owner is entity
    assert entity.components == (component,)


def test_get_component_returns_first_matching():
    entity = World().add()
    other = entity.add_component(Other)
    first = entity.add_component(SpecialDummy)
    entity.add_component(Dummy)
    assert entity.get_component(Dummy) is first
    assert entity.get_component(Other) is other


def test_get_component_missing_returns_none():
    entity = World().add()
    entity.add_component(Other)
    assert entity.get_component(Dummy) is None


def test_component_at_index_and_out_of_range():
    entity = World().add()
    a = entity.add_component(Dummy)
    b = entity.add_component(Other)
    assert entity.component_at(0) is a
    assert entity.component_at(1) is b
    assert entity.component_at(2) is None


def test_delete_component_by_type_removes_first_only():
    entity = World().add()
    a = entity.add_component(Dummy)
    b = entity.add_component(Dummy)
    entity.delete_component(Dummy)
    assert entity.components == (b,)
    assert a.owner is None


def test_delete_component_missing_type_keeps_list():
    entity = World().add()
    a = entity.add_component(Other)
    entity.delete_component(Dummy)
    assert entity.components == (a,)


def test_delete_component_at():
    entity = World().add()
    a = entity.add_component(Dummy)
    b = entity.add_component(Other)
    entity.delete_component_at(0)
    assert entity.components == (b,)
    entity.delete_component_at(5)
    assert entity.components == (b,)
    assert a.owner is None


def test_remove_component_specific_instance():
    entity = World().add()
    a = entity.add_component(Dummy)
    b = entity.add_component(Dummy)
    entity.remove_component(b)
    assert entity.components == (a,)
    assert b.owner is None


def test_remove_component_not_held_is_ignored():
    entity = World().add()
    a = entity.add_component(Dummy)
    stranger = World().add().add_component(Dummy)
    entity.remove_component(stranger)
    assert entity.components == (a,)
    assert stranger.owner is not entity and stranger.owner is not None


def test_local_to_world_without_parent_is_local():
    entity = World().add()
    entity.local_transform.position = np.array([1.0, 2.0, 3.0])
    assert np.allclose(entity.local_to_world_matrix(), entity.local_transform.to_mat4())


def test_local_to_world_composes_parents():
    world = World()
    parent = world.add()
    child = world.add()
    child.parent = parent
    parent.local_transform.position = np.array([1.0, 0.0, 0.0])
    child.local_transform.position = np.array([0.0, 2.0, 0.0])
    origin = child.local_to_world_matrix() @ np.array([0.0, 0.0, 0.0, 1.0])
    assert np.allclose(origin, [1.0, 2.0, 0.0, 1.0])
    expected = parent.local_transform.to_mat4() @ child.local_transform.to_mat4()
    assert np.allclose(child.local_to_world_matrix(), expected)


def test_entity_deserialize_name_and_transform():
    entity = World().add()
    entity.deserialize({"name": "kart", "position": [1, 2, 3], "scale": [2, 2, 2]})
    assert entity.name == "kart"
    assert np.allclose(entity.local_transform.position, [1, 2, 3])
    assert np.allclose(entity.local_transform.scale, [2, 2, 2])


def test_entity_deserialize_ignores_non_mapping():
    entity = World().add()
    entity.name = "keep"
    entity.deserialize(["not", "an", "object"])
    assert entity.name == "keep"


def test_entity_deserialize_unknown_component_type_adds_nothing():
    entity = World().add()
    entity.deserialize({"name": "e", "components": [{"type": "No Such Component"}]})
    assert entity.components == ()


def test_world_deserialize_with_children():
    world = World()
    world.deserialize(
        [
            {"name": "root", "children": [{"name": "child", "children": [{"name": "leaf"}]}]},
            {"name": "alone"},
        ]
    )
    by_name = {e.name: e for e in world.entities}
    assert set(by_name) == {"root", "child", "leaf", "alone"}
    assert by_name["root"].parent is None
    assert by_name["child"].parent is by_name["root"]
    assert by_name["leaf"].parent is by_name["child"]
    assert by_name["alone"].parent is None


def test_world_deserialize_with_explicit_parent():
    world = World()
    parent = world.add()
    world.deserialize([{"name": "a"}], parent)
    child = next(e for e in world.entities if e.name == "a")
    assert child.parent is parent
    assert len(world) == 2


def test_world_deserialize_ignores_non_list():
    world = World()
    world.deserialize({"name": "x"})
    assert len(world) == 0


def test_mark_for_removal_and_delete():
    world = World()
    keep = world.add()
    gone = world.add()
    component = gone.add_component(Dummy)
    world.mark_for_removal(gone)
    assert gone in world
    world.delete_marked_entities()
    assert list(world.entities) == [keep]
    assert component.owner is None


def test_mark_for_removal_ignores_foreign_entity():
    world = World()
    mine = world.add()
    foreign = World().add()
    world.mark_for_removal(foreign)
    world.delete_marked_entities()
    assert list(world.entities) == [mine]


def test_clear_empties_world():
    world = World()
    a = world.add()
    component = a.add_component(Other)
    world.add()
    world.mark_for_removal(a)
    world.clear()
    assert len(world) == 0
    assert component.owner is None
    world.delete_marked_entities()
    assert len(world) == 0


def test_world_keeps_assets():
    assets = object()
    world = World(assets)
    assert world.assets is assets
    assert world.add().world.assets is assets


def test_entity_without_world():
    entity = Entity(None)
    assert entity.world is None
    assert entity.name == ""
    assert entity.parent is None