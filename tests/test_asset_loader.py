import pytest

from kartengine.asset_loader import AssetLibrary, AssetLoader


class Resource:
    def __init__(self, description):
        self.description = description
        self.closed = False

    def close(self):
        self.closed = True


def test_deserialize_creates_one_asset_per_entry():
    loader = AssetLoader(Resource)
    loader.deserialize({"white": "textures/white.png", "polka": "textures/polka.png"})
    assert len(loader) == 2
    assert loader.get("white").description == "textures/white.png"
    assert sorted(loader) == ["polka", "white"]


def test_get_missing_returns_none():
    loader = AssetLoader(Resource)
    assert loader.get("missing") is None


def test_non_mapping_data_is_ignored():
    loader = AssetLoader(Resource)
    loader.deserialize(["a", "b"])
    assert len(loader) == 0


def test_redefining_a_name_replaces_the_asset():
    loader = AssetLoader(Resource)
    loader.deserialize({"a": 1})
    loader.deserialize({"a": 2})
    assert loader.get("a").description == 2
    assert len(loader) == 1


def test_clear_closes_and_forgets_assets():
    loader = AssetLoader(Resource)
    loader.deserialize({"a": 1})
    asset = loader.get("a")
    loader.clear()
    assert asset.closed is True
    assert "a" not in loader


def test_library_loads_kinds_in_factory_order():
    order = []
    library = AssetLibrary(
        {
            "shaders": lambda d: order.append("shaders") or d,
            "materials": lambda d: order.append("materials") or d,
        }
    )
    library.deserialize({"materials": {"m": 1}, "shaders": {"s": 2}})
    assert order == ["shaders", "materials"]
    assert library.get("materials", "m") == 1
    assert library.get("shaders", "s") == 2


def test_library_factory_can_see_earlier_kinds():
    library = None

    def make_material(desc):
        return ("material", library.get("shaders", desc["shader"]))

    library = AssetLibrary({"shaders": lambda d: d, "materials": make_material})
    library.deserialize({"shaders": {"basic": "vs+fs"}, "materials": {"m": {"shader": "basic"}}})
    assert library.get("materials", "m") == ("material", "vs+fs")


def test_library_skips_absent_kinds_and_non_mappings():
    library = AssetLibrary({"meshes": Resource})
    library.deserialize("not an object")
    library.deserialize({"textures": {"t": "x"}})
    assert len(library.loader("meshes")) == 0


def test_library_unknown_kind_raises():
    library = AssetLibrary({"meshes": Resource})
    with pytest.raises(KeyError):
        library.get("sounds", "x")


def test_library_clear_empties_all_loaders():
    library = AssetLibrary({"meshes": Resource, "samplers": Resource})
    library.deserialize({"meshes": {"kart": "kart.obj"}, "samplers": {"s": {}}})
    kart = library.get("meshes", "kart")
    library.clear()
    assert kart.closed is True
    assert library.get("meshes", "kart") is None
    assert library.get("samplers", "s") is None