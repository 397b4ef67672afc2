"""Named asset registries built from JSON-like descriptions."""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class AssetLoader(Generic[T]):
    """Holds assets of one kind, each created by ``factory`` from its description."""

    def __init__(self, factory: Callable[[Any], T]) -> None:
        self._factory = factory
        self._assets: dict[str, T] = {}

    def deserialize(self, data: Any) -> None:
        """Load every ``{name: description}`` entry; non-mappings are ignored."""
        if not isinstance(data, Mapping):
            return
        for name, description in data.items():
            self._assets[name] = self._factory(description)

    def get(self, name: str) -> T | None:
        """Return the asset called ``name``, or None if there is none."""
        return self._assets.get(name)

    def clear(self) -> None:
        """Release every asset (calling its ``close`` if it has one) and forget them."""
        for asset in self._assets.values():
            close = getattr(asset, "close", None)
            if callable(close):
                close()
        self._assets.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._assets

    def __len__(self) -> int:
        return len(self._assets)

    def __iter__(self) -> Iterator[str]:
        return iter(self._assets)


class AssetLibrary:
    """A set of asset loaders, loaded in the order their factories are given."""

    def __init__(self, factories: Mapping[str, Callable[[Any], Any]]) -> None:
        self._loaders: dict[str, AssetLoader[Any]] = {
            kind: AssetLoader(factory) for kind, factory in factories.items()
        }

    def loader(self, kind: str) -> AssetLoader[Any]:
        """Return the loader for ``kind``; raises KeyError if unknown."""
        try:
            return self._loaders[kind]
        except KeyError:
            raise KeyError(f"unknown asset kind: {kind!r}") from None

    def get(self, kind: str, name: str) -> Any | None:
        """Return the named asset of the given kind, or None if it is not loaded."""
        return self.loader(kind).get(name)

    def deserialize(self, asset_data: Any) -> None:
        """Load each kind present in ``asset_data``, in factory order."""
        if not isinstance(asset_data, Mapping):
            return
        for kind, loader in self._loaders.items():
            if kind in asset_data:
                loader.deserialize(asset_data[kind])

    def clear(self) -> None:
        """Clear every loader."""
        for loader in self._loaders.values():
            loader.clear()