"""Entity-component core for small 3D games: matrix helpers, transforms, components, asset registries and a frame loop."""

__version__ = "0.1.0"
__all__ = ["glmath", "transform", "asset_loader", "ecs", "components", "application"]