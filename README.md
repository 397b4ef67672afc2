# kartengine

`kartengine` is a small entity-component core for 3D games. Scenes are described as JSON-like data, which means plain dicts and lists. All matrices are 4×4 `numpy` arrays that act on column vectors.

## What it contains

- **`kartengine.glmath`** holds matrix helpers: `translate`, `scale`, `yaw_pitch_roll`, `look_at`, `perspective` and `ortho`.
  - The conventions are right-handed, with OpenGL-style clip space.
  - Invalid input raises `ValueError`. Examples are a zero aspect ratio, equal near and far planes, a zero-extent ortho box, or a zero-length view direction.
- **`kartengine.transform.Transform`** holds a position, an Euler rotation in radians and a scale.
  - The rotation axes are x = pitch, y = yaw and z = roll.
  - `to_mat4()` builds a model matrix that scales, then rotates, then translates.
  - `deserialize(data)` reads `"position"`, `"rotation"` (in degrees) and `"scale"`. Keys that are missing keep their current values.
- **`kartengine.ecs`** holds the entity system:
  - `World` owns a set of `Entity` objects. `World.deserialize(data, parent)` builds entities from a list of descriptions and recurses into each `"children"` list. Entities are removed in two steps: `mark_for_removal` marks them and `delete_marked_entities` deletes them. `clear()` empties the world.
  - `Entity` has a `name`, a `parent` and a `local_transform`, plus an ordered list of components. Use `add_component`, `get_component`, `component_at`, `delete_component`, `delete_component_at` and `remove_component` to manage them. `local_to_world_matrix()` multiplies the matrices along the chain of parents.
  - `Component` is the abstract base of every component.
- **`kartengine.components`** holds the concrete components.

  | Component | `"type"` |
  |---|---|
  | `CameraComponent` | `"Camera"` |
  | `LightComponent` | `"Light"` |
  | `ColliderComponent` | `"Collider"` |
  | `MovementComponent` | `"Movement"` |
  | `FreeCameraControllerComponent` | `"Free Camera Controller"` |
  | `InputComponent` | `"InputMovement"` |
  | `MeshRendererComponent` | `"Mesh Renderer"` |

  `deserialize_component(data, entity)` reads the `"type"` key, adds the matching component to the entity and reads the rest of the data into it. It returns `None` when the type is unknown.

  `MeshRendererComponent` resolves its `"mesh"` and `"material"` names through the `assets` library of the owning world. It looks them up under the kinds `"meshes"` and `"materials"`.
- **`kartengine.asset_loader`** holds the asset registries:
  - `AssetLoader(factory)` keeps named assets of one kind. It builds each asset by calling `factory(description)`.
  - `AssetLibrary(factories)` groups one loader per kind. `deserialize` loads the kinds in the order the factories were given. `clear()` releases every asset and calls its `close()` if it has one.
- **`kartengine.application`** holds the frame loop:
  - `Application` runs registered `State` subclasses frame by frame.
  - A state change requested with `change_state` takes effect at the end of the current frame.
  - The screenshots listed under `"screenshots"` in the configuration are taken at their frames.
  - `default_screenshot_filepath(now)` returns a timestamped path under `screenshots/`.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## A scene in a few lines

```python
from kartengine.ecs import World
from kartengine.components import CameraComponent

world = World(assets=None)
world.deserialize([
    {
        "name": "camera",
        "position": [0, 2, 10],
        "components": [{"type": "Camera", "fovY": 60, "far": 200}],
        "children": [{"name": "lamp", "components": [{"type": "Light", "lightType": "Point"}]}],
    }
])

camera_entity = next(e for e in world.entities if e.name == "camera")
camera = camera_entity.get_component(CameraComponent)
view = camera.view_matrix()
projection = camera.projection_matrix((1280, 720))
view_projection = projection @ view
```

Scene descriptions give rotations, field of view and angular velocity in degrees. The engine stores them in radians.

## Assets

```python
from kartengine.asset_loader import AssetLibrary

assets = AssetLibrary({
    "meshes": lambda path: load_mesh(path),        # your own loaders
    "materials": lambda desc: make_material(desc),
})
assets.deserialize({"meshes": {"kart": "models/kart.obj"}, "materials": {"red": {"tint": [1, 0, 0, 1]}}})
kart_mesh = assets.get("meshes", "kart")
```

To let mesh renderers find these assets, pass the library to the world as `World(assets=assets)`.

## Running states

Subclass `State` and override the `on_*` hooks you need. The base hooks keep a small record of what has happened: `initialized`, `frames_drawn`, `elapsed`, `pressed_keys`, `cursor_position` and so on. Call `super()` in your overrides to keep that record up to date.

```python
from kartengine.application import Application, State

class Race(State):
    def on_draw(self, delta_time):
        super().on_draw(delta_time)
        ...

app = Application(
    {"window": {"title": "Kart", "size": {"width": 1280, "height": 720}, "fullscreen": False}},
    clock=None,
    screenshot=None,
)
app.register_state("race", Race)
app.change_state("race")
app.run(run_for_frames=100)
```

The two callbacks are optional:

- `clock` returns the current time in seconds. It defaults to `time.monotonic`.
- `screenshot(path)` saves the current frame and returns whether it succeeded. Without it, every requested screenshot is reported as failed.

If `run_for_frames` is `0`, the loop runs until `close()` is called. `window_configuration()` reads the window title, size and full-screen flag from the configuration.

## What it does not do

`kartengine` does not open a window, create a graphics context or draw anything. In particular:

- It has no renderer, shader, texture, sampler, mesh or material code. Asset kinds are only whatever your factories build.
- It does not read a keyboard or a mouse. The `State` input hooks run only when your own code calls them.
- It draws no on-screen GUI.
- It cannot save images itself. Screenshots go through the `screenshot` callback you supply.
- It has no command-line program.