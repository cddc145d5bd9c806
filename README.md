# orbitui

Building blocks for user-interface frameworks, in pure Python with no
third-party dependencies:

- **Reactive state**: signals, effects and computed values (`orbitui.reactive`,
  `orbitui.tracking`), and a type-keyed state container with subscribers
  (`orbitui.state`).
- **Styling**: a small line-based CSS parser with selector specificity and
  component scoping (`orbitui.stylesheet`), and typed style properties with
  CSS value parsing, rule application and inheritance (`orbitui.style`).
- **Camera maths**: a perspective camera, view and projection matrices, a
  view-projection uniform and a first-person controller (`orbitui.camera`).
- **Rendering interfaces**: render contexts with dirty tracking, render
  statistics, quality levels, a `Renderer` base class and a composite renderer
  that runs a 3D renderer and then a 2D renderer (`orbitui.renderer`).

## Installation

```
pip install orbitui
```

Python 3.10 or later is required.

## Reactive state with dependency tracking

`orbitui.tracking` records which signals an effect reads while it runs, and
re-runs the effect when one of them changes to a different value.

```python
from orbitui.tracking import ReactiveScope, create_signal, create_computed, create_effect

scope = ReactiveScope()
count = create_signal(0, scope)
double = create_computed(lambda: count.get() * 2, scope)

create_effect(lambda: print("count is", count.get()), scope)  # runs once now

count.set(5)           # re-runs the effect
print(double.get())    # 10
count.set(5)           # unchanged value: nothing re-runs
```

## Untracked reactive primitives

`orbitui.reactive` has thread-safe signals, effects that run once on creation
and can be run again with `run()`, and computed values that are evaluated on
first access and then cached. Nothing is re-run automatically.

```python
from orbitui.reactive import ReactiveScope, create_signal, create_computed

scope = ReactiveScope()
signal = create_signal(scope, 10)
signal.update(lambda v: v + 5)
computed = create_computed(scope, lambda: signal.get() * 2)
print(computed.get())  # 30
```

## State container

`StateContainer` keeps one value per Python type: two states created from
values of the same type share a single slot.

```python
from orbitui.state import StateContainer

container = StateContainer()
counter = container.create(0)
counter.on_change(lambda value: print("counter ->", value))
counter.update(lambda v: v + 1)   # prints "counter -> 1"
```

`container.computed(compute, dependencies)` stores `compute()` and recomputes
it whenever a value of one of the dependency types is set.

## Stylesheets

The parser expects the selector line (ending in `{`), each declaration and the
closing `}` on lines of their own.

```python
from orbitui.stylesheet import Stylesheet

sheet = Stylesheet.parse("""
.button {
    background-color: blue;
    color: white;
}
""", scoped=True)

rule = sheet.rules[0]
rule.apply_scoping("component-123")
print(rule.selectors[0].selector)  # .component-123 .button
print(rule.specificity)            # Specificity(a=0, b=2, c=0)
```

Parsed rules can be applied to a `Style`, in order of specificity and then
source order:

```python
from orbitui.style import Style, apply_css_rules

style = Style()
apply_css_rules(style, sheet.rules)
print(style.color, style.background_color)
```

The properties understood are `color`, `background-color`, `opacity`,
`font-size`, `font-weight`, `font-family`, `text-align`, `border-radius` and
`z-index`; others are ignored. `inherit_style` copies font and text properties
from a parent style where they are unset. Invalid values raise `StyleError`.

## Camera

```python
from orbitui.camera import Camera, CameraController

camera = Camera(
    position=(0.0, 1.0, 2.0),
    target=(0.0, 0.0, 0.0),
    up=(0.0, 1.0, 0.0),
    aspect=16 / 9,
    fovy=45.0,
    znear=0.1,
    zfar=100.0,
)
matrix = camera.build_view_projection_matrix()  # column-major 4x4 tuple

controller = CameraController(camera, speed=2.0)
controller.process_keyboard("w", True)
controller.update(0.016)
```

Keys `w`/`s`/`a`/`d` (or the arrow keys) and `q`/`e` move the camera;
`process_mouse` rotates it while `set_looking(True)` is in effect.
`CameraUniform.to_bytes()` packs the matrix as sixteen little-endian floats.

## Rendering

```python
from orbitui.renderer import RenderContext

context = RenderContext(800, 600)
context.mark_dirty(42)
print(context.dirty_components())  # [42]
```

Subclass `orbitui.renderer.Renderer`, implementing `render` and `name`, to plug
in a drawing back end; combine two renderers with
`CompositeRenderer(renderer_2d, renderer_3d)`.

## What the package does not do

It draws nothing and opens no windows. No drawing back end is included:
`create_renderer` raises `RendererError` for every `RendererType`, and so does
`CompositeRenderer.create_default()`. Rendering happens only through
`Renderer` subclasses that you supply. The camera module computes matrices and
uniform bytes but does not talk to a GPU.

## Running the tests

```
pip install "orbitui[test]"
pytest
```