# eventviz

`eventviz` is a small engine for timed visual events. An event has a
location, a size, colours and a lifetime. Breakpoint envelopes animate its
values over time. Mappers route incoming control values, such as meter
readings in the range 0–1, to named "link taps" on events. Drawing goes to a
`Canvas` (in `eventviz.canvas`) that records draw commands as a list. The
canvas has no tie to any window system.

The package has no dependencies outside the standard library.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Building blocks

- `eventviz.color.Color` is an immutable RGBA colour. Each channel is clamped
  to 0–255. Adding two colours adds the red, green and blue channels with
  saturation and keeps the alpha of the left operand. `with_alpha` returns a
  copy with a new alpha. `BLACK`, `WHITE` and `RED` are ready-made colours.
- `eventviz.clock.Clock` reports elapsed milliseconds (`millis`) and a frame
  number (`frame`) derived from its frame rate. `ManualClock` moves only when
  you call `advance(ms)` and `step_frame(count)`, which makes runs
  deterministic.
- `eventviz.env.Env` is a breakpoint envelope. It takes a list of levels and
  a list of segment times in milliseconds; there is one more level than
  times. Each `process()` call computes the current value and writes it
  through a `Target`. A target is an attribute or an item, stored as a float,
  an int, or the alpha of a colour (`TargetKind`). An envelope can loop
  (`set_loop`) and can take an easing function. After `enable_save`, it
  records its values. `export_text` and `write_export` turn the recording
  into `parent_id,v0,v1,...`.
- `eventviz.mapper.LinkTap` scales a 0–1 value into its range, applies its
  weight and writes the result to its target. A `Mapper` forwards a value to
  its tap when the address matches its `listen_id`. In
  `MapperMode.EXPONENTIAL` the value is squared first.
- `eventviz.event.Event` holds colours, geometry, envelopes and link taps.
  - `update()` runs the envelopes and drops those that have finished.
  - Once `active` is set and the clock passes `end_time`, the event finishes
    and `update()` returns False.
  - `set_envelope` shapes a value (alpha by default) with attack, sustain and
    release, and sets the end time to match. It does not set `active`.
  - `delete_with_fade` fades alpha to zero and does set `active`.
  - `check_borders` keeps the event inside a given width and height and
    reverses its direction at the edges.
  - `custom_one` to `custom_five` are hooks that each kind of event fills in.
  - `EventList` updates and displays its events from last to first, and
    removes those that have finished.
- `eventviz.noise.noise(*args)` is smooth, deterministic value noise in 0..1
  for one to four coordinates.

## Built-in events

- `AlphaBlackScreen` (`eventviz.alpha_black_screen`) paints a translucent
  black rectangle, or a circular gradient, so earlier frames leave trails.
  While it is active, the canvas background is not wiped automatically. At
  full alpha it switches itself off and clears the canvas.
- `MeshEvent` (`eventviz.mesh`) shows a box `Mesh` and exports it as ASCII
  PLY. Files go to `meshExport/f<frame>/m<id>.ply`, either once
  (`custom_two`) or every frame (`custom_one`).
- `DivisionGrid` (`eventviz.division_grid`) cuts a padded square into
  `Poly` pieces again and again, along their longest sides. A few pieces are
  blocked from further cutting. Each piece is extruded to a noise-driven
  height. Single pieces can get their own alpha envelopes
  (`add_env_random_poly`, `add_env_selected_poly`).
- `NoiseLines` (`eventviz.noise_lines`) draws horizontal or vertical lines
  placed by `noise`. It fades in and out over its duration.
- `VecField` (`eventviz.vec_field`) is a noise-driven vector field on a
  density grid. It draws as lines, circles, a hiding rectangle or a texture.
  In `UNDERLAYING` and `VIDEO` mode the texture comes from a callback you
  supply.
- `Mirror` (`eventviz.mirror`) swings between -45 and 45 degrees. When
  `move` is set it drifts up and down. Screen capture comes from an optional
  `grabber` callback.
- `VideoPlayer` (`eventviz.video_player`) plays a `FramePlayer`, which is a
  list of equally sized RGB frames held in memory. It draws them whole, as
  seven shuffled vertical `Bin` strips, or as ASCII text (`ascii_lines`).
  Bins can be switched, faded, mirrored, dilated, greyed and hidden.

## Example

```python
from eventviz.canvas import Canvas
from eventviz.clock import ManualClock
from eventviz.event import Event, EventList

clock = ManualClock()
events = EventList()

flash = Event(clock=clock)
flash.set_envelope(100, 500, 400, None, (0, 255))  # fade alpha in, hold, out
flash.active = True                                 # let it end with the envelope
events.add(flash)

canvas = Canvas()
for _ in range(60):
    clock.advance(17)
    clock.step_frame(1)
    events.update_all()
    events.display_all(canvas)

print(len(canvas.commands), flash.colors[0].a)
```

## What it does not do

`eventviz` does not open a window or render pixels. `Canvas` only records
commands, and drawing them is up to you. It does not decode image or video
files: frames are passed in as nested lists. It has no command-line program
and no network message interface for creating or steering events remotely.
Events are created and changed through the Python API.