# declsound

A small library for describing game sounds declaratively. You write
*behaviours* in YAML. Each behaviour says which entity tags and value
conditions it reacts to, and which node graph it plays when it starts,
while it is active and when it ends. `declsound` parses those files,
scores behaviours against an entity's tags and values, and turns node
graphs into a flat list of playback *leaves*.

## Installation

```
pip install declsound
```

To run the tests as well:

```
pip install "declsound[test]"
pytest
```

## Writing behaviours

Put files with the extension `.audio` or `.yaml` in a folder. A file holds
either one behaviour (a mapping) or a list of them:

```yaml
- id: footsteps
  bus: 1
  matchTags: [player.walking]
  matchConditions: ["speed > 0.5"]
  parameters:
    loudness: "speed * 0.8"
  onStart: step_start.wav
  onActive:
    loop:
      random:
        - step1.wav
        - step2.wav
  onEnd:
    sequence:
      volume: "0.5"
      nodes:
        - delay: "1"
        - step_stop.wav
```

These node kinds are supported:

- `sound`: a single sound file. A bare string is also a sound.
- `sequence`: plays its children one after another. A bare list is also a sequence.
- `parallel`: plays its children at the same time.
- `delay`: silence for a number of seconds, given as an expression. The
  value is cut to whole seconds when leaves are built.
- `random`: picks one child once and keeps that choice.
- `blend`: crossfades between cases along a numeric `parameter`. Cases are
  listed under `blends`, each with an `at` position and a `sound` node.
- `select`: picks the first case whose `at` pattern matches a string
  `parameter`. Cases are listed under `cases`, each with `at` and `sound`.
  A pattern may hold one `*` wildcard.
- `loop`: repeats its child. Loops nested directly inside loops collapse into one.

When the value of a node key is itself a mapping (as `sequence:` above),
that mapping may also carry `volume` and `pitch` expressions and a `loop`
key, which wraps the node in a loop. Children of such a mapping are taken
from `nodes`, `sounds`, `blends` or `cases`, or else from the first list
in it.

Malformed graphs raise `declsound.parser.ParseError`.

## Loading and matching

```python
from declsound.loader import load_behaviors_from_folder
from declsound.matching import match_score
from declsound.tags import TagMap
from declsound.values import ValueMap

behaviors = load_behaviors_from_folder("sounds/")

tags = TagMap()
tags.add_tag("player.walking")
values = ValueMap()
values.set_value("speed", 1.0)

for behavior in behaviors:
    score = match_score(behavior, tags, TagMap(), values, ValueMap())
    if score > 0:
        print(behavior.name, "matches with score", score)
```

`load_behaviors_from_folder` returns an empty list for a missing folder or
a path that is not a directory. Files that cannot be read as YAML are
logged and skipped. To parse documents that are already in memory, use
`declsound.loader.parse_behaviors`. Each result is a `BehaviorDef` with
`name`, `bus_index`, `match_tags`, `match_conditions`, `parameters`, and
the graphs `on_start`, `on_active` and `on_end`.

Tag patterns are dot-separated, and a segment written as `*` matches any
one segment. `match_score` returns `-1` when a required tag or a condition
fails. Otherwise it returns the sum of `10 + tag_specificity(pattern)`
over the required tags, where a literal segment counts 10 and a `*`
segment counts 5. Conditions have the form `key OP number`, where OP is
one of `>`, `>=`, `<`, `<=`, `==` or `!=`. The key is looked up in the
entity values first and then in the global values. A missing value
counts as 0.

`TagMap` keeps persistent and transient tags. `clear_transient()` drops
the transient ones.

## Expressions

Volume, pitch and delay values are small expressions. An expression can be a
number, a variable name, or a variable and a number joined by one of
`+ - * /`, in either order:

```python
from declsound.expression import Expression
from declsound.values import ValueMap

params = ValueMap()
params.set_value("velocity", 2.0)
Expression("velocity * 0.5").evaluate(params)  # 1.0
```

Division by zero gives `0.0`, as does any text that cannot be parsed.

## Building leaves

`declsound.leaves.build_leaves(node, params, start_sample, inherited_loop, bus, sample_rate, buffers)`
walks a node graph and returns `Leaf` records in graph order. A leaf holds
the sound node (or `None` for a delay), its buffer, its start sample, its
duration in samples, its loop flag, its bus, and the volume and pitch
expressions it inherited. `Leaf.volume(params)` and `Leaf.pitch(params)`
multiply those expressions together.

Buffers come from any object that follows the `BufferProvider` protocol.
Such an object has `get(name)` and `load(name)` methods, and each returns
an object with a `frame_count`, or `None`. Sounds whose buffer cannot be
loaded are logged and left out. `compute_duration` gives a node's length
in samples. A loop counts as 0.

## Other utilities

- `declsound.vec3.Vec3` and `declsound.quaternion.Quaternion` provide basic
  3D maths. `format_quaternion` renders a quaternion in `DisplayStyle.NICE`
  or `DisplayStyle.COMPACT` form.
- `declsound.speakers.compute_pan_mask` returns normalised gains per speaker
  for a `SpeakerLayout`, such as `SpeakerLayout.stereo()` or
  `SpeakerLayout.five_point_one()`.
- `declsound.ring_buffer.RingBuffer` is a fixed-capacity FIFO. It holds one
  item fewer than its capacity.
- `declsound.log` prints messages at or above a category's minimum level
  (`set_minimum_level`). It buffers every message for `poll_log` and can
  call a function installed with `set_log_callback`.

## What it does not do

`declsound` produces leaves but plays nothing. It has no audio device
output, no decoding of sound files, and no mixer. It also has no
per-entity state machine that moves behaviours through their start,
active and end phases over time. It has no command-line tool. To hear
anything, pass its leaves to your own audio engine.