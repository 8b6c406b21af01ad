"""Node graph describing how sounds are combined and played."""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .expression import Expression
from .log import LogCategory, LogLevel, log_message
from .matching import pattern_match

_rng = random.Random()

BlendWeights = tuple[tuple[Optional["Node"], float], tuple[Optional["Node"], float]]


class NodeType(Enum):
    """Kind of a node in a sound graph."""

    ROOT = auto()
    SOUND = auto()
    SEQUENCE = auto()
    PARALLEL = auto()
    DELAY = auto()
    RANDOM = auto()
    BLEND = auto()
    SELECT = auto()
    LOOP = auto()
    REFERENCE = auto()


class Node:
    """Base graph node with children and volume/pitch modifiers."""

    def __init__(self) -> None:
        self.type = NodeType.ROOT
        self.children: list[Node] = []
        self.volume = Expression("1.0")
        self.pitch = Expression("1.0")
        self.fade_in = 0.0
        self.fade_out = 0.0
        self.radius = 20.0

    def _copy_common(self, dst: Node) -> None:
        dst.type = self.type
        dst.volume = self.volume
        dst.pitch = self.pitch
        dst.fade_in = self.fade_in
        dst.fade_out = self.fade_out

    def clone(self) -> Node:
        """Deep copy of this node and its children."""
        node = type(self)()
        self._copy_common(node)
        node.children = [child.clone() for child in self.children]
        return node

    def add_child(self, child: Node) -> None:
        self.children.append(child)

    def describe(self) -> list[str]:
        """Log the node tree and return the logged lines in order."""
        line = f"Node: {type(self).__name__}"
        log_message(line, LogCategory.GENERAL, LogLevel.DEBUG)
        lines = [line]
        for child in self.children:
            lines.extend(child.describe())
        return lines

    def __repr__(self) -> str:
        return f"{type(self).__name__}(children={len(self.children)})"


class SoundNode(Node):
    """Plays a single sound file."""

    def __init__(self, sound: str = "") -> None:
        super().__init__()
        self.type = NodeType.SOUND
        self.sound = sound

    def clone(self) -> SoundNode:
        node = SoundNode(self.sound)
        self._copy_common(node)
        return node

    def describe(self) -> list[str]:
        line = f"SoundNode! - {self.sound}"
        log_message(line, LogCategory.GENERAL, LogLevel.DEBUG)
        return [line]

    def __repr__(self) -> str:
        return f"SoundNode({self.sound!r})"


class SequenceNode(Node):
    """Plays its children one after another."""

    def __init__(self) -> None:
        super().__init__()
        self.type = NodeType.SEQUENCE


class ParallelNode(Node):
    """Plays its children at the same time."""

    def __init__(self) -> None:
        super().__init__()
        self.type = NodeType.PARALLEL


class DelayNode(Node):
    """Silence lasting the number of seconds given by an expression."""

    def __init__(self, expression: str) -> None:
        super().__init__()
        self.type = NodeType.DELAY
        self.delay_expr = Expression(expression)

    def clone(self) -> DelayNode:
        node = DelayNode(self.delay_expr.text)
        self._copy_common(node)
        return node


class RandomNode(Node):
    """Picks one child at random, once, and keeps that choice."""

    def __init__(self) -> None:
        super().__init__()
        self.type = NodeType.RANDOM
        self.choice = -1

    def clone(self) -> RandomNode:
        node = RandomNode()
        self._copy_common(node)
        node.children = [child.clone() for child in self.children]
        node.choice = self.choice
        return node

    def pick_once(self) -> int:
        """Index of the chosen child; 0 when there are no children."""
        if self.choice < 0 and self.children:
            self.choice = _rng.randrange(len(self.children))
        return max(self.choice, 0)


@dataclass
class BlendPoint:
    """A blend child placed at a parameter position."""

    at: float
    node: Node


class BlendNode(Node):
    """Crossfades between neighbouring children according to a parameter."""

    def __init__(self) -> None:
        super().__init__()
        self.type = NodeType.BLEND
        self.parameter = ""
        self.blends: list[BlendPoint] = []

    def clone(self) -> BlendNode:
        node = BlendNode()
        self._copy_common(node)
        node.parameter = self.parameter
        node.blends = [BlendPoint(p.at, p.node.clone()) for p in self.blends]
        return node

    def add_case(self, at: float, child: Node) -> None:
        self.blends.append(BlendPoint(at, child))

    def weights(self, x: float) -> BlendWeights:
        """The two nodes surrounding ``x`` and their linear weights."""
        empty: BlendWeights = ((None, 0.0), (None, 0.0))
        if not self.blends:
            return empty
        first, last = self.blends[0], self.blends[-1]
        if x <= first.at:
            return ((first.node, 1.0), (None, 0.0))
        if x >= last.at:
            return ((last.node, 1.0), (None, 0.0))
        for a, b in zip(self.blends, self.blends[1:]):
            if a.at <= x < b.at:
                t = (x - a.at) / (b.at - a.at)
                return ((a.node, 1.0 - t), (b.node, t))
        return empty


@dataclass
class SelectOption:
    """A select child chosen when the parameter matches ``pattern``."""

    pattern: str
    node: Node


class SelectNode(Node):
    """Chooses a child whose pattern matches a string parameter."""

    def __init__(self) -> None:
        super().__init__()
        self.type = NodeType.SELECT
        self.parameter = ""
        self.options: list[SelectOption] = []
        self.default_node: Optional[Node] = None

    def clone(self) -> SelectNode:
        node = SelectNode()
        self._copy_common(node)
        node.parameter = self.parameter
        node.options = [SelectOption(o.pattern, o.node.clone()) for o in self.options]
        if self.default_node is not None:
            node.default_node = self.default_node.clone()
        return node

    def add_case(self, pattern: str, child: Node) -> None:
        self.options.append(SelectOption(pattern, child))

    def pick(self, value: str) -> Optional[Node]:
        """First option matching ``value``, else the default node."""
        for option in self.options:
            if pattern_match(option.pattern, value):
                return option.node
        return self.default_node


class LoopNode(Node):
    """Repeats its single child until stopped."""

    def __init__(self, child: Node) -> None:
        super().__init__()
        self.type = NodeType.LOOP
        self.children = [child]

    def child(self) -> Node:
        return self.children[0]

    def clone(self) -> LoopNode:
        node = LoopNode(self.child().clone())
        self._copy_common(node)
        return node


class ReferenceNode(Node):
    """Placeholder standing for another node identified by name."""

    def __init__(self, target_id: str) -> None:
        super().__init__()
        self.type = NodeType.REFERENCE
        self.target_id = target_id
        self.target: Optional[Node] = None

    def resolve(self, target: Node) -> None:
        self.target = target

    def clone(self) -> ReferenceNode:
        """Copy holding the same id; the resolved target is not carried over."""
        node = ReferenceNode(self.target_id)
        self._copy_common(node)
        return node