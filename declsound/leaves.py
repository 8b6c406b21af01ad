"""Flattening node graphs into timed playback instructions."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional, Protocol

from .expression import Expression
from .log import LogCategory, LogLevel, log_message
from .nodes import (
    BlendNode,
    DelayNode,
    LoopNode,
    Node,
    NodeType,
    RandomNode,
    ReferenceNode,
    SelectNode,
    SoundNode,
)
from .values import ValueMap


class _AudioBuffer(Protocol):
    @property
    def frame_count(self) -> int: ...


class BufferProvider(Protocol):
    """Source of decoded audio buffers, looked up by sound name."""

    def get(self, name: str) -> Optional[_AudioBuffer]:
        """An already loaded buffer, or None."""
        ...

    def load(self, name: str) -> Optional[_AudioBuffer]:
        """A buffer, loading it first if needed; None if it cannot be had."""
        ...


@dataclass
class Leaf:
    """A single playback instruction: a sound, or a silent delay."""

    src: Optional[SoundNode]
    buffer: Optional[_AudioBuffer]
    start_sample: int
    duration_samples: int
    loop: bool
    bus: int
    vol_exprs: list[Expression] = field(default_factory=list)
    pitch_exprs: list[Expression] = field(default_factory=list)

    def volume(self, params: ValueMap) -> float:
        """Product of every volume expression on the path to this leaf."""
        return math.prod(e.evaluate(params) for e in self.vol_exprs)

    def pitch(self, params: ValueMap) -> float:
        """Product of every pitch expression on the path to this leaf."""
        return math.prod(e.evaluate(params) for e in self.pitch_exprs)


def _samples_from_seconds(expr: Expression, params: ValueMap, sample_rate: int) -> int:
    # Seconds are truncated to whole seconds before scaling.
    whole_seconds = int(expr.evaluate(params))
    return max(whole_seconds, 0) * sample_rate


def _longest(children: list[Node], params: ValueMap, sample_rate: int, buffers: BufferProvider) -> int:
    return max(
        (compute_duration(child, params, sample_rate, buffers) for child in children),
        default=0,
    )


def compute_duration(
    node: Node, params: ValueMap, sample_rate: int, buffers: BufferProvider
) -> int:
    """Length of a node in samples, as used to offset sequence children.

    Random, blend and select nodes count their longest child; a loop has
    no finite length and counts as 0.
    """
    kind = node.type
    if kind is NodeType.SOUND:
        assert isinstance(node, SoundNode)
        buffer = buffers.get(node.sound)
        if buffer is not None:
            return int(buffer.frame_count)
        log_message(
            "[ComputeDuration] could not get bufferlength", LogCategory.LEAF, LogLevel.WARNING
        )
        return 0
    if kind is NodeType.DELAY:
        assert isinstance(node, DelayNode)
        return _samples_from_seconds(node.delay_expr, params, sample_rate)
    if kind is NodeType.SEQUENCE:
        return sum(
            compute_duration(child, params, sample_rate, buffers) for child in node.children
        )
    if kind in (NodeType.PARALLEL, NodeType.RANDOM, NodeType.BLEND, NodeType.SELECT):
        return _longest(node.children, params, sample_rate, buffers)
    if kind is NodeType.LOOP:
        return 0
    if kind is NodeType.REFERENCE:
        assert isinstance(node, ReferenceNode)
        if node.target is not None:
            return compute_duration(node.target, params, sample_rate, buffers)
        return 0
    log_message("[ComputeDuration]: Unknown node type", LogCategory.LEAF, LogLevel.WARNING)
    return 0


def build_leaves(
    node: Optional[Node],
    params: ValueMap,
    start_sample: int,
    inherited_loop: bool,
    bus: int,
    sample_rate: int,
    buffers: BufferProvider,
) -> list[Leaf]:
    """Walk a node graph and return the leaves it plays, in graph order."""
    out: list[Leaf] = []
    _build(node, params, start_sample, inherited_loop, (), (), bus, out, sample_rate, buffers)
    return out


def _build(
    node: Optional[Node],
    params: ValueMap,
    start_sample: int,
    inherited_loop: bool,
    inherited_vols: tuple[Expression, ...],
    inherited_pitches: tuple[Expression, ...],
    bus: int,
    out: list[Leaf],
    sample_rate: int,
    buffers: BufferProvider,
) -> None:
    if node is None:
        return

    vols = (*inherited_vols, node.volume)
    pitches = (*inherited_pitches, node.pitch)

    def recurse(child: Optional[Node], start: int, loop: bool = inherited_loop) -> None:
        _build(child, params, start, loop, vols, pitches, bus, out, sample_rate, buffers)

    kind = node.type
    if kind is NodeType.SOUND:
        assert isinstance(node, SoundNode)
        buffer = buffers.load(node.sound)
        if buffer is None:
            log_message(
                f"Missing audio buffer: {node.sound}", LogCategory.LEAF, LogLevel.WARNING
            )
            return
        out.append(
            Leaf(node, buffer, start_sample, int(buffer.frame_count), inherited_loop, bus,
                 list(vols), list(pitches))
        )
    elif kind is NodeType.DELAY:
        assert isinstance(node, DelayNode)
        duration = _samples_from_seconds(node.delay_expr, params, sample_rate)
        out.append(
            Leaf(None, None, start_sample, duration, inherited_loop, bus,
                 list(vols), list(pitches))
        )
    elif kind is NodeType.SEQUENCE:
        offset = start_sample
        for child in node.children:
            recurse(child, offset)
            offset += compute_duration(child, params, sample_rate, buffers)
    elif kind is NodeType.PARALLEL:
        for child in node.children:
            recurse(child, start_sample)
    elif kind is NodeType.RANDOM:
        assert isinstance(node, RandomNode)
        if node.children:
            recurse(node.children[node.pick_once()], start_sample)
    elif kind is NodeType.BLEND:
        assert isinstance(node, BlendNode)
        x = params.get(node.parameter, float, 0.0)
        for branch, weight in node.weights(x):
            if branch is not None and weight > 0:
                first_new = len(out)
                recurse(branch, start_sample)
                for leaf in out[first_new:]:
                    leaf.vol_exprs.append(Expression(f"{weight:f}"))
    elif kind is NodeType.SELECT:
        assert isinstance(node, SelectNode)
        value = params.get(node.parameter, str, "")
        selected = node.pick(value)
        if selected is not None:
            recurse(selected, start_sample)
    elif kind is NodeType.LOOP:
        assert isinstance(node, LoopNode)
        recurse(node.child(), start_sample, True)
    elif kind is NodeType.REFERENCE:
        assert isinstance(node, ReferenceNode)
        if node.target is not None:
            recurse(node.target, start_sample)