"""Speaker layouts and direction-based panning."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from .quaternion import Quaternion
from .vec3 import Vec3

_FORWARD = Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Speaker:
    """A speaker, with its direction in listener space."""

    name: str
    direction: Vec3
    distance: float = 1.0


@dataclass
class SpeakerLayout:
    speakers: list[Speaker] = field(default_factory=list)

    @classmethod
    def stereo(cls) -> SpeakerLayout:
        return cls(
            [
                Speaker("FL", Vec3(-1.0, 0.0, 0.0), 1.0),
                Speaker("FR", Vec3(1.0, 0.0, 0.0), 1.0),
            ]
        )

    @classmethod
    def five_point_one(cls) -> SpeakerLayout:
        return cls(
            [
                Speaker("FL", Vec3(-1.0, 0.0, 1.0).normalized()),
                Speaker("FR", Vec3(1.0, 0.0, 1.0).normalized()),
                Speaker("C", Vec3(0.0, 0.0, 1.0)),
                Speaker("LFE", Vec3(0.0, 0.0, 0.0)),
                Speaker("SL", Vec3(-1.0, 0.0, 0.0)),
                Speaker("SR", Vec3(1.0, 0.0, 0.0)),
            ]
        )


def compute_pan_mask(
    source_position: Vec3,
    listener_position: Vec3,
    listener_rotation: Quaternion,
    layout: SpeakerLayout,
    spread: float = 0.1,
) -> list[float]:
    """Per-speaker gains, normalised to sum to 1, from a Gaussian on the angle.

    Zero-length source or speaker directions are treated as straight ahead.
    """
    local = listener_rotation.conjugate().rotate(source_position - listener_position)
    if local.square_magnitude() == 0.0:
        local = _FORWARD
    local = local.normalized()

    sigma = 0.75 + spread * 1.25
    weights = []
    for speaker in layout.speakers:
        direction = speaker.direction
        if direction.square_magnitude() == 0.0:
            direction = _FORWARD
        direction = direction.normalized()
        angle = math.acos(max(-1.0, min(1.0, local.dot(direction))))
        weights.append(math.exp(-(angle * angle) / (2.0 * sigma * sigma)))

    total = sum(weights)
    if total > 0.0:
        weights = [w / total for w in weights]
    return weights