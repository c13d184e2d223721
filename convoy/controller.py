"""
Controller: Pursuit steering/throttle for autonomous cars, input mapping for the player
"""
from dataclasses import dataclass

import numpy as np

from .geometry import distance, normalize_angle


@dataclass(frozen=True)
class ControlDecision:
    """One step's worth of pedal and steering requests."""
    accelerate: bool = False
    brake: bool = False
    steer_left: bool = False
    steer_right: bool = False


def decision_from_actions(actions):
    """
    Map latched player actions onto a control decision.

    Args:
        actions: Mapping with 'up', 'down', 'left' and 'right' booleans

    Returns:
        ControlDecision
    """
    return ControlDecision(
        accelerate=bool(actions.get('up', False)),
        brake=bool(actions.get('down', False)),
        steer_left=bool(actions.get('left', False)),
        steer_right=bool(actions.get('right', False)),
    )


def relative_bearing(follower_pose, target_pose):
    """
    Signed angle from a car's heading to another point.

    atan2 measures from +x, while headings measure from "up", hence the
    quarter-turn offset before subtracting the heading.

    Args:
        follower_pose: Pose of the chasing car
        target_pose: Pose being chased

    Returns:
        Bearing in (-pi, pi], negative when the target is to the left
    """
    angle_from_right = np.arctan2(target_pose.y - follower_pose.y,
                                  target_pose.x - follower_pose.x)
    north_angle = normalize_angle(angle_from_right + np.pi / 2)
    return normalize_angle(north_angle - follower_pose.heading)


class PursuitController:
    """
    Reactive follow-the-leader controller.

    Memoryless: each decision is recomputed from the two poses, so a
    follower sitting right at the proximity threshold alternates between
    braking and accelerating.
    """

    def __init__(self, proximity_threshold=100.0):
        """
        Initialize pursuit controller.

        Args:
            proximity_threshold: Distance below which the follower brakes
        """
        self.proximity_threshold = proximity_threshold

    def decide(self, follower, target):
        """
        Compute a control decision for follower chasing target.

        Args:
            follower: Car (or Pose) doing the chasing
            target: Car (or Pose) being chased

        Returns:
            ControlDecision
        """
        follower_pose = getattr(follower, 'pose', follower)
        target_pose = getattr(target, 'pose', target)

        angle = relative_bearing(follower_pose, target_pose)
        too_close = distance(target_pose, follower_pose) < self.proximity_threshold

        return ControlDecision(
            accelerate=not too_close,
            brake=too_close,
            steer_left=bool(angle < 0),
            steer_right=bool(angle > 0),
        )
