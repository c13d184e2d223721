"""
Bounding Box: Oriented rectangle edges of a car from its pose
"""
from dataclasses import dataclass

from .geometry import Point, Segment, rotate_project


@dataclass(frozen=True)
class BoundingBox:
    """
    The four edges of a car's oriented rectangle.

    All four edges come from the same pose snapshot.
    """
    front: Segment
    left: Segment
    right: Segment
    back: Segment

    def edges(self):
        """Edges in front, left, right, back order."""
        return (self.front, self.left, self.right, self.back)

    def corners(self):
        """Corners in drawing order: front-left, front-right, back-right, back-left."""
        return (self.front.p1, self.front.p2, self.back.p1, self.back.p2)


def generate_bounding_box(pose, config):
    """
    Compute the bounding box of a car at the given pose.

    Heading 0 faces up (negative y). The pivot sits front_offset behind
    the front bumper, so the box is not centred on the pose.

    Args:
        pose: Pose with x, y and heading
        config: SimulationConfig with car dimensions

    Returns:
        BoundingBox
    """
    x, y, rot = pose.x, pose.y, pose.heading
    hw = config.car_half_width
    front = config.car_length_front_offset
    rear = config.car_length_rear_offset

    br = Point(x + rotate_project(hw, -rear, rot), y + rotate_project(rear, hw, rot))
    bl = Point(x + rotate_project(-hw, -rear, rot), y + rotate_project(rear, -hw, rot))
    fl = Point(x + rotate_project(-hw, front, rot), y + rotate_project(-front, -hw, rot))
    fr = Point(x + rotate_project(hw, front, rot), y + rotate_project(-front, hw, rot))

    return BoundingBox(
        front=Segment(fl, fr),
        left=Segment(fl, bl),
        right=Segment(fr, br),
        back=Segment(br, bl),
    )
