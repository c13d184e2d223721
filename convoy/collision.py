"""
Collision Detection: Oriented Bounding-Box Edge Intersection
"""
from itertools import combinations

from .geometry import point_in_convex_polygon, segments_intersect
from .simulation_types import CollisionPolicy


def edges_cross(box_a, box_b):
    """True if any of the 16 edge pairs of two bounding boxes cross."""
    edges_b = box_b.edges()
    return any(
        segments_intersect(edge_a, edge_b)
        for edge_a in box_a.edges()
        for edge_b in edges_b
    )


def collides(car_a, car_b):
    """
    Test two cars' bounding boxes for overlap.

    Every edge of one box is tested against every edge of the other.
    Crossings at corners and along parallel edges are never reported by
    the segment test, so boxes that line up exactly (same pose, or
    shifted along one axis) fall back to a corner containment check.

    Uses the boxes as last generated; callers regenerate them after
    moving the cars.

    Args:
        car_a, car_b: Car objects with a current bounding_box

    Returns:
        True if the boxes overlap or touch
    """
    box_a = car_a.bounding_box
    box_b = car_b.bounding_box
    if edges_cross(box_a, box_b):
        return True

    corners_a = box_a.corners()
    corners_b = box_b.corners()
    return (
        any(point_in_convex_polygon(corner, corners_b) for corner in corners_a)
        or any(point_in_convex_polygon(corner, corners_a) for corner in corners_b)
    )


class CollisionDetector:
    """
    Detects collisions between selected pairs of cars.
    """

    def __init__(self, policy=CollisionPolicy.PLAYER_VS_FIRST, pairs=None):
        """
        Initialize collision detector.

        Args:
            policy: CollisionPolicy selecting which pairs are checked
            pairs: (car_id, car_id) tuples, required for CollisionPolicy.CUSTOM
        """
        if policy is CollisionPolicy.CUSTOM and not pairs:
            raise ValueError("custom collision policy requires at least one pair")
        self.policy = policy
        self.pairs = list(pairs or [])
        self.collisions = []  # List of collision events

    def select_pairs(self, player, followers):
        """
        Pick the car pairs to test under the current policy.

        Args:
            player: Player Car
            followers: Follower Cars in convoy order

        Returns:
            List of (Car, Car) tuples
        """
        if self.policy is CollisionPolicy.PLAYER_VS_FIRST:
            return [(player, followers[0])] if followers else []
        if self.policy is CollisionPolicy.PLAYER_VS_ALL:
            return [(player, car) for car in followers]
        if self.policy is CollisionPolicy.ALL_VS_ALL:
            return list(combinations([player] + list(followers), 2))

        cars_by_id = {car.car_id: car for car in [player] + list(followers)}
        return [(cars_by_id[a], cars_by_id[b]) for a, b in self.pairs]

    def check_collisions(self, state, timestamp):
        """
        Check the selected pairs for collisions.

        Only reports: cars keep moving, collided cars get their flag set
        and their collision counter bumped.

        Args:
            state: SimulationState with freshly generated bounding boxes
            timestamp: Current simulation time

        Returns:
            List of collision events found this step
        """
        new_collisions = []

        for car1, car2 in self.select_pairs(state.player, state.followers):
            if not collides(car1, car2):
                continue

            collision_event = {
                'timestamp': timestamp,
                'step': state.step_count,
                'car_id1': car1.car_id,
                'car_id2': car2.car_id,
                'x': (car1.x + car2.x) / 2,
                'y': (car1.y + car2.y) / 2,
            }
            new_collisions.append(collision_event)
            self.collisions.append(collision_event)

            car1.collision_count += 1
            car2.collision_count += 1
            car1.collision_flag = True
            car2.collision_flag = True

        return new_collisions

    def get_all_collisions(self):
        """Get all recorded collisions."""
        return self.collisions

    def get_collision_count(self):
        """Get total number of collisions."""
        return len(self.collisions)
