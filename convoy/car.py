"""
Car Model: Pose, State, and Convoy Roster
"""
from collections import deque
from dataclasses import dataclass

from .bounding_box import generate_bounding_box
from .simulation_types import ControlMode


@dataclass
class Pose:
    """
    Position and heading of a car.

    Heading 0 faces up (negative y) and grows clockwise.
    """
    x: float
    y: float
    heading: float

    def copy(self):
        return Pose(self.x, self.y, self.heading)


class Car:
    """
    Represents a single car, either player-driven or autonomous.
    """

    def __init__(self, car_id, x, y, heading, control_mode, config, target=None):
        """
        Initialize a car.

        Args:
            car_id: Unique identifier (0 is the player)
            x, y: Initial position
            heading: Initial heading angle (radians)
            control_mode: ControlMode.PLAYER or ControlMode.AUTONOMOUS
            config: SimulationConfig
            target: Car this car follows (autonomous cars only)
        """
        self.car_id = car_id
        self.control_mode = control_mode
        self.target = target

        # Resolved once: the integrator never checks who is driving
        if control_mode is ControlMode.PLAYER:
            self.acceleration_rate = config.player_acc
        else:
            self.acceleration_rate = config.autonomous_acc

        # State variables
        self.pose = Pose(x, y, heading)
        self.velocity = 0.0
        self.acceleration = 0.0
        self.bounding_box = generate_bounding_box(self.pose, config)

        # Telemetry history, most recent trajectory_limit samples only
        self.trajectory = deque(maxlen=config.trajectory_limit)
        self.collision_flag = False
        self.collision_count = 0

    @property
    def x(self):
        return self.pose.x

    @property
    def y(self):
        return self.pose.y

    @property
    def heading(self):
        return self.pose.heading

    @property
    def is_player(self):
        return self.control_mode is ControlMode.PLAYER

    def update_bounding_box(self, config):
        """Regenerate the bounding box from the current pose."""
        self.bounding_box = generate_bounding_box(self.pose, config)

    def record_state(self, step):
        """Append the current state to the trajectory."""
        self.trajectory.append({
            'step': step,
            'x': self.pose.x,
            'y': self.pose.y,
            'heading': self.pose.heading,
            'velocity': self.velocity,
            'acceleration': self.acceleration,
        })

    def reset_collision_flag(self):
        """Reset collision flag after it has been rendered."""
        self.collision_flag = False

    def __repr__(self):
        return (f"Car(id={self.car_id}, mode={self.control_mode.value}, "
                f"x={self.pose.x:.1f}, y={self.pose.y:.1f}, "
                f"heading={self.pose.heading:.3f}, v={self.velocity:.3f})")


def create_player(config):
    """Create the player car at its fixed start pose."""
    return Car(
        0,
        config.player_start_x,
        config.player_start_y,
        config.player_start_heading,
        ControlMode.PLAYER,
        config,
    )


def create_convoy(player, config):
    """
    Create the follower cars at staggered start positions.

    Follower 0 targets the player; each later follower targets the one
    created just before it.

    Args:
        player: Player Car
        config: SimulationConfig

    Returns:
        List of autonomous Car objects in convoy order
    """
    followers = []
    target = player
    for i in range(config.num_cars):
        car = Car(
            i + 1,
            i * config.follower_spacing + config.follower_start_x,
            config.follower_start_y,
            config.follower_start_heading,
            ControlMode.AUTONOMOUS,
            config,
            target=target,
        )
        followers.append(car)
        target = car
    return followers
