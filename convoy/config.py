"""
Configuration: Load and validate simulation parameters from YAML
"""
import os
from dataclasses import dataclass

import numpy as np
import yaml

from .simulation_types import CollisionPolicy


DEFAULT_CONFIG_PATH = 'config/parameters.yaml'


def get_project_root():
    """Get the project root directory (parent of the convoy package)."""
    return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


@dataclass(frozen=True)
class SimulationConfig:
    """
    Immutable simulation parameters, fixed at startup.
    """
    num_cars: int = 20

    car_width: float = 24.0
    car_length: float = 55.0
    car_length_front_offset: float = 40.0
    car_turn_rate: float = 0.015

    player_acc: float = 0.008
    autonomous_acc: float = 0.005
    brake_acc: float = -0.01
    drag_coefficient: float = 200.0

    proximity_threshold: float = 100.0

    player_start_x: float = 400.0
    player_start_y: float = 400.0
    player_start_heading: float = np.pi / 2
    follower_start_x: float = 100.0
    follower_start_y: float = 200.0
    follower_spacing: float = 50.0
    follower_start_heading: float = np.pi

    collision_policy: CollisionPolicy = CollisionPolicy.PLAYER_VS_FIRST
    collision_pairs: tuple = ()

    fps: int = 60
    max_steps: int = 3000
    trajectory_limit: int = 10000

    display_width: int = 800
    display_height: int = 800
    road_tile: int = 200
    show_bounding_boxes: bool = False

    @property
    def car_length_rear_offset(self):
        return self.car_length - self.car_length_front_offset

    @property
    def car_half_width(self):
        return self.car_width / 2

    @classmethod
    def from_dict(cls, data):
        """
        Build a config from the nested dictionary layout of parameters.yaml.

        Missing sections and keys fall back to the defaults above.

        Args:
            data: Dictionary as returned by yaml.safe_load

        Returns:
            Validated SimulationConfig
        """
        data = data or {}
        car = data.get('car', {})
        dynamics = data.get('dynamics', {})
        pursuit = data.get('pursuit', {})
        start = data.get('start', {})
        player = start.get('player', {})
        followers = start.get('followers', {})
        collision = data.get('collision', {})
        sim = data.get('simulation', {})
        display = data.get('display', {})
        defaults = cls()

        try:
            policy = CollisionPolicy(collision.get('policy', defaults.collision_policy.value))
        except ValueError:
            valid = ', '.join(p.value for p in CollisionPolicy)
            raise ValueError(
                f"Unknown collision policy: {collision.get('policy')!r} (expected one of: {valid})"
            )

        pairs = tuple(
            (int(a), int(b)) for a, b in (collision.get('pairs') or [])
        )

        config = cls(
            num_cars=int(data.get('num_cars', defaults.num_cars)),
            car_width=float(car.get('width', defaults.car_width)),
            car_length=float(car.get('length', defaults.car_length)),
            car_length_front_offset=float(car.get('front_offset', defaults.car_length_front_offset)),
            car_turn_rate=float(car.get('turn_rate', defaults.car_turn_rate)),
            player_acc=float(dynamics.get('player_acc', defaults.player_acc)),
            autonomous_acc=float(dynamics.get('autonomous_acc', defaults.autonomous_acc)),
            brake_acc=float(dynamics.get('brake_acc', defaults.brake_acc)),
            drag_coefficient=float(dynamics.get('drag_coefficient', defaults.drag_coefficient)),
            proximity_threshold=float(pursuit.get('proximity_threshold', defaults.proximity_threshold)),
            player_start_x=float(player.get('x', defaults.player_start_x)),
            player_start_y=float(player.get('y', defaults.player_start_y)),
            player_start_heading=_heading(player, defaults.player_start_heading),
            follower_start_x=float(followers.get('x', defaults.follower_start_x)),
            follower_start_y=float(followers.get('y', defaults.follower_start_y)),
            follower_spacing=float(followers.get('spacing', defaults.follower_spacing)),
            follower_start_heading=_heading(followers, defaults.follower_start_heading),
            collision_policy=policy,
            collision_pairs=pairs,
            fps=int(sim.get('fps', defaults.fps)),
            max_steps=int(sim.get('max_steps', defaults.max_steps)),
            trajectory_limit=int(sim.get('trajectory_limit', defaults.trajectory_limit)),
            display_width=int(display.get('width', defaults.display_width)),
            display_height=int(display.get('height', defaults.display_height)),
            road_tile=int(display.get('road_tile', defaults.road_tile)),
            show_bounding_boxes=bool(display.get('show_bounding_boxes', defaults.show_bounding_boxes)),
        )
        config.validate()
        return config

    def validate(self):
        """Raise ValueError for values that would break the simulation."""
        if self.num_cars < 0:
            raise ValueError(f"num_cars must be >= 0, got {self.num_cars}")
        if self.drag_coefficient <= 0:
            raise ValueError(f"drag_coefficient must be > 0, got {self.drag_coefficient}")
        if self.trajectory_limit < 1:
            raise ValueError(f"trajectory_limit must be >= 1, got {self.trajectory_limit}")
        if self.car_width <= 0 or self.car_length <= 0:
            raise ValueError("car width and length must be positive")
        if self.collision_policy is CollisionPolicy.CUSTOM and not self.collision_pairs:
            raise ValueError("custom collision policy requires at least one pair")
        for a, b in self.collision_pairs:
            for car_id in (a, b):
                if not 0 <= car_id <= self.num_cars:
                    raise ValueError(f"collision pair references unknown car id {car_id}")


def _heading(section, default):
    if 'heading_deg' in section:
        return float(np.radians(section['heading_deg']))
    return default


def load_config(config_path=DEFAULT_CONFIG_PATH):
    """Load configuration from YAML file."""
    # If path is relative, make it relative to project root
    if not os.path.isabs(config_path):
        config_path = os.path.join(get_project_root(), config_path)

    if not os.path.exists(config_path):
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Make sure you're running from the project directory or provide an absolute path."
        )

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f)
    return SimulationConfig.from_dict(data)
