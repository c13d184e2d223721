"""
Simulation Types: Car control modes and collision-check policies
"""
from enum import Enum


class ControlMode(Enum):
    """
    Who produces a car's control decisions.

    - PLAYER: latched keyboard input
    - AUTONOMOUS: pursuit controller chasing a target car
    """
    PLAYER = "player"
    AUTONOMOUS = "autonomous"


class CollisionPolicy(Enum):
    """
    Which car pairs the collision detector tests each step.

    - PLAYER_VS_FIRST: player against the first follower only
    - PLAYER_VS_ALL: player against every follower
    - ALL_VS_ALL: every unordered pair of cars
    - CUSTOM: an explicit list of car id pairs
    """
    PLAYER_VS_FIRST = "player_vs_first"
    PLAYER_VS_ALL = "player_vs_all"
    ALL_VS_ALL = "all_vs_all"
    CUSTOM = "custom"
