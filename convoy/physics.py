"""
Physics: Arcade Kinematics for Car Motion
"""
import numpy as np

from .geometry import normalize_angle


def update_car_dynamics(car, control, config):
    """
    Advance a car by one tick.

    Not a vehicle model: drag is linear in velocity and the turn rate is
    scaled by velocity, so a stopped car cannot turn and a reversing car
    steers the other way. Braking only acts while moving forward.

    Heading 0 faces up, so x follows sin(heading) and y follows
    -cos(heading).

    Args:
        car: Car object (mutated in place)
        control: ControlDecision for this tick
        config: SimulationConfig
    """
    car.acceleration = 0.0
    if control.accelerate:
        car.acceleration = car.acceleration_rate
    if control.brake and car.velocity > 0:
        car.acceleration = config.brake_acc

    drag = car.velocity / config.drag_coefficient
    car.acceleration -= drag
    car.velocity += car.acceleration

    turn = 0.0
    if control.steer_right and not control.steer_left:
        turn = config.car_turn_rate
    elif control.steer_left and not control.steer_right:
        turn = -config.car_turn_rate
    scaled_turn = turn * car.velocity

    pose = car.pose
    pose.heading = normalize_angle(pose.heading + scaled_turn)
    pose.x += car.velocity * np.sin(pose.heading)
    pose.y -= car.velocity * np.cos(pose.heading)
