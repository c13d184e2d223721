import numpy as np
import pytest

from convoy.car import Car, Pose
from convoy.config import SimulationConfig
from convoy.controller import PursuitController
from convoy.input_state import InputState
from convoy.physics import update_car_dynamics
from convoy.simulation import ConvoySimulation, SimulationState
from convoy.simulation_types import CollisionPolicy, ControlMode


@pytest.fixture
def config():
    return SimulationConfig(num_cars=4)


def test_initial_roster(config):
    state = SimulationState(config)

    assert state.player.is_player
    assert (state.player.x, state.player.y) == (400.0, 400.0)
    assert state.player.heading == pytest.approx(np.pi / 2)
    assert len(state.followers) == 4
    assert state.cars[0] is state.player

    for i, car in enumerate(state.followers):
        assert car.car_id == i + 1
        assert car.control_mode is ControlMode.AUTONOMOUS
        assert (car.x, car.y) == (i * 50.0 + 100.0, 200.0)
        assert car.heading == pytest.approx(np.pi)
        assert car.velocity == 0.0


def test_convoy_chain_targets(config):
    state = SimulationState(config)
    followers = state.followers

    assert followers[0].target is state.player
    for i in range(1, len(followers)):
        assert followers[i].target is followers[i - 1]
    assert state.player.target is None


def test_convoy_chain_has_no_cycles(config):
    state = SimulationState(config)
    for car in state.followers:
        seen = set()
        current = car
        while current is not None:
            assert current.car_id not in seen
            seen.add(current.car_id)
            current = current.target
        assert 0 in seen


def test_player_without_input_stays_put(config):
    sim = ConvoySimulation(config)
    for _ in range(20):
        sim.tick()
    assert (sim.state.player.x, sim.state.player.y) == (400.0, 400.0)
    assert sim.state.player.velocity == 0.0


def test_close_followers_wait_for_their_leader(config):
    # Default spacing is inside the proximity threshold: only the first
    # follower sets off, the rest brake while stationary and stay put.
    sim = ConvoySimulation(config)
    for _ in range(20):
        sim.tick()
    assert sim.state.followers[0].velocity > 0
    assert all(car.velocity == 0.0 for car in sim.state.followers[1:])


def test_spread_out_followers_all_move():
    sim = ConvoySimulation(SimulationConfig(num_cars=4, follower_spacing=150.0))
    for _ in range(20):
        sim.tick()
    assert all(car.velocity > 0 for car in sim.state.followers)


def test_decisions_use_last_completed_tick():
    config = SimulationConfig(num_cars=4, follower_spacing=150.0)
    sim = ConvoySimulation(config)
    for _ in range(30):
        sim.tick()

    leader = sim.state.followers[0]
    chaser = sim.state.followers[1]
    leader_pose_before = leader.pose.copy()

    # Replay the chaser's step by hand against the leader's pre-tick pose
    replay = Car(99, chaser.x, chaser.y, chaser.heading, ControlMode.AUTONOMOUS, config)
    replay.velocity = chaser.velocity
    decision = PursuitController(config.proximity_threshold).decide(replay, leader_pose_before)
    update_car_dynamics(replay, decision, config)

    sim.tick()

    assert (chaser.x, chaser.y, chaser.heading, chaser.velocity) == \
        (replay.x, replay.y, replay.heading, replay.velocity)


def test_held_up_drives_straight_towards_terminal_speed():
    config = SimulationConfig(num_cars=0)
    input_state = InputState()
    input_state.hold('up')
    sim = ConvoySimulation(config, input_state=input_state)
    player = sim.state.player

    for _ in range(50):
        sim.tick()
        assert player.heading == config.player_start_heading

    decay = 1.0 - 1.0 / config.drag_coefficient
    terminal = config.player_acc * config.drag_coefficient
    assert player.velocity == pytest.approx(terminal * (1.0 - decay**50), rel=1e-9)
    assert player.velocity < terminal
    assert player.y == pytest.approx(400.0, abs=1e-9)
    assert player.x > 400.0


def test_bounding_boxes_follow_poses(config):
    sim = ConvoySimulation(config)
    for _ in range(10):
        sim.tick()
    for car in sim.state.cars:
        fresh = Car(car.car_id, car.x, car.y, car.heading, car.control_mode, config)
        assert car.bounding_box == fresh.bounding_box


def test_collision_reported_during_tick(config, capsys):
    sim = ConvoySimulation(config)
    first = sim.state.followers[0]
    first.pose = Pose(sim.state.player.x, sim.state.player.y, sim.state.player.heading)

    events = sim.tick()

    assert len(events) == 1
    assert events[0]['step'] == 0
    assert first.collision_flag
    assert "hit" in capsys.readouterr().out


def test_collision_flag_cleared_next_tick(config):
    sim = ConvoySimulation(config)
    first = sim.state.followers[0]
    first.pose = Pose(sim.state.player.x, sim.state.player.y, sim.state.player.heading)
    sim.tick()
    assert first.collision_flag

    first.pose = Pose(-5000.0, -5000.0, 0.0)
    sim.tick()
    assert not first.collision_flag
    assert first.collision_count == 1


def test_collision_policy_from_config():
    config = SimulationConfig(num_cars=2, collision_policy=CollisionPolicy.CUSTOM,
                              collision_pairs=((1, 2),))
    sim = ConvoySimulation(config)
    assert sim.collision_detector.policy is CollisionPolicy.CUSTOM
    assert sim.collision_detector.pairs == [(1, 2)]


def test_headless_run_results(config):
    sim = ConvoySimulation(config)
    results = sim.run(max_steps=10)

    assert results['steps'] == 10
    assert results['simulation_time'] == pytest.approx(10 / config.fps)
    assert set(results['trajectories']) == {0, 1, 2, 3, 4}
    assert all(len(t) == 10 for t in results['trajectories'].values())
    assert results['trajectories'][1][0]['step'] == 0
    assert results['total_collisions'] == 0
    assert results['collision_counts'] == {0: 0, 1: 0, 2: 0, 3: 0, 4: 0}
    assert results['average_speeds'][0] == 0.0
    assert results['final_poses'][1]['velocity'] == sim.state.followers[0].velocity


def test_headless_run_defaults_to_config_max_steps():
    sim = ConvoySimulation(SimulationConfig(num_cars=1, max_steps=7))
    assert sim.run()['steps'] == 7


def test_negative_max_steps_rejected(config):
    with pytest.raises(ValueError):
        ConvoySimulation(config).run(max_steps=-1)


def test_trajectory_history_is_capped():
    sim = ConvoySimulation(SimulationConfig(num_cars=1, trajectory_limit=5))
    for _ in range(12):
        sim.tick()

    for car in sim.state.cars:
        assert len(car.trajectory) == 5
        assert [p['step'] for p in car.trajectory] == [7, 8, 9, 10, 11]

    results = sim.results()
    assert results['steps'] == 12
    assert all(len(t) == 5 for t in results['trajectories'].values())
