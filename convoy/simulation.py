"""
Simulation Engine: Fixed-Timestep Convoy Loop
"""
import numpy as np
from tqdm import tqdm

from .car import create_convoy, create_player
from .collision import CollisionDetector
from .controller import PursuitController, decision_from_actions
from .input_state import InputState
from .physics import update_car_dynamics


class SimulationState:
    """
    Everything one tick reads and writes: the cars plus the step counter.
    """

    def __init__(self, config):
        self.config = config
        self.player = create_player(config)
        self.followers = create_convoy(self.player, config)
        self.step_count = 0
        self.timestamp = 0.0

    @property
    def cars(self):
        """Player first, then followers in convoy order."""
        return [self.player] + self.followers


class ConvoySimulation:
    """
    Main simulation engine: one player car and a convoy of followers.
    """

    def __init__(self, config, visualize=False, input_state=None):
        """
        Initialize simulation.

        Args:
            config: SimulationConfig
            visualize: Whether to show pygame visualization
            input_state: InputState for the player (a fresh one if omitted)
        """
        self.config = config
        self.visualize = visualize
        self.dt = 1.0 / config.fps

        self.state = SimulationState(config)
        self.input_state = input_state if input_state is not None else InputState()
        self.controller = PursuitController(config.proximity_threshold)
        self.collision_detector = CollisionDetector(
            policy=config.collision_policy,
            pairs=config.collision_pairs,
        )

        # Visualization
        self.visualizer = None
        if self.visualize:
            try:
                from .visualization import PygameVisualization
                print("Initializing pygame visualization...")
                self.visualizer = PygameVisualization(self.state, self.input_state, config)
                print("Pygame visualization initialized successfully!")
            except ImportError as e:
                print("Warning: pygame not available. Visualization disabled.")
                print(f"Error: {e}")
                print("Install pygame with: pip install pygame")
                self.visualize = False
            except Exception as e:
                print(f"Warning: Failed to initialize visualization: {e}")
                print("Visualization disabled. Continuing without visualization.")
                self.visualize = False
                self.visualizer = None
                import traceback
                traceback.print_exc()

    def compute_decisions(self):
        """
        Compute every car's control decision for this tick.

        All decisions are taken from the poses of the last completed tick,
        before any car moves.

        Returns:
            List of (Car, ControlDecision) in roster order
        """
        state = self.state
        decisions = [(state.player, decision_from_actions(self.input_state.get_action_states()))]
        for car in state.followers:
            decisions.append((car, self.controller.decide(car, car.target)))
        return decisions

    def tick(self):
        """
        Advance the simulation by one step.

        Returns:
            List of collision events found this step
        """
        state = self.state
        for car in state.cars:
            car.reset_collision_flag()

        for car, decision in self.compute_decisions():
            update_car_dynamics(car, decision, self.config)

        for car in state.cars:
            car.update_bounding_box(self.config)

        new_collisions = self.collision_detector.check_collisions(state, state.timestamp)
        for collision in new_collisions:
            tqdm.write(f"hit: car {collision['car_id1']} / car {collision['car_id2']} "
                       f"at step {collision['step']}")

        for car in state.cars:
            car.record_state(state.step_count)

        state.step_count += 1
        state.timestamp = state.step_count * self.dt
        return new_collisions

    def run(self, max_steps=None):
        """
        Run the simulation.

        Headless runs stop after max_steps (config.max_steps if omitted).
        Visual runs go until the window is closed or ESC is pressed, or
        until max_steps if given.

        Args:
            max_steps: Number of ticks to run

        Returns:
            Dictionary with simulation results
        """
        if max_steps is None and not self.visualize:
            max_steps = self.config.max_steps
        if max_steps is not None and max_steps < 0:
            raise ValueError(f"max_steps must be >= 0, got {max_steps}")

        print(f"Starting simulation with 1 player car and {len(self.state.followers)} followers...")
        print(f"Collision policy: {self.collision_detector.policy.value}")

        # Progress bar (only if not visualizing)
        pbar = None
        if not self.visualize:
            pbar = tqdm(total=max_steps, desc="Simulating")

        try:
            while max_steps is None or self.state.step_count < max_steps:
                if self.visualize and self.visualizer:
                    if not self.visualizer.handle_events():
                        print("\nSimulation stopped by user.")
                        break

                self.tick()

                if self.visualize and self.visualizer:
                    self.visualizer.render(self.collision_detector.get_collision_count())
                    self.visualizer.tick(fps=self.config.fps)

                if pbar:
                    pbar.update(1)
        finally:
            if pbar:
                pbar.close()
            if self.visualize and self.visualizer:
                self.visualizer.quit()

        return self.results()

    def results(self):
        """Collect results of the run so far."""
        cars = self.state.cars
        return {
            'total_collisions': self.collision_detector.get_collision_count(),
            'collisions': self.collision_detector.get_all_collisions(),
            'trajectories': {car.car_id: list(car.trajectory) for car in cars},
            'average_speeds': {
                car.car_id: float(np.mean([p['velocity'] for p in car.trajectory])) if car.trajectory else 0.0
                for car in cars
            },
            'final_poses': {
                car.car_id: {'x': car.x, 'y': car.y, 'heading': car.heading, 'velocity': car.velocity}
                for car in cars
            },
            'collision_counts': {car.car_id: car.collision_count for car in cars},
            'steps': self.state.step_count,
            'simulation_time': self.state.timestamp,
        }
