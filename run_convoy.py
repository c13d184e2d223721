"""
Entry Point: Convoy Driving Simulation
"""
import argparse
import os
import sys

from convoy.config import DEFAULT_CONFIG_PATH, get_project_root, load_config
from convoy.input_state import InputState
from convoy.simulation import ConvoySimulation


def print_summary(results):
    """Print simulation summary metrics."""
    print("\n" + "="*60)
    print("SIMULATION SUMMARY")
    print("="*60)

    print(f"\nSteps: {results['steps']}")
    print(f"Simulation Time: {results['simulation_time']:.2f}s")
    print(f"Total Collisions: {results['total_collisions']}")

    print("\n" + "-"*60)
    print("FINAL POSES")
    print("-"*60)
    for car_id, pose in results['final_poses'].items():
        name = "Player" if car_id == 0 else f"Car {car_id:2d}"
        print(f"{name:>7}: x={pose['x']:8.1f}  y={pose['y']:8.1f}  "
              f"heading={pose['heading']:+.3f}  v={pose['velocity']:.3f}")

    print("\n" + "-"*60)
    print("AVERAGE SPEEDS (px/tick)")
    print("-"*60)
    for car_id, avg_speed in results['average_speeds'].items():
        name = "Player" if car_id == 0 else f"Car {car_id:2d}"
        print(f"{name:>7}: {avg_speed:.3f}")

    print("\n" + "="*60)


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description='Convoy Driving Simulation')
    parser.add_argument('--config', type=str, default=DEFAULT_CONFIG_PATH,
                        help='Path to configuration YAML file (relative to the project directory)')
    parser.add_argument('--no-visualize', action='store_true',
                        help='Run headless (pygame visualization is enabled by default)')
    parser.add_argument('--steps', type=int, default=None,
                        help='Number of ticks to run (headless default: simulation.max_steps)')
    parser.add_argument('--hold', action='append', default=[],
                        choices=['up', 'down', 'left', 'right'],
                        help='Keep a player action pressed for the whole run (repeatable)')
    parser.add_argument('--plots', type=str, default=None, metavar='DIR',
                        help='Save result plots to DIR after the run')

    args = parser.parse_args(argv)

    visualize = not args.no_visualize

    # Load configuration
    try:
        config = load_config(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not os.path.isabs(args.config):
        config_display_path = os.path.join(get_project_root(), args.config)
    else:
        config_display_path = args.config

    print("Convoy Driving Simulation")
    print("="*60)
    print(f"Configuration: {config_display_path}")
    print(f"Number of Followers: {config.num_cars}")
    if visualize:
        print("Visualization: ENABLED (pygame) - W/A/S/D to drive, close window or press ESC to quit")
    else:
        print("Visualization: DISABLED")

    input_state = InputState()
    for action in args.hold:
        input_state.hold(action)

    simulation = ConvoySimulation(config, visualize=visualize, input_state=input_state)
    results = simulation.run(max_steps=args.steps)

    print_summary(results)

    if args.plots:
        from analysis.plot_results import plot_results
        print("\nGenerating plots...")
        plot_results(results, config, output_dir=args.plots)
        print(f"Plots saved to {args.plots}")

    print("\nSimulation complete!")


if __name__ == '__main__':
    main()
