"""
Analysis: Plot Results (Trajectories, Speed Traces, Collisions)
"""
import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import os


def plot_results(results, config, output_dir='.'):
    """
    Generate result plots for a finished run.

    Args:
        results: Simulation results dictionary
        config: SimulationConfig
        output_dir: Output directory for plots

    Returns:
        List of written file names
    """
    os.makedirs(output_dir, exist_ok=True)
    written = []
    dt = 1.0 / config.fps

    # 1. Trajectories (screen coordinates, so y grows downwards)
    fig, ax = plt.subplots(figsize=(10, 10))
    for car_id, trajectory in results['trajectories'].items():
        if not trajectory:
            continue
        xs = [p['x'] for p in trajectory]
        ys = [p['y'] for p in trajectory]
        if car_id == 0:
            ax.plot(xs, ys, 'r-', linewidth=2.5, label='Player')
        else:
            ax.plot(xs, ys, alpha=0.6, linewidth=1)

    if results['collisions']:
        cx = [c['x'] for c in results['collisions']]
        cy = [c['y'] for c in results['collisions']]
        ax.scatter(cx, cy, c='gold', edgecolors='k', s=40, zorder=5, label='Collisions')

    ax.invert_yaxis()
    ax.set_aspect('equal', adjustable='datalim')
    ax.set_xlabel('x (px)')
    ax.set_ylabel('y (px)')
    ax.set_title('Car Trajectories')
    ax.legend()
    ax.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(os.path.join(output_dir, 'trajectories.png'), dpi=150)
    plt.close(fig)
    written.append('trajectories.png')

    # 2. Speed Traces
    fig, axes = plt.subplots(2, 1, figsize=(14, 10))

    ax1 = axes[0]
    for car_id, trajectory in results['trajectories'].items():
        if trajectory:
            times = np.array([p['step'] for p in trajectory]) * dt
            speeds = [p['velocity'] for p in trajectory]
            label = 'Player' if car_id == 0 else f'Car {car_id}'
            ax1.plot(times, speeds, label=label, alpha=0.7, linewidth=1.5)

    ax1.set_xlabel('Time (seconds)')
    ax1.set_ylabel('Velocity (px/tick)')
    ax1.set_title('Speed Traces for All Cars')
    ax1.legend(ncol=4, fontsize=8)
    ax1.grid(True, alpha=0.3)

    # Convoy average, player excluded
    ax2 = axes[1]
    follower_speeds = [
        [p['velocity'] for p in trajectory]
        for car_id, trajectory in results['trajectories'].items()
        if car_id != 0 and trajectory
    ]
    if follower_speeds:
        avg_speeds = np.mean(np.array(follower_speeds), axis=0)
        steps = [p['step'] for p in results['trajectories'][0]]
        times = np.array(steps[-len(avg_speeds):]) * dt
        ax2.plot(times, avg_speeds, 'k-', linewidth=2, label='Average Follower Speed')
        ax2.set_xlabel('Time (seconds)')
        ax2.set_ylabel('Average Velocity (px/tick)')
        ax2.set_title('Average Convoy Speed Over Time')
        ax2.legend()
        ax2.grid(True, alpha=0.3)

    plt.tight_layout()
    plt.savefig(os.path.join(output_dir, 'speed_traces.png'), dpi=150)
    plt.close(fig)
    written.append('speed_traces.png')

    # 3. Collisions per Car
    if results['collisions']:
        fig, ax = plt.subplots(figsize=(10, 6))

        collision_counts = {}
        for collision in results['collisions']:
            for car_id in (collision['car_id1'], collision['car_id2']):
                collision_counts[car_id] = collision_counts.get(car_id, 0) + 1

        car_ids = sorted(collision_counts.keys())
        counts = [collision_counts[cid] for cid in car_ids]

        ax.bar(['Player' if cid == 0 else f'Car {cid}' for cid in car_ids], counts,
               color='red', alpha=0.7)
        ax.set_xlabel('Car')
        ax.set_ylabel('Collision Steps')
        ax.set_title('Collisions per Car')
        ax.grid(True, alpha=0.3, axis='y')
        plt.tight_layout()
        plt.savefig(os.path.join(output_dir, 'collisions_per_car.png'), dpi=150)
        plt.close(fig)
        written.append('collisions_per_car.png')

    print(f"Generated plots: {', '.join(written)}")
    return written
