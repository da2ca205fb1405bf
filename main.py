#!/usr/bin/env python3
"""
TSP Playground - Main Entry Point
=================================

Usage:
    # Run one strategy on random points
    python main.py run --mode annealing --points 60 --seconds 5 --seed 42

    # Compare all strategies on the same point set
    python main.py compare --points 60 --seconds 3 --plot convergence.png

    # Show halt-on-edit behaviour while a search is running
    python main.py edit-demo --points 30 --seed 7

From Python:
    from tsp_playground import OptimizationEngine, Config, Mode, random_points

    engine = OptimizationEngine(Config(random_seed=42))
    for p in random_points(50):
        engine.add_point(p)
    engine.set_mode(Mode.GENETIC)
    engine.calculate_path_async()
"""

import argparse
import logging
import sys
import time

import numpy as np


def _build_engine(args, mode):
    from tsp_playground import Config, OptimizationEngine, random_points

    config = Config()
    config.random_seed = args.seed

    engine = OptimizationEngine(config, mode=mode)
    if getattr(args, 'decay', None) is not None:
        engine.temperature_decay_rate = args.decay

    points = random_points(args.points, rng=np.random.default_rng(args.seed))
    for p in points:
        engine.add_point(p)
    return engine


def _watch(engine, seconds, verbose):
    """Poll the engine like a render loop would, printing stats"""
    deadline = time.monotonic() + seconds
    next_print = 0.0
    while time.monotonic() < deadline:
        now = time.monotonic()
        if verbose and now >= next_print:
            s = engine.stats_snapshot()
            temp = f"{s.temperature:10.4f}" if s.temperature is not None else f"{'-':>10}"
            acc = (f"{s.average_acceptance_probability:.3f}"
                   if s.average_acceptance_probability is not None else '-')
            print(f"  length={s.best_length:10.2f}  rate={s.throughput:10.0f}/s  "
                  f"T={temp}  p={acc}")
            next_print = now + 0.5
        time.sleep(1 / 60)


def run_single(args):
    """Run a single strategy"""
    from tsp_playground import Mode

    mode = Mode.from_name(args.mode)
    engine = _build_engine(args, mode)
    start_length = engine.current_length()

    print(f"Running {mode.value} on {args.points} points for {args.seconds:.1f}s "
          f"(seed={args.seed})")

    try:
        engine.calculate_path_async()
        _watch(engine, args.seconds, args.verbose)
    except KeyboardInterrupt:
        print("\nStopped by user.")
    finally:
        engine.stop()

    print("\n" + "=" * 60)
    print(f"RESULT ({mode.value})")
    print("=" * 60)
    print(f"Initial length: {start_length:.2f}")
    print(f"Final length:   {engine.current_length():.2f}")
    if engine.last_result:
        print(f"Steps:          {engine.last_result.work_units}")
    print("=" * 60)

    if args.plot:
        from tsp_playground.visualization import ConvergenceMonitor

        monitor = ConvergenceMonitor()
        fig = monitor.plot_convergence({mode.value: engine.stats_history()},
                                       title=f'{mode.value} ({args.points} points)')
        monitor.save_figure(fig, args.plot)
        print(f"\nConvergence plot saved to: {args.plot}")

    return 0


def run_compare(args):
    """Run every strategy on the same point set"""
    from tsp_playground import Mode

    histories = {}
    summary = {}

    for mode in Mode:
        engine = _build_engine(args, mode)
        start_length = engine.current_length()
        print(f"Running {mode.value}...")
        engine.calculate_path_async()
        _watch(engine, args.seconds, args.verbose)
        engine.stop()

        histories[mode.value] = engine.stats_history()
        summary[mode.value] = {
            'start': start_length,
            'final': engine.current_length(),
            'steps': engine.last_result.work_units if engine.last_result else 0,
        }

    print("\n" + "=" * 70)
    print("STRATEGY COMPARISON")
    print("=" * 70)
    print(f"{'Mode':<25} {'Start':>12} {'Final':>12} {'Steps':>12}")
    print("-" * 70)
    for name, s in summary.items():
        print(f"{name:<25} {s['start']:>12.2f} {s['final']:>12.2f} {s['steps']:>12}")
    print("=" * 70)

    if args.plot:
        from tsp_playground.visualization import ConvergenceMonitor

        monitor = ConvergenceMonitor()
        fig = monitor.plot_convergence(histories, title=f'{args.points} points')
        monitor.save_figure(fig, args.plot)
        print(f"\nConvergence plot saved to: {args.plot}")

    return 0


def run_edit_demo(args):
    """Edit the point set while a search is running"""
    from tsp_playground import Mode, Point

    mode = Mode.from_name(args.mode)
    engine = _build_engine(args, mode)

    engine.calculate_path_async()
    time.sleep(args.seconds)
    print(f"Running: stopped={engine.is_stopped()} length={engine.current_length():.2f}")

    extra = Point(0.0, 0.0, label='extra')
    engine.add_point(extra)
    print(f"Added {extra}: stopped={engine.is_stopped()} points={len(engine)} "
          f"length={engine.current_length():.2f}")

    engine.calculate_path_async()
    time.sleep(args.seconds)
    print(f"Resumed: stopped={engine.is_stopped()} length={engine.current_length():.2f}")

    engine.remove_point(extra)
    print(f"Removed {extra}: stopped={engine.is_stopped()} points={len(engine)} "
          f"length={engine.current_length():.2f}")

    print(f"stop() -> {engine.stop()}")
    return 0


def main():
    parser = argparse.ArgumentParser(
        description='TSP Playground optimization engine',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    def add_common(p):
        p.add_argument('--points', type=int, default=50, help='Number of random points')
        p.add_argument('--seconds', type=float, default=3.0, help='Search time per run')
        p.add_argument('--seed', type=int, default=42, help='Random seed')
        p.add_argument('--decay', type=float, help='Annealing decay rate (fraction/second)')
        p.add_argument('--verbose', '-v', action='store_true', help='Verbose output')

    run_parser = subparsers.add_parser('run', help='Run a single strategy')
    add_common(run_parser)
    run_parser.add_argument('--mode', type=str, default='hill',
                            help='hill, annealing or genetic')
    run_parser.add_argument('--plot', type=str, help='Save convergence plot to file')

    compare_parser = subparsers.add_parser('compare', help='Compare all strategies')
    add_common(compare_parser)
    compare_parser.add_argument('--plot', type=str, help='Save convergence plot to file')

    demo_parser = subparsers.add_parser('edit-demo', help='Edit points during a search')
    add_common(demo_parser)
    demo_parser.add_argument('--mode', type=str, default='annealing',
                             help='hill, annealing or genetic')

    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 1

    from tsp_playground import setup_logging
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == 'run':
        return run_single(args)
    elif args.command == 'compare':
        return run_compare(args)
    elif args.command == 'edit-demo':
        return run_edit_demo(args)
    else:
        parser.print_help()
        return 1


if __name__ == '__main__':
    sys.exit(main())
