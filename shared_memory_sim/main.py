"""
Shared-Memory Contention Simulation - Main Entry Point
======================================================

This is the main entry point for the shared-memory contention simulation.

The simulation workflow is:
1. Configure simulation parameters
2. Build the processor ring and the random source
3. For every module count 1..M, run cycles until the average access time
   converges
4. Report, export and plot the average access time per module count

Usage:
    python -m shared_memory_sim.main --processors 8 --distribution normal --plot

Or import and use programmatically:
    from shared_memory_sim.main import run_single_simulation, run_comparison_study
"""

import argparse
import os
import sys
import numpy as np
from typing import Dict, List, Optional, Sequence

from .errors import InvalidConfigurationError
from .metrics.bandwidth import compute_effective_bandwidth
from .randomness.distribution import DistributionKind
from .randomness.random_source import RandomSource
from .simulation.simulation_runner import (
    SimulationConfiguration,
    SimulationResults,
    SimulationRunner,
    NUM_MEMORY_MODULES,
    MAX_CPU_CYCLES,
    STANDARD_DEVIATION,
    CONVERGENCE_THRESHOLD
)
from .visualization.access_time_plotter import AccessTimePlotter


# ============================================================================
# SIMULATION FUNCTIONS
# ============================================================================

def run_single_simulation(
    number_of_processors: int = 4,
    distribution: str = "uniform",
    number_of_memory_modules: int = NUM_MEMORY_MODULES,
    max_cpu_cycles: int = MAX_CPU_CYCLES,
    convergence_threshold: float = CONVERGENCE_THRESHOLD,
    standard_deviation: float = STANDARD_DEVIATION,
    seed: Optional[int] = None,
    strict_distribution: bool = False,
    plot_results: bool = False,
    save_plot_path: Optional[str] = None,
    verbose: bool = True
) -> SimulationResults:
    """
    Run a complete simulation over module counts 1..number_of_memory_modules.

    Args:
        number_of_processors: Processors competing for memory.
        distribution: "uniform" or "normal" (short forms "u"/"n").
        number_of_memory_modules: Largest module count simulated.
        max_cpu_cycles: Cycle cap per module count.
        convergence_threshold: Relative change that ends a configuration.
        standard_deviation: Spread of the wrapped normal, in modules.
        seed: Seed for reproducible runs.
        strict_distribution: Reject unknown distribution selectors.
        plot_results: If True, display the access-time plot.
        save_plot_path: If provided, save the access-time plot here.
        verbose: If True, print progress and the results summary.

    Returns:
        SimulationResults for the run.
    """
    configuration = SimulationConfiguration(
        number_of_processors=number_of_processors,
        distribution=distribution,
        number_of_memory_modules=number_of_memory_modules,
        max_cpu_cycles=max_cpu_cycles,
        convergence_threshold=convergence_threshold,
        standard_deviation=standard_deviation,
        seed=seed,
        strict_distribution=strict_distribution
    )

    results = SimulationRunner(configuration).run(verbose=verbose)

    if verbose:
        results.print_summary()

    if plot_results or save_plot_path:
        label = f"p={number_of_processors}, {configuration.distribution.value}"
        AccessTimePlotter.plot_access_time_vs_modules(
            {label: results},
            show_theoretical=True,
            save_path=save_plot_path,
            show=plot_results
        )

    return results


def run_comparison_study(
    processor_counts: Sequence[int] = (2, 4, 8, 16, 32, 64),
    distributions: Sequence[str] = ("uniform", "normal"),
    number_of_memory_modules: int = NUM_MEMORY_MODULES,
    max_cpu_cycles: int = MAX_CPU_CYCLES,
    convergence_threshold: float = CONVERGENCE_THRESHOLD,
    standard_deviation: float = STANDARD_DEVIATION,
    seed: Optional[int] = None,
    strict_distribution: bool = False,
    plot_comparison: bool = False,
    save_plot_path: Optional[str] = None,
    verbose: bool = True
) -> Dict[str, SimulationResults]:
    """
    Run simulations across several processor counts and distributions.

    Every combination gets its own SimulationRunner (its own ring and
    random source), all seeded with the same seed.

    Args:
        processor_counts: Processor counts to test.
        distributions: Distributions to test.
        number_of_memory_modules: Largest module count simulated.
        max_cpu_cycles: Cycle cap per module count.
        convergence_threshold: Relative change that ends a configuration.
        standard_deviation: Spread of the wrapped normal, in modules.
        seed: Seed shared by every run.
        strict_distribution: Reject unknown distribution selectors.
        plot_comparison: If True, display the comparison plot.
        save_plot_path: If provided, save the comparison plot here.
        verbose: If True, print progress and a summary table.

    Returns:
        Dict of {label: SimulationResults}, labels like "p=8, normal".
    """
    if verbose:
        print("\n" + "=" * 70)
        print("SHARED-MEMORY CONTENTION COMPARISON STUDY")
        print("=" * 70)
        print(f"\nProcessor counts:  {list(processor_counts)}")
        print(f"Distributions:     {list(distributions)}")
        print(f"Module counts:     1 .. {number_of_memory_modules}")

    all_results: Dict[str, SimulationResults] = {}

    total_configs: int = len(processor_counts) * len(distributions)
    config_num: int = 0

    for distribution in distributions:
        for processors in processor_counts:
            config_num += 1
            configuration = SimulationConfiguration(
                number_of_processors=processors,
                distribution=distribution,
                number_of_memory_modules=number_of_memory_modules,
                max_cpu_cycles=max_cpu_cycles,
                convergence_threshold=convergence_threshold,
                standard_deviation=standard_deviation,
                seed=seed,
                strict_distribution=strict_distribution
            )
            label = f"p={processors}, {configuration.distribution.value}"

            if verbose:
                print(f"\n--- Configuration {config_num}/{total_configs}:  {label} ---")

            all_results[label] = SimulationRunner(configuration).run(verbose=False)

    if verbose:
        print("\n" + "=" * 70)
        print("COMPARISON SUMMARY")
        print("=" * 70)
        print(f"{'Configuration':<22}{'T(1)':<12}{'T(M)':<12}"
              f"{'BW(M)':<12}{'Unconverged':<12}")
        print("-" * 70)
        for label, results in all_results.items():
            bandwidth = compute_effective_bandwidth(
                results.total_accesses[-1], results.cycles_to_converge[-1]
            )
            print(f"{label:<22}"
                  f"{results.average_access_time[0]:<12.3f}"
                  f"{results.average_access_time[-1]:<12.3f}"
                  f"{bandwidth:<12.3f}"
                  f"{len(results.get_unconverged_module_counts()):<12}")

    if plot_comparison or save_plot_path:
        AccessTimePlotter.plot_access_time_vs_modules(
            all_results,
            save_path=save_plot_path,
            show=plot_comparison
        )

    return all_results


def comparison_csv_path(output_path: str, results: SimulationResults) -> str:
    """
    Per-configuration CSV path for a comparison study.

    "study.csv" becomes "study_p8_normal.csv" for 8 processors with the
    normal distribution.
    """
    stem, extension = os.path.splitext(output_path)
    config = results.configuration
    return (f"{stem}_p{config.number_of_processors}_"
            f"{config.distribution.value}{extension or '.csv'}")


def save_comparison_csv(
    all_results: Dict[str, SimulationResults],
    output_path: str
) -> List[str]:
    """
    Write one CSV per configuration of a comparison study.

    Returns:
        List[str]: The paths written, in study order.
    """
    written: List[str] = []
    for results in all_results.values():
        path = comparison_csv_path(output_path, results)
        results.save_csv(path)
        written.append(path)
    return written


def sample_module_selection(
    distribution: str,
    module_count: int,
    number_of_samples: int = 10000,
    mean: int = 0,
    standard_deviation: float = STANDARD_DEVIATION,
    seed: Optional[int] = None
) -> np.ndarray:
    """
    Draw module indices the same way processors do during a simulation.

    Args:
        distribution: "uniform" or "normal".
        module_count: Number of modules.
        number_of_samples: Number of draws.
        mean: Mean module for the normal distribution.
        standard_deviation: Spread of the normal distribution.
        seed: Seed for the random source.

    Returns:
        np.ndarray: The drawn module indices.
    """
    kind = DistributionKind.from_selector(distribution)
    random_source = RandomSource(seed=seed)

    return np.array(
        [
            random_source.draw_module(kind, mean, module_count, standard_deviation)
            for _ in range(number_of_samples)
        ],
        dtype=np.int64
    )


# ============================================================================
# COMMAND LINE INTERFACE
# ============================================================================

def build_argument_parser() -> argparse.ArgumentParser:
    """Create the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description='Shared-memory contention simulation: average access time '
                    'vs number of memory modules'
    )
    parser.add_argument(
        '--processors', type=int, default=4,
        help='number of processors (default: 4)'
    )
    parser.add_argument(
        '--distribution', type=str, default='uniform',
        help='module-selection distribution: uniform|u|normal|n (default: uniform)'
    )
    parser.add_argument(
        '--modules', type=int, default=NUM_MEMORY_MODULES,
        help=f'largest module count simulated (default: {NUM_MEMORY_MODULES})'
    )
    parser.add_argument(
        '--max-cycles', type=int, default=MAX_CPU_CYCLES,
        help=f'cycle cap per module count (default: {MAX_CPU_CYCLES})'
    )
    parser.add_argument(
        '--epsilon', type=float, default=CONVERGENCE_THRESHOLD,
        help=f'convergence threshold (default: {CONVERGENCE_THRESHOLD})'
    )
    parser.add_argument(
        '--std-dev', type=float, default=STANDARD_DEVIATION,
        help=f'standard deviation of the normal distribution (default: {STANDARD_DEVIATION})'
    )
    parser.add_argument('--seed', type=int, default=None, help='random seed')
    parser.add_argument(
        '--strict-distribution', action='store_true',
        help='reject unknown distribution selectors instead of using normal'
    )
    parser.add_argument(
        '--output', type=str, default=None,
        help='write results to this CSV file (with --compare, one file per '
             'configuration named <stem>_p<N>_<distribution>.csv)'
    )
    parser.add_argument('--plot', action='store_true', help='display the access-time plot')
    parser.add_argument('--save-plot', type=str, default=None, help='save the plot to this path')
    parser.add_argument(
        '--compare', action='store_true',
        help='run the comparison study across processor counts and both distributions'
    )
    parser.add_argument(
        '--processor-counts', type=int, nargs='+', default=[2, 4, 8, 16, 32, 64],
        help='processor counts used by --compare (default: 2 4 8 16 32 64)'
    )
    parser.add_argument('--quiet', action='store_true', help='suppress progress output')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Command-line entry point.

    Returns:
        int: Process exit code (0 on success, 2 on invalid configuration).
    """
    args = build_argument_parser().parse_args(argv)
    verbose: bool = not args.quiet

    try:
        if args.compare:
            all_results = run_comparison_study(
                processor_counts=args.processor_counts,
                number_of_memory_modules=args.modules,
                max_cpu_cycles=args.max_cycles,
                convergence_threshold=args.epsilon,
                standard_deviation=args.std_dev,
                seed=args.seed,
                strict_distribution=args.strict_distribution,
                plot_comparison=args.plot,
                save_plot_path=args.save_plot,
                verbose=verbose
            )
            if args.output:
                for path in save_comparison_csv(all_results, args.output):
                    if verbose:
                        print(f"Results saved to:  {path}")
            return 0

        results = run_single_simulation(
            number_of_processors=args.processors,
            distribution=args.distribution,
            number_of_memory_modules=args.modules,
            max_cpu_cycles=args.max_cycles,
            convergence_threshold=args.epsilon,
            standard_deviation=args.std_dev,
            seed=args.seed,
            strict_distribution=args.strict_distribution,
            plot_results=args.plot,
            save_plot_path=args.save_plot,
            verbose=verbose
        )
    except InvalidConfigurationError as error:
        print(f"ERROR: {error}", file=sys.stderr)
        return 2

    if args.output:
        results.save_csv(args.output)
        if verbose:
            print(f"Results saved to:  {args.output}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
