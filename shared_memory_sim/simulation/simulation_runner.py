"""
Simulation Runner
=================

This module provides the orchestration layer that ties together all
components of the shared-memory contention simulation.

The SimulationRunner handles:
1. Configuration validation
2. One-time construction of the processor ring and random source
3. Running the convergence loop for every module count 1..M
4. Results aggregation

The module-level `simulate()` function fills a caller-supplied buffer with
the average access time of every module count.
"""

import numpy as np
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Union

from ..errors import InvalidConfigurationError
from ..processors.processor_ring import ProcessorRing
from ..randomness.distribution import DistributionKind
from ..randomness.random_source import RandomSource
from .convergence_loop import ConvergenceLoop, ConfigurationOutcome


# Default simulation constants
NUM_MEMORY_MODULES: int = 512
MAX_CPU_CYCLES: int = 1_000_000
STANDARD_DEVIATION: float = 5.0
CONVERGENCE_THRESHOLD: float = 0.02


@dataclass
class SimulationConfiguration:
    """
    Configuration parameters for a shared-memory contention simulation.

    Attributes:
        number_of_processors: Processors competing for memory (>= 1).
        distribution: Module-selection distribution. Accepts a
            DistributionKind or a selector string ("uniform", "u",
            "normal", "n"); normalized in __post_init__.
        number_of_memory_modules: Largest module count simulated. Module
            counts 1..number_of_memory_modules are run in order.
        max_cpu_cycles: Cycle cap per module count.
        convergence_threshold: Relative change that ends a configuration.
        standard_deviation: Spread of the wrapped normal, in modules.
        seed: Seed for the random source (None = fresh entropy).
        strict_distribution: If True, unknown distribution selectors raise
            instead of falling back to the normal distribution.
    """
    number_of_processors: int = 4
    distribution: Union[DistributionKind, str] = DistributionKind.UNIFORM
    number_of_memory_modules: int = NUM_MEMORY_MODULES
    max_cpu_cycles: int = MAX_CPU_CYCLES
    convergence_threshold: float = CONVERGENCE_THRESHOLD
    standard_deviation: float = STANDARD_DEVIATION
    seed: Optional[int] = None
    strict_distribution: bool = False

    def __post_init__(self) -> None:
        """Normalize the distribution and validate parameters."""
        try:
            self.distribution = DistributionKind.from_selector(
                self.distribution, strict=self.strict_distribution
            )
        except ValueError as error:
            raise InvalidConfigurationError(str(error)) from error

        self._validate()

    def _validate(self) -> None:
        """Validate configuration parameters."""
        if self.number_of_processors < 1:
            raise InvalidConfigurationError(
                f"Number of processors must be at least 1. "
                f"Received: {self.number_of_processors}"
            )

        if self.number_of_memory_modules < 1:
            raise InvalidConfigurationError(
                f"Number of memory modules must be at least 1. "
                f"Received: {self.number_of_memory_modules}"
            )

        if self.max_cpu_cycles < 1:
            raise InvalidConfigurationError(
                f"Maximum CPU cycles must be at least 1. "
                f"Received: {self.max_cpu_cycles}"
            )

        if self.convergence_threshold <= 0:
            raise InvalidConfigurationError(
                f"Convergence threshold must be positive. "
                f"Received: {self.convergence_threshold}"
            )

        if self.standard_deviation <= 0:
            raise InvalidConfigurationError(
                f"Standard deviation must be positive. "
                f"Received: {self.standard_deviation}"
            )

    def get_summary_dict(self) -> Dict[str, Any]:
        """Return a dictionary summary of the configuration."""
        return {
            "number_of_processors": self.number_of_processors,
            "distribution": self.distribution.value,
            "number_of_memory_modules": self.number_of_memory_modules,
            "max_cpu_cycles": self.max_cpu_cycles,
            "convergence_threshold": self.convergence_threshold,
            "standard_deviation": self.standard_deviation,
            "seed": self.seed
        }


@dataclass
class SimulationResults:
    """
    Container for all results of one simulation run.

    Arrays are indexed by (module_count - 1).

    Attributes:
        configuration: The SimulationConfiguration used for this run.
        average_access_time: Recorded average access time per module count.
        cycles_to_converge: Cycles executed per module count.
        converged: Whether each module count converged before the cap.
        total_accesses: Accesses granted to all processors per module count.
        simulation_completed: Whether every module count was simulated.
    """
    configuration: SimulationConfiguration
    average_access_time: np.ndarray
    cycles_to_converge: np.ndarray
    converged: np.ndarray
    total_accesses: np.ndarray
    simulation_completed: bool = False
    outcomes: List[ConfigurationOutcome] = field(default_factory=list, repr=False)

    @classmethod
    def from_outcomes(
        cls,
        configuration: SimulationConfiguration,
        outcomes: List[ConfigurationOutcome]
    ) -> "SimulationResults":
        """Assemble result arrays from per-configuration outcomes."""
        return cls(
            configuration=configuration,
            average_access_time=np.array(
                [outcome.average_access_time for outcome in outcomes], dtype=np.float64
            ),
            cycles_to_converge=np.array(
                [outcome.cycles for outcome in outcomes], dtype=np.int64
            ),
            converged=np.array(
                [outcome.converged for outcome in outcomes], dtype=bool
            ),
            total_accesses=np.array(
                [outcome.total_accesses for outcome in outcomes], dtype=np.int64
            ),
            simulation_completed=(
                len(outcomes) == configuration.number_of_memory_modules
            ),
            outcomes=list(outcomes)
        )

    @property
    def module_counts(self) -> np.ndarray:
        """Module counts 1..M matching the result arrays."""
        return np.arange(1, len(self.average_access_time) + 1)

    def get_unconverged_module_counts(self) -> List[int]:
        """Module counts whose configuration hit the cycle cap."""
        return [int(m) for m in self.module_counts[~self.converged]]

    def print_summary(self) -> None:
        """Print a formatted summary of the simulation results."""
        config = self.configuration

        print("\n" + "=" * 70)
        print("SHARED-MEMORY CONTENTION SIMULATION RESULTS")
        print("=" * 70)

        print("\n--- Configuration ---")
        print(f"  Processors:              {config.number_of_processors}")
        print(f"  Distribution:            {config.distribution.value}")
        print(f"  Module Counts:           1 .. {config.number_of_memory_modules}")
        print(f"  Convergence Threshold:   {config.convergence_threshold}")
        print(f"  Max CPU Cycles:          {config.max_cpu_cycles}")
        if config.distribution is DistributionKind.NORMAL:
            print(f"  Standard Deviation:      {config.standard_deviation}")

        print("\n--- Average Access Time ---")
        print(f"  Fewest Modules (1):      {self.average_access_time[0]:.3f} cycles")
        print(f"  Most Modules ({len(self.average_access_time)}):".ljust(27)
              + f"{self.average_access_time[-1]:.3f} cycles")
        print(f"  Minimum:                 {np.min(self.average_access_time):.3f} cycles")
        print(f"  Maximum:                 {np.max(self.average_access_time):.3f} cycles")

        print("\n--- Convergence ---")
        print(f"  Mean Cycles:             {np.mean(self.cycles_to_converge):.1f}")
        print(f"  Max Cycles:              {int(np.max(self.cycles_to_converge))}")

        unconverged = self.get_unconverged_module_counts()
        if unconverged:
            print(f"  WARNING: {len(unconverged)} module count(s) hit the cycle cap: "
                  f"{unconverged[:10]}{' ...' if len(unconverged) > 10 else ''}")
        else:
            print("  All module counts converged.")

        print("\n--- Status ---")
        print(f"  Simulation Completed:    {'Yes' if self.simulation_completed else 'No'}")

        print("\n" + "=" * 70)

    def get_metrics_dict(self) -> Dict[str, Any]:
        """
        Return the headline metrics as a dictionary.

        Useful for programmatic access, logging, or export to files.
        """
        return {
            "average_access_time": self.average_access_time.tolist(),
            "cycles_to_converge": self.cycles_to_converge.tolist(),
            "converged": self.converged.tolist(),
            "unconverged_module_counts": self.get_unconverged_module_counts(),
            "mean_cycles_to_converge": float(np.mean(self.cycles_to_converge))
            if len(self.cycles_to_converge) else 0.0,
            "simulation_completed": self.simulation_completed
        }

    def save_csv(self, path: str) -> None:
        """
        Write per-module-count results to a CSV file.

        Columns: module_count, average_access_time, cycles, converged,
        total_accesses.
        """
        table: np.ndarray = np.column_stack([
            self.module_counts,
            self.average_access_time,
            self.cycles_to_converge,
            self.converged.astype(np.int64),
            self.total_accesses
        ])
        np.savetxt(
            path,
            table,
            delimiter=",",
            header="module_count,average_access_time,cycles,converged,total_accesses",
            comments="",
            fmt=["%d", "%.6f", "%d", "%d", "%d"]
        )


class SimulationRunner:
    """
    Main simulation orchestrator.

    Usage:
        config = SimulationConfiguration(
            number_of_processors=8,
            distribution="normal",
            seed=42
        )
        runner = SimulationRunner(config)
        results = runner.run()
        results.print_summary()

    Attributes:
        configuration: The SimulationConfiguration for this runner.
        random_source: Run-wide RandomSource.
        ring: The ProcessorRing, built once for the run.
        convergence_loop: The ConvergenceLoop driving every module count.
    """

    def __init__(self, configuration: SimulationConfiguration) -> None:
        """
        Initialize the runner and build all components from the configuration.

        Args:
            configuration: SimulationConfiguration with all parameters.
        """
        self.configuration: SimulationConfiguration = configuration

        # ===== CREATE RANDOM SOURCE =====
        # One generator for the whole run; its state is never reset
        self.random_source: RandomSource = RandomSource(seed=configuration.seed)

        # ===== CREATE PROCESSOR RING =====
        self.ring: ProcessorRing = ProcessorRing(configuration.number_of_processors)

        # ===== CREATE CONVERGENCE LOOP =====
        self.convergence_loop: ConvergenceLoop = ConvergenceLoop(
            ring=self.ring,
            random_source=self.random_source,
            distribution=configuration.distribution,
            max_cpu_cycles=configuration.max_cpu_cycles,
            convergence_threshold=configuration.convergence_threshold,
            standard_deviation=configuration.standard_deviation
        )

    def run_module_count(self, module_count: int) -> ConfigurationOutcome:
        """Run a single module-count configuration."""
        if module_count < 1:
            raise InvalidConfigurationError(
                f"Module count must be at least 1. Received: {module_count}"
            )
        return self.convergence_loop.run(module_count)

    def run(self, verbose: bool = True, progress_interval: int = 64) -> SimulationResults:
        """
        Execute the complete simulation for module counts 1..M.

        Args:
            verbose: If True, print progress messages.
            progress_interval: Print progress every this many module counts.

        Returns:
            SimulationResults containing all outputs and metrics.
        """
        config = self.configuration

        if verbose:
            print("\n" + "-" * 50)
            print(f"Running simulation:  {config.number_of_processors} processors, "
                  f"{config.distribution.value} distribution")
            print("-" * 50)

        outcomes: List[ConfigurationOutcome] = []
        for module_count in range(1, config.number_of_memory_modules + 1):
            outcome = self.run_module_count(module_count)
            outcomes.append(outcome)

            if verbose and (
                module_count % progress_interval == 0
                or module_count == config.number_of_memory_modules
            ):
                print(f"  [{module_count}/{config.number_of_memory_modules}] "
                      f"T={outcome.average_access_time:.3f} cycles "
                      f"({outcome.cycles} cycles simulated)")

        results = SimulationResults.from_outcomes(config, outcomes)

        if verbose:
            print(f"  Simulation complete! "
                  f"{len(results.get_unconverged_module_counts())} unconverged module count(s)")

        return results


def simulate(
    output_buffer: Union[np.ndarray, List[float]],
    output_length: int,
    processor_count: int,
    distribution_kind: Union[DistributionKind, str],
    number_of_memory_modules: int = NUM_MEMORY_MODULES,
    seed: Optional[int] = None,
    max_cpu_cycles: int = MAX_CPU_CYCLES,
    strict_distribution: bool = False,
    verbose: bool = False
) -> SimulationResults:
    """
    Fill `output_buffer` with the average access time per module count.

    After the call, output_buffer[i] holds the converged (or cap-exhausted)
    average access time for module count i + 1.

    Args:
        output_buffer: Caller-owned storage (numpy array or list).
        output_length: Usable length of output_buffer.
        processor_count: Processors competing for memory (>= 1).
        distribution_kind: "uniform"/"u", "normal"/"n" or a DistributionKind.
            Unknown selectors use the normal distribution unless
            strict_distribution is set.
        number_of_memory_modules: Largest module count simulated.
        seed: Seed for the random source.
        max_cpu_cycles: Cycle cap per module count.
        strict_distribution: Reject unknown distribution selectors.
        verbose: If True, print progress messages.

    Returns:
        SimulationResults: Full results of the run.

    Raises:
        InvalidConfigurationError: If the processor count or the output
            storage is invalid.
    """
    if output_length < number_of_memory_modules:
        raise InvalidConfigurationError(
            f"Output length ({output_length}) must be at least the number of "
            f"memory modules ({number_of_memory_modules})"
        )

    if len(output_buffer) < output_length:
        raise InvalidConfigurationError(
            f"Output buffer holds {len(output_buffer)} values but "
            f"output_length is {output_length}"
        )

    configuration = SimulationConfiguration(
        number_of_processors=processor_count,
        distribution=distribution_kind,
        number_of_memory_modules=number_of_memory_modules,
        max_cpu_cycles=max_cpu_cycles,
        seed=seed,
        strict_distribution=strict_distribution
    )

    results: SimulationResults = SimulationRunner(configuration).run(verbose=verbose)

    for index, access_time in enumerate(results.average_access_time):
        output_buffer[index] = float(access_time)

    return results
