"""
Run coordinator for parallel filter execution.

Decodes the input once, fans the read-only PixelBuffer out to one worker
thread per filter via ThreadPoolExecutor, waits for every task to finish,
and reports a RunSummary.

State machine:
    IDLE -> DECODING -> RUNNING -> JOINING -> REPORTING -> DONE
    DECODING -> FAILED on DecodeError (no tasks are spawned)
"""

import logging
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, List, Optional

from ..core import (
    ConfigError,
    DecodeError,
    FilterResult,
    FilterStatus,
    PixelBuffer,
    RunConfig,
    RunState,
    RunSummary,
    SystemClock,
    ValidationEngine,
    ValidationSeverity,
)
from ..oiio import OiioAdapter
from ..processing import (
    ConsoleReporter,
    FilterExecutor,
    ProcessingFilter,
    default_filters,
)

logger = logging.getLogger(__name__)

Decoder = Callable[[str], PixelBuffer]


class RunCoordinator:
    """Owns the input buffer and the filter task pool for one run."""

    def __init__(
        self,
        config: RunConfig,
        filters: Optional[List[ProcessingFilter]] = None,
        reporter: Optional[ConsoleReporter] = None,
        clock=None,
        decoder: Optional[Decoder] = None,
        executor: Optional[FilterExecutor] = None,
    ):
        self.config = config
        self.filters = filters if filters is not None else default_filters()
        self.reporter = reporter if reporter is not None else ConsoleReporter()
        self.clock = clock if clock is not None else SystemClock()
        self.decoder = decoder if decoder is not None else OiioAdapter.read_image
        self.executor = executor if executor is not None else FilterExecutor(
            reporter=self.reporter,
            clock=self.clock,
            quality=config.quality,
            cadence=config.progress_cadence,
        )
        self.state = RunState.IDLE
        self.buffer: Optional[PixelBuffer] = None
        self.summary: Optional[RunSummary] = None

    def _set_state(self, state: RunState) -> None:
        logger.debug("Run state: %s -> %s", self.state.name, state.name)
        self.state = state

    def output_path(self, filter: ProcessingFilter) -> str:
        """Fixed output file for a filter."""
        return self.config.output_path(filter.output_filename)

    def run(self) -> RunSummary:
        """
        Execute a complete run.

        Returns:
            RunSummary once every filter task has finished

        Raises:
            ConfigError: configuration failed validation (nothing decoded)
            DecodeError: input could not be decoded (no tasks spawned)
        """
        if self.state != RunState.IDLE:
            raise RuntimeError(f"Run already started (state {self.state.name})")

        self._validate()
        cpu_baseline = self.clock.cpu_times()

        # Decoding
        self._set_state(RunState.DECODING)
        try:
            self.buffer = self.decoder(self.config.input_path)
        except DecodeError as e:
            self._set_state(RunState.FAILED)
            logger.error("Cannot decode %s: %s", self.config.input_path, e)
            raise
        self.reporter.loaded(self.buffer)

        # An unusable output directory fails each task at encode, not the run
        try:
            Path(self.config.output_dir).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create output directory %s: %s", self.config.output_dir, e)

        # Running + Joining
        start = self.clock.now()
        if self.config.parallel:
            results = self._run_parallel()
        else:
            results = self._run_sequential()
        total_elapsed = self.clock.now() - start

        # Reporting
        self._set_state(RunState.REPORTING)
        cpu = self.clock.cpu_times() - cpu_baseline
        self.summary = RunSummary(
            total_elapsed=total_elapsed,
            cpu_user=cpu.user,
            cpu_system=cpu.system,
            results=tuple(results),
        )
        logger.info(
            "Run finished: %d/%d filters succeeded in %.3f sec",
            len(self.summary.succeeded), len(results), total_elapsed,
        )
        self.reporter.summary(self.summary)

        self._set_state(RunState.DONE)
        return self.summary

    def _validate(self) -> None:
        """Block the run on configuration errors; log warnings."""
        issues = ValidationEngine.validate_config(self.config)
        for issue in issues:
            if issue.severity == ValidationSeverity.WARNING:
                logger.warning("%s", issue)
        if ValidationEngine.has_errors(issues):
            errors = [i for i in issues if i.severity == ValidationSeverity.ERROR]
            raise ConfigError(
                f"Run blocked: {len(errors)} validation errors: "
                + "; ".join(i.message for i in errors),
                issues=errors,
            )

    def _run_task(self, filter: ProcessingFilter) -> FilterResult:
        return self.executor.execute(filter, self.buffer, self.output_path(filter))

    def _run_parallel(self) -> List[FilterResult]:
        """Spawn one worker per filter and wait for all of them."""
        self._set_state(RunState.RUNNING)
        logger.debug("Spawning %d filter tasks", len(self.filters))

        with ThreadPoolExecutor(max_workers=max(1, len(self.filters))) as pool:
            futures = [pool.submit(self._run_task, f) for f in self.filters]

            self._set_state(RunState.JOINING)
            wait(futures, return_when=ALL_COMPLETED)

        results = []
        for filter, future in zip(self.filters, futures):
            try:
                results.append(future.result())
            except Exception as e:
                logger.exception("Filter task %s raised", filter.name)
                results.append(self._failed_result(filter, e))
        return results

    def _run_sequential(self) -> List[FilterResult]:
        """Run the same tasks one after another in the caller's thread."""
        self._set_state(RunState.RUNNING)
        results = []
        for filter in self.filters:
            try:
                results.append(self._run_task(filter))
            except Exception as e:
                logger.exception("Filter task %s raised", filter.name)
                results.append(self._failed_result(filter, e))
        self._set_state(RunState.JOINING)
        return results

    def _failed_result(self, filter: ProcessingFilter, error: Exception) -> FilterResult:
        """Record a task that raised instead of returning a result."""
        result = FilterResult(
            name=filter.name,
            elapsed=0.0,
            output_path=self.output_path(filter),
            status=FilterStatus.FAILURE,
            error=f"{type(error).__name__}: {error}",
        )
        self.reporter.completed(result)
        return result
