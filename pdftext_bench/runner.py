"""
Benchmark runner for PDFText-Bench.

Runs one engine against one document and always produces exactly one
BenchmarkResult, whatever the engine does. The measured duration covers the
engine's ``extract`` call only.

Two isolation modes are supported:

- ``inline``: the engine runs in this process. Python exceptions escaping the
  engine are reported as ``Crashed``. A native fault (segfault, abort) takes
  the whole process down.
- ``subprocess``: each call runs in a short-lived child process that times
  the call itself and sends the outcome back through a pipe. A child that
  dies without answering is reported as ``Crashed``.

With a timeout, an inline call runs on a daemon thread that is abandoned when
the timeout expires; the engine keeps running in the background until it
returns on its own. A subprocess call that exceeds the timeout is killed.
"""

import logging
import multiprocessing
import signal
import threading
from enum import Enum
from typing import Optional, Tuple

from .engines.base import DocumentSource, ExtractionEngine
from .errors import ConfigurationError
from .schema import (
    BenchmarkResult, ErrorKind, ExtractionFailure, ExtractionOutcome, ExtractionSuccess
)
from .utils.logging import log_extraction_end, log_extraction_error, log_extraction_start
from .utils.timers import Timer

logger = logging.getLogger(__name__)

# Seconds to wait for a terminated child before killing it
KILL_GRACE_PERIOD = 2.0


class Isolation(str, Enum):
    """Where an engine call is executed."""
    INLINE = "inline"
    SUBPROCESS = "subprocess"


def describe_exception(error: BaseException) -> str:
    """One-line diagnostic for an exception."""
    message = str(error)
    name = type(error).__name__
    return f"{name}: {message}" if message else name


def describe_exit_code(exitcode: Optional[int]) -> str:
    """Describe how a worker process ended."""
    if exitcode is None:
        return "engine process did not exit"
    if exitcode < 0:
        try:
            signal_name = signal.Signals(-exitcode).name
        except ValueError:
            signal_name = f"signal {-exitcode}"
        return f"engine process killed by {signal_name}"
    return f"engine process exited with code {exitcode} without reporting a result"


def invoke_engine(engine: ExtractionEngine, source: DocumentSource) -> Tuple[ExtractionOutcome, float]:
    """
    Call the engine once and time the call.

    Returns:
        (outcome, duration in seconds)
    """
    timer = Timer()
    timer.start()
    try:
        outcome = engine.extract(source)
    except (Exception, SystemExit) as e:
        duration = timer.stop()
        logger.debug(f"{engine.engine_id} raised {type(e).__name__}", exc_info=True)
        return ExtractionFailure(error_kind=ErrorKind.CRASHED, message=describe_exception(e)), duration

    duration = timer.stop()

    if not isinstance(outcome, (ExtractionSuccess, ExtractionFailure)):
        return ExtractionFailure(
            error_kind=ErrorKind.CRASHED,
            message=f"engine returned {type(outcome).__name__} instead of an outcome"
        ), duration

    return outcome, duration


def _subprocess_main(conn, engine: ExtractionEngine, source: DocumentSource) -> None:
    """Child process entry point."""
    try:
        conn.send(invoke_engine(engine, source))
    finally:
        conn.close()


def _mp_context():
    # fork does not pickle the engine, so engines defined anywhere can be isolated
    if "fork" in multiprocessing.get_all_start_methods():
        return multiprocessing.get_context("fork")
    return multiprocessing.get_context("spawn")


class BenchmarkRunner:
    """Execute one extraction call under the configured isolation policy."""

    def __init__(
        self,
        isolation: Isolation = Isolation.SUBPROCESS,
        timeout: Optional[float] = None
    ):
        """
        Initialize runner.

        Args:
            isolation: Where engine calls run
            timeout: Seconds to wait for an engine, None to wait indefinitely
        """
        if timeout is not None and timeout <= 0:
            raise ConfigurationError("Timeout must be positive", timeout=timeout)

        self.isolation = Isolation(isolation)
        self.timeout = timeout

    def run(self, engine: ExtractionEngine, source: DocumentSource) -> BenchmarkResult:
        """
        Benchmark one engine on one document.

        Never raises for engine failures and never retries.

        Args:
            engine: Engine to run
            source: Document to extract

        Returns:
            BenchmarkResult for (engine, source.path)
        """
        file_path = str(source.path)
        log_extraction_start(logger, engine.engine_id, file_path, isolation=self.isolation.value)

        if self.isolation is Isolation.SUBPROCESS:
            outcome, duration = self._run_in_subprocess(engine, source)
        elif self.timeout is not None:
            outcome, duration = self._run_in_thread(engine, source)
        else:
            outcome, duration = invoke_engine(engine, source)

        result = BenchmarkResult(
            engine=engine.engine_id,
            file=source.path,
            duration=duration,
            outcome=outcome
        )

        if isinstance(outcome, ExtractionFailure):
            log_extraction_error(
                logger, engine.engine_id, file_path, outcome.error_kind.value, outcome.message
            )
        log_extraction_end(logger, engine.engine_id, file_path, result.success, duration)

        return result

    def _timeout_failure(self, engine: ExtractionEngine) -> ExtractionFailure:
        return ExtractionFailure(
            error_kind=ErrorKind.TIMEOUT,
            message=f"{engine.engine_id} did not finish within {self.timeout:g} s"
        )

    def _run_in_thread(
        self,
        engine: ExtractionEngine,
        source: DocumentSource
    ) -> Tuple[ExtractionOutcome, float]:
        box = {}

        def target():
            box['result'] = invoke_engine(engine, source)

        worker = threading.Thread(
            target=target, name=f"engine-{engine.engine_id}", daemon=True
        )

        waited = Timer()
        waited.start()
        worker.start()
        worker.join(self.timeout)

        if worker.is_alive():
            logger.warning(
                f"{engine.engine_id} exceeded {self.timeout:g} s; "
                f"abandoning worker thread, it may keep running"
            )
            return self._timeout_failure(engine), waited.stop()

        if 'result' not in box:
            return ExtractionFailure(
                error_kind=ErrorKind.CRASHED,
                message="engine worker thread exited without a result"
            ), waited.stop()

        return box['result']

    def _run_in_subprocess(
        self,
        engine: ExtractionEngine,
        source: DocumentSource
    ) -> Tuple[ExtractionOutcome, float]:
        context = _mp_context()
        parent_conn, child_conn = context.Pipe(duplex=False)
        process = context.Process(
            target=_subprocess_main,
            args=(child_conn, engine, source),
            name=f"engine-{engine.engine_id}",
            daemon=True
        )

        waited = Timer()
        waited.start()
        process.start()
        # Keep only the child's copy open so a dead child reads as EOF
        child_conn.close()

        try:
            if not parent_conn.poll(self.timeout):
                elapsed = waited.stop()
                logger.warning(f"{engine.engine_id} exceeded {self.timeout:g} s; killing worker process")
                self._kill(process)
                return self._timeout_failure(engine), elapsed

            try:
                outcome, duration = parent_conn.recv()
            except EOFError:
                # The child died before timing itself; report the time waited
                elapsed = waited.stop()
                process.join()
                return ExtractionFailure(
                    error_kind=ErrorKind.CRASHED,
                    message=describe_exit_code(process.exitcode)
                ), elapsed

            process.join(KILL_GRACE_PERIOD)
            if process.is_alive():
                self._kill(process)
            return outcome, duration
        finally:
            parent_conn.close()

    @staticmethod
    def _kill(process) -> None:
        process.terminate()
        process.join(KILL_GRACE_PERIOD)
        if process.is_alive():
            process.kill()
            process.join()
