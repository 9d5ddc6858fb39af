"""Run benchmark adapters as subprocesses.

The request is written to the adapter's stdin as one JSON document and the
stream is closed. stdout and stderr are drained concurrently with waiting for
exit, so an adapter writing a large result never blocks on a full pipe. That
work races a timer; if the timer fires first the process tree is killed and
the call fails with a TIMEOUT error.

Usage:
    from leb.adapters.runner import AdapterRunner
    from leb.validator import OutputValidator

    runner = AdapterRunner(OutputValidator())
    result = runner.run("keepsuit", AdapterInput(template="{{ name }}", ...))
    result.output.timings.parse_ms
"""

import asyncio
import contextlib
import json
import os
import time
from dataclasses import dataclass

import psutil

from leb.adapters.registry import AdapterConfig, get_adapter_config
from leb.errors import AdapterError
from leb.models.adapter_models import AdapterInput, AdapterOutput
from leb.models.constants import DEFAULT_TIMEOUT_MS
from leb.utils.logger import Logger
from leb.validator import OutputValidationError, OutputValidator


@dataclass(frozen=True)
class AdapterResult:
    """Validated adapter output plus wall-clock time of the whole call.

    ``execution_time_ms`` covers spawn, I/O and exit. It is for diagnostics
    only; reported benchmark metrics come from the adapter's own timings.
    """

    output: AdapterOutput
    execution_time_ms: float


@dataclass(frozen=True)
class _ProcessOutput:
    stdout: str
    stderr: str
    exit_code: int


class AdapterRunner:
    """Executes adapters and classifies their failures.

    Every failure is raised as an ``AdapterError`` whose ``kind`` is one of
    TIMEOUT, CRASHED, MALFORMED_OUTPUT, INVALID_OUTPUT or SPAWN_FAILED.

    Example:
        >>> runner = AdapterRunner(OutputValidator(), default_timeout_ms=60_000)
        >>> try:
        ...     result = runner.run("shopify", adapter_input)
        ... except AdapterError as e:
        ...     if e.kind == AdapterErrorKind.TIMEOUT:
        ...         ...
    """

    def __init__(
        self,
        validator: OutputValidator,
        default_timeout_ms: int = DEFAULT_TIMEOUT_MS,
        adapters_dir: str | os.PathLike[str] | None = None,
    ) -> None:
        self._validator = validator
        self._default_timeout_ms = default_timeout_ms
        self._adapters_dir = adapters_dir

    @property
    def default_timeout_ms(self) -> int:
        return self._default_timeout_ms

    def resolve(self, adapter: str | AdapterConfig) -> AdapterConfig:
        """Turn an adapter name into its config (configs pass through)."""
        if isinstance(adapter, AdapterConfig):
            return adapter
        return get_adapter_config(adapter, self._adapters_dir)

    def run(
        self,
        adapter: str | AdapterConfig,
        adapter_input: AdapterInput,
        timeout_ms: int | None = None,
    ) -> AdapterResult:
        """Run an adapter to completion (blocking).

        Args:
            adapter: Adapter name or explicit AdapterConfig.
            adapter_input: Request to send on stdin.
            timeout_ms: Deadline in milliseconds (default: runner default).

        Returns:
            AdapterResult with the validated output.

        Raises:
            AdapterError: If the adapter times out, crashes, or returns
                unparsable or invalid output.
        """
        return asyncio.run(self.run_async(adapter, adapter_input, timeout_ms))

    async def run_async(
        self,
        adapter: str | AdapterConfig,
        adapter_input: AdapterInput,
        timeout_ms: int | None = None,
    ) -> AdapterResult:
        """Async variant of :meth:`run`."""
        config = self.resolve(adapter)
        timeout = timeout_ms if timeout_ms is not None else self._default_timeout_ms
        log = Logger.get_or_default("runner")

        start = time.perf_counter()
        log.debug(f"Spawning {config.name}: {' '.join(config.command)}")
        try:
            proc = await asyncio.create_subprocess_exec(
                *config.command,
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                env={**os.environ, **config.env},
            )
        except OSError as e:
            raise AdapterError.spawn_failed(config.name, str(e)) from e

        payload = adapter_input.model_dump_json().encode("utf-8")
        result = await self._race(proc, payload, timeout, config.name)
        execution_time_ms = (time.perf_counter() - start) * 1000
        log.debug(
            f"{config.name} exited with code {result.exit_code} "
            f"in {execution_time_ms:.1f}ms"
        )

        output = self._interpret(config.name, result, adapter_input.iterations)
        return AdapterResult(output=output, execution_time_ms=execution_time_ms)

    async def _race(
        self,
        proc: asyncio.subprocess.Process,
        payload: bytes,
        timeout_ms: int,
        adapter_name: str,
    ) -> _ProcessOutput:
        """Race process completion against the timer; first to finish wins."""
        completion = asyncio.create_task(self._communicate(proc, payload))
        timer = asyncio.create_task(asyncio.sleep(timeout_ms / 1000))
        try:
            done, _ = await asyncio.wait(
                {completion, timer}, return_when=asyncio.FIRST_COMPLETED
            )
        finally:
            timer.cancel()

        if completion in done:
            return completion.result()

        # Timed out: partial output is discarded
        completion.cancel()
        await self._kill(proc)
        with contextlib.suppress(asyncio.CancelledError):
            await completion
        Logger.get_or_default("runner").warning(
            f"{adapter_name} killed after {timeout_ms}ms timeout"
        )
        raise AdapterError.timeout(adapter_name, timeout_ms)

    async def _communicate(
        self, proc: asyncio.subprocess.Process, payload: bytes
    ) -> _ProcessOutput:
        if proc.stdin is None or proc.stdout is None or proc.stderr is None:
            raise RuntimeError("Adapter process was started without pipes")

        try:
            proc.stdin.write(payload)
            await proc.stdin.drain()
        except (BrokenPipeError, ConnectionResetError):
            # Adapter exited before reading its input; the exit code tells why
            Logger.get_or_default("runner").debug("Adapter closed stdin early")
        finally:
            proc.stdin.close()

        stdout, stderr, exit_code = await asyncio.gather(
            proc.stdout.read(), proc.stderr.read(), proc.wait()
        )
        return _ProcessOutput(
            stdout=stdout.decode("utf-8", errors="replace"),
            stderr=stderr.decode("utf-8", errors="replace"),
            exit_code=exit_code,
        )

    async def _kill(self, proc: asyncio.subprocess.Process) -> None:
        """Forcibly terminate the adapter and any children it spawned."""
        try:
            children = psutil.Process(proc.pid).children(recursive=True)
        except psutil.NoSuchProcess:
            children = []
        for child in children:
            with contextlib.suppress(psutil.NoSuchProcess):
                child.kill()
        with contextlib.suppress(ProcessLookupError):
            proc.kill()
        await proc.wait()
        psutil.wait_procs(children, timeout=1.0)

    def _interpret(
        self, adapter_name: str, result: _ProcessOutput, iterations: int
    ) -> AdapterOutput:
        """Classify a finished process into output or AdapterError."""
        if result.exit_code != 0:
            raise AdapterError.crashed(adapter_name, result.exit_code, result.stderr)

        try:
            raw = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            raise AdapterError.malformed_output(
                adapter_name, result.stdout, result.stderr
            ) from e

        try:
            output = self._validator.validate_adapter_output(raw)
        except OutputValidationError as e:
            raise AdapterError.invalid_output(
                adapter_name, e.errors, result.stderr
            ) from e

        errors = [
            f"/timings/{phase}: expected {iterations} items, got {len(values)}"
            for phase, values in (
                ("parse_ms", output.timings.parse_ms),
                ("render_ms", output.timings.render_ms),
            )
            if len(values) != iterations
        ]
        if errors:
            raise AdapterError.invalid_output(adapter_name, errors, result.stderr)

        return output
