"""Submission pipeline: parse, dispatch and turn the outcome into a render result."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Optional, Set, Tuple

from vfsh.command_parser import parse_line
from vfsh.commands.registry import CommandRegistry, dispatch
from vfsh.errors import ShellError
from vfsh.history import HistoryNavigator

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Outcome of one submitted line."""
    markup: str
    error: bool = False
    sequence: int = 0
    line: str = ""


class Shell:
    """Runs submitted lines against a registry and records them in history."""

    def __init__(self, registry: CommandRegistry, history: Optional[HistoryNavigator] = None):
        self.registry = registry
        self.history = history if history is not None else HistoryNavigator()

    async def execute(self, line: str, sequence: int = 0) -> RenderResult:
        """
        Execute one line without recording it.

        Every failure becomes an error result, so a bad line never ends the
        session.

        Args:
            line: Raw input line
            sequence: Submission number carried into the result

        Returns:
            RenderResult with markup on success, or the error message
        """
        try:
            command = parse_line(line)
            markup = await dispatch(self.registry, command)
        except ShellError as e:
            logger.debug("Command failed: %s", line, exc_info=True)
            return RenderResult(str(e), error=True, sequence=sequence, line=line)
        except Exception as e:
            logger.exception("Unexpected error running %r", line)
            return RenderResult(str(e) or type(e).__name__, error=True, sequence=sequence, line=line)
        return RenderResult(markup, sequence=sequence, line=line)

    def record(self, line: str):
        """Add a submitted line to history."""
        self.history.append(line)

    async def submit(self, line: str, sequence: int = 0) -> RenderResult:
        """Record a line in history, then execute it."""
        self.record(line)
        return await self.execute(line, sequence)


class SubmissionQueue:
    """Feeds submitted lines to a shell and hands results to a renderer.

    In ordered mode a single worker drains a FIFO queue, so one submission is
    in flight at a time and results render in submission order. Unordered
    mode starts every submission immediately; results may finish in any
    order and carry their sequence number.
    """

    def __init__(self, shell: Shell, render: Callable[[RenderResult], None], ordered: bool = True):
        self.shell = shell
        self.render = render
        self.ordered = ordered
        self._sequence = 0
        self._queue: Optional["asyncio.Queue[Tuple[int, str]]"] = None
        self._worker: Optional[asyncio.Task] = None
        self._tasks: Set[asyncio.Task] = set()

    def start(self):
        """Start the worker; must be called from a running event loop."""
        if self.ordered and self._worker is None:
            self._queue = asyncio.Queue()
            self._worker = asyncio.create_task(self._drain())

    def submit(self, line: str) -> int:
        """Record a line and schedule it; returns its sequence number."""
        self.shell.record(line)
        self._sequence += 1
        sequence = self._sequence

        if self.ordered:
            self.start()
            self._queue.put_nowait((sequence, line))
        else:
            task = asyncio.create_task(self._run(sequence, line))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)
        return sequence

    async def _run(self, sequence: int, line: str):
        result = await self.shell.execute(line, sequence)
        try:
            self.render(result)
        except Exception:
            logger.exception("Failed to render result for %r", line)

    async def _drain(self):
        while True:
            sequence, line = await self._queue.get()
            try:
                await self._run(sequence, line)
            finally:
                self._queue.task_done()

    async def join(self):
        """Wait until every submitted line has been rendered."""
        if self._queue is not None:
            await self._queue.join()
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self):
        """Finish pending submissions and stop the worker."""
        await self.join()
        if self._worker is not None:
            self._worker.cancel()
            try:
                await self._worker
            except asyncio.CancelledError:
                pass
            self._worker = None
