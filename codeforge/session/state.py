"""
Interactive execution session.

A Session turns the stateless execution oracle into a console that can
pause on a blocking read and resume once the user types a line:

    IDLE -> RUNNING -> (AWAITING_INPUT <-> RUNNING) -> COMPLETE
                    \\-> FAILED (oracle failure while RUNNING)

COMPLETE and FAILED are terminal until the next start() or reset().

The session holds one Run at a time. Run is immutable; every transition
swaps in an updated copy, so a Run handed to an observer is a snapshot
that later transitions cannot touch.

Callers are expected to serialize start/supply_input/reset. A reply that
arrives after start() or reset() superseded its run is dropped.
"""

import asyncio
import logging
import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

from codeforge.session import turns

logger = logging.getLogger("codeforge")

Executor = Callable[..., Awaitable[Mapping[str, Any]]]


class RunStatus(str, Enum):
    IDLE = "IDLE"
    RUNNING = "RUNNING"
    AWAITING_INPUT = "AWAITING_INPUT"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.COMPLETE, RunStatus.FAILED)


@dataclass(frozen=True)
class Run:
    run_id: str = ""
    source_code: str = ""
    language_id: str = ""
    status: RunStatus = RunStatus.IDLE
    transcript: tuple[Any, ...] = ()
    visible_output: str = ""
    pending_image: Optional[str] = None
    turns: int = 0
    error: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        """Client-facing view. The transcript is opaque and not exposed."""
        return {
            "runId": self.run_id,
            "code": self.source_code,
            "language": self.language_id,
            "status": self.status.value,
            "output": self.visible_output,
            "image": self.pending_image,
            "awaitingInput": self.status is RunStatus.AWAITING_INPUT,
            "turns": self.turns,
            "error": self.error,
        }


FinishedCallback = Callable[[Run], None]


class Session:
    """One editor's console: at most one Run in flight."""

    def __init__(
        self,
        executor: Executor,
        on_finished: FinishedCallback | None = None,
        detector: turns.MarkerDetector = turns.find_blocking_read,
    ):
        self._execute = executor
        self._on_finished = on_finished
        self._detector = detector
        self._generation = 0
        self._run = Run()

    @property
    def run(self) -> Run:
        return self._run

    @property
    def status(self) -> RunStatus:
        return self._run.status

    def snapshot(self) -> Run:
        return self._run

    async def start(self, source_code: str, language_id: str) -> Run:
        """Begin a new run, discarding whatever run was in flight."""
        self._generation += 1
        self._run = Run(
            run_id=uuid.uuid4().hex,
            source_code=source_code,
            language_id=language_id,
        )

        request = turns.encode(source_code, language_id)
        if request is None:
            logger.info("Run %s: empty snippet, nothing to execute", self._run.run_id)
            self._run = replace(self._run, status=RunStatus.COMPLETE)
            self._notify_finished()
            return self._run

        logger.info("Run %s: starting %s snippet", self._run.run_id, language_id)
        await self._turn(request)
        return self._run

    async def supply_input(self, line: str) -> bool:
        """Answer the pending blocking read.

        Returns False, changing nothing, unless the run is AWAITING_INPUT.
        """
        if self._run.status is not RunStatus.AWAITING_INPUT:
            logger.warning(
                "Ignoring input: run %s is %s, not awaiting input",
                self._run.run_id or "-", self._run.status.value,
            )
            return False

        # Echo the typed line the way a terminal would.
        self._run = replace(self._run, visible_output=f"{self._run.visible_output}{line}\n")
        request = turns.encode(
            self._run.source_code,
            self._run.language_id,
            transcript=list(self._run.transcript),
            new_input_line=line,
        )
        await self._turn(request)
        return True

    def reset(self) -> None:
        """Return to IDLE and drop all run state. Always succeeds."""
        self._generation += 1
        self._run = Run()

    async def _turn(self, request: turns.TurnRequest) -> None:
        generation = self._generation
        self._run = replace(self._run, status=RunStatus.RUNNING)

        try:
            reply = await self._execute(**request.as_kwargs())
        except asyncio.CancelledError:
            if generation == self._generation:
                self._fail("Execution cancelled")
            raise
        except Exception as e:
            if generation != self._generation:
                logger.info("Discarding failure of superseded run: %s", e)
                return
            logger.error("Run %s: oracle call failed: %s", self._run.run_id, e)
            self._fail(str(e) or e.__class__.__name__)
            return

        if generation != self._generation:
            logger.info("Discarding reply for superseded run")
            return

        decoded = turns.decode(reply, self._detector)
        if decoded.transcript is not None:
            transcript = tuple(decoded.transcript)
        else:
            transcript = self._run.transcript + ({
                "stdin": request.stdin_line,
                "output": decoded.output_text,
                "pendingInput": decoded.pending_input,
            },)

        status = RunStatus.AWAITING_INPUT if decoded.pending_input else RunStatus.COMPLETE
        self._run = replace(
            self._run,
            status=status,
            transcript=transcript,
            visible_output=self._run.visible_output + decoded.output_text,
            pending_image=decoded.image if decoded.image is not None else self._run.pending_image,
            turns=self._run.turns + 1,
        )
        logger.info("Run %s: turn %d -> %s", self._run.run_id, self._run.turns, status.value)

        if status.is_terminal:
            self._notify_finished()

    def _fail(self, message: str) -> None:
        output = self._run.visible_output
        if output and not output.endswith("\n"):
            output += "\n"
        self._run = replace(
            self._run,
            status=RunStatus.FAILED,
            visible_output=f"{output}Error: {message}\n",
            error=message,
        )
        self._notify_finished()

    def _notify_finished(self) -> None:
        if self._on_finished is None:
            return
        try:
            self._on_finished(self._run)
        except Exception as e:
            logger.warning("Run %s: finish observer failed: %s", self._run.run_id, e)
