"""
Turn encoding and decoding for the simulated console.

The oracle is stateless, so every turn is a self-contained request:
either a fresh run (code and language) or a resume (code, language, the
transcript so far and the line the user typed). Replies are decoded into
the text the user should see now and whether the program is paused on a
blocking read.

A reply pauses when its output contains the blocking-read marker, which
also marks where the visible output ends, or when it sets the structured
`pendingInput` flag.
"""

from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from codeforge import config

# Returns the index of the first blocking-read marker in `text`, or None
# when the text does not pause.
MarkerDetector = Callable[[str], Optional[int]]


@dataclass(frozen=True)
class TurnRequest:
    source_code: str
    language_id: str
    stdin_line: str | None = None
    transcript: list[Any] | None = None

    @property
    def is_resume(self) -> bool:
        return self.stdin_line is not None

    def as_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for the execution oracle."""
        kwargs: dict[str, Any] = {
            "source_code": self.source_code,
            "language_id": self.language_id,
        }
        if self.is_resume:
            kwargs["stdin_line"] = self.stdin_line
            kwargs["transcript"] = list(self.transcript or [])
        return kwargs


@dataclass(frozen=True)
class DecodedTurn:
    output_text: str = ""
    pending_input: bool = False
    image: str | None = None
    transcript: list[Any] | None = None


def find_blocking_read(text: str, marker: str | None = None) -> int | None:
    """Locate the first occurrence of the blocking-read marker."""
    marker = marker or config.input_marker()
    index = text.find(marker)
    return index if index >= 0 else None


def marker_detector(marker: str) -> MarkerDetector:
    """Build a detector bound to a fixed marker token."""

    def detect(text: str) -> int | None:
        return find_blocking_read(text, marker)

    return detect


def encode(
    source_code: str,
    language_id: str,
    transcript: list[Any] | None = None,
    new_input_line: str | None = None,
) -> TurnRequest | None:
    """Build the request for the next turn.

    Returns None for a snippet that is blank after trimming; such a run
    never reaches the oracle.
    """
    if not source_code or not source_code.strip():
        return None
    if new_input_line is None:
        return TurnRequest(source_code=source_code, language_id=language_id)
    return TurnRequest(
        source_code=source_code,
        language_id=language_id,
        stdin_line=new_input_line,
        transcript=list(transcript or []),
    )


def decode(reply: Any, detector: MarkerDetector = find_blocking_read) -> DecodedTurn:
    """Split an oracle reply into visible output and pause state.

    Only the first marker is honoured. A reply with no usable `output`
    decodes as empty, non-paused output.
    """
    if not isinstance(reply, Mapping):
        return DecodedTurn()

    output = reply.get("output")
    if not isinstance(output, str):
        output = ""

    image = reply.get("image")
    if not isinstance(image, str) or not image:
        image = None

    transcript = reply.get("transcript")
    if not isinstance(transcript, list):
        transcript = None

    pending = False
    index = detector(output) if output else None
    if index is not None:
        output = output[:index]
        pending = True
    elif reply.get("pendingInput") is True:
        pending = True

    return DecodedTurn(output_text=output, pending_input=pending, image=image, transcript=transcript)
