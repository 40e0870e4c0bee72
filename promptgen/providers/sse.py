"""
Incremental decoder for OpenAI-style Server-Sent-Events chat streams.

Each network chunk is fed as it arrives. Only ``data: `` lines carry payload;
``data: [DONE]`` ends the stream, anything else is JSON whose
``choices[0].delta.content`` fragment is appended to the running buffer.
Every appended fragment produces one snapshot of the whole buffer.
"""

import codecs
import json
import logging
from dataclasses import dataclass
from typing import List, Optional

logger = logging.getLogger(__name__)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


@dataclass(frozen=True)
class StreamFrame:
    content: Optional[str] = None
    done: bool = False


def parse_frame(line: str) -> Optional[StreamFrame]:
    """Turn one SSE line into a frame, or None when the line carries no payload.

    Raises ValueError when a ``data:`` payload is not valid JSON.
    """
    line = line.rstrip("\r")
    if not line.startswith(DATA_PREFIX):
        return None
    payload = line[len(DATA_PREFIX):].strip()
    if payload == DONE_SENTINEL:
        return StreamFrame(done=True)
    data = json.loads(payload)
    try:
        content = data["choices"][0]["delta"].get("content")
    except (KeyError, IndexError, TypeError, AttributeError):
        return StreamFrame()
    if isinstance(content, str) and content:
        return StreamFrame(content=content)
    return StreamFrame()


class SseDecoder:
    def __init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._pending = ""
        self._parts: List[str] = []
        self.done = False
        # count of data: frames parsed, sentinel included
        self.frames = 0

    @property
    def text(self) -> str:
        return "".join(self._parts)

    def feed(self, chunk: bytes) -> List[str]:
        """Decode one chunk and return the snapshots it produced, in order."""
        if self.done:
            return []
        data = self._pending + self._decoder.decode(chunk)
        lines = data.split("\n")
        # the last element is an unterminated line; hold it for the next chunk
        self._pending = lines.pop()
        return self._consume(lines)

    def close(self) -> List[str]:
        """Flush whatever is left once the source has closed the stream."""
        if self.done:
            return []
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        return self._consume([tail]) if tail.strip() else []

    def _consume(self, lines: List[str]) -> List[str]:
        snapshots: List[str] = []
        for line in lines:
            try:
                frame = parse_frame(line)
            except ValueError:
                logger.warning("skipping malformed stream frame: %.200s", line)
                continue
            if frame is None:
                continue
            self.frames += 1
            if frame.done:
                self.done = True
                self._pending = ""
                break
            if frame.content:
                self._parts.append(frame.content)
                snapshots.append(self.text)
        return snapshots
