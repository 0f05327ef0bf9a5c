"""Line reader over an asynchronous byte stream."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class ChunkKind(Enum):
    """What a stream chunk carries."""

    LINE = "line"
    BYTES = "bytes"
    EOF = "eof"


@dataclass(frozen=True)
class StreamChunk:
    """A piece of a stream: a line, raw bytes, or the end of the stream."""

    kind: ChunkKind
    data: Union[str, bytes, None] = None


class AsyncStreamReader:
    """Reads newline-delimited lines from anything with an async readline()."""

    def __init__(self, reader: Any) -> None:
        self._reader = reader
        self._eof = False

    async def try_read_line(self) -> StreamChunk | None:
        """Read the next line; an EOF chunk once, then None ever after."""
        if self._eof:
            return None
        data = await self._reader.readline()
        if not data:
            self._eof = True
            return StreamChunk(ChunkKind.EOF)
        text = data.decode("utf-8") if isinstance(data, (bytes, bytearray)) else data
        return StreamChunk(ChunkKind.LINE, text.rstrip("\n"))

    def is_eof(self) -> bool:
        """True once the end of the stream has been reached."""
        return self._eof