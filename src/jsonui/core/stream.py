"""Line framing for chunked text streams."""

import codecs
from collections.abc import AsyncGenerator, AsyncIterator, Generator, Iterator
from dataclasses import dataclass, field


@dataclass
class LineBuffer:
    """Buffers chunks and releases complete newline-terminated lines."""

    encoding: str = "utf-8"
    _buffer: str = field(default="", init=False, repr=False)
    _decoder: codecs.IncrementalDecoder = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._decoder = codecs.getincrementaldecoder(self.encoding)(errors="replace")

    def add(self, chunk: str | bytes) -> list[str]:
        """Add a chunk, return the lines it completed."""
        if isinstance(chunk, bytes):
            # Multi-byte sequences may straddle chunk boundaries
            chunk = self._decoder.decode(chunk)
        self._buffer += chunk
        if "\n" not in self._buffer:
            return []
        *lines, self._buffer = self._buffer.split("\n")
        return [line.rstrip("\r") for line in lines]

    def flush(self) -> str | None:
        """Return the trailing unterminated line, if any."""
        tail = self._buffer + self._decoder.decode(b"", final=True)
        self._buffer = ""
        self._decoder.reset()
        tail = tail.rstrip("\r")
        return tail if tail else None

    @property
    def pending(self) -> str:
        """Text received but not yet released as a line."""
        return self._buffer


@dataclass
class StreamCounter:
    """Track chunk and line statistics."""

    chunks: int = 0
    lines: int = 0
    skipped: int = 0

    def track_chunk(self) -> None:
        self.chunks += 1

    def track_line(self, applied: bool) -> None:
        self.lines += 1
        if not applied:
            self.skipped += 1

    def reset(self) -> tuple[int, int, int]:
        """Reset and return counts."""
        result = (self.chunks, self.lines, self.skipped)
        self.chunks = 0
        self.lines = 0
        self.skipped = 0
        return result


async def iter_lines(stream: AsyncIterator[str | bytes]) -> AsyncGenerator[str, None]:
    """
    Split an async chunk stream into lines.

    Args:
        stream: Async chunk iterator

    Yields:
        Complete lines, then the trailing partial line
    """
    buffer = LineBuffer()

    async for chunk in stream:
        for line in buffer.add(chunk):
            yield line

    if tail := buffer.flush():
        yield tail


def iter_lines_sync(stream: Iterator[str | bytes]) -> Generator[str, None, None]:
    """
    Split a sync chunk stream into lines.

    Args:
        stream: Chunk iterator

    Yields:
        Complete lines, then the trailing partial line
    """
    buffer = LineBuffer()

    for chunk in stream:
        yield from buffer.add(chunk)

    if tail := buffer.flush():
        yield tail
