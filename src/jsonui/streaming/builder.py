"""Incremental tree construction from a line-delimited patch stream."""

from collections.abc import Callable, Iterable
from typing import Any

from ..core.logging_config import resolve_logger
from ..core.stream import LineBuffer, StreamCounter
from .patches import DEFAULT_MAX_DEPTH, DEFAULT_MAX_LINE_SIZE, JsonPatch, apply_patch, parse_patch_line
from .tree import UITree

SnapshotCallback = Callable[[UITree], None]


class TreeBuilder:
    """
    Applies patches strictly in arrival order and publishes each snapshot.

    Chunks may split a record anywhere, including inside a multi-byte
    character; only complete lines are parsed. A bad line is logged and
    skipped without aborting the stream.
    """

    def __init__(
        self,
        tree: UITree | None = None,
        max_line_size: int = DEFAULT_MAX_LINE_SIZE,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Any | None = None,
    ) -> None:
        self.max_line_size = max_line_size
        self.max_depth = max_depth
        self.logger = resolve_logger(logger, __name__)
        self.counter = StreamCounter()
        self._tree = tree or UITree()
        self._buffer = LineBuffer()
        self._subscribers: list[SnapshotCallback] = []

    @property
    def tree(self) -> UITree:
        """Latest snapshot."""
        return self._tree

    def subscribe(self, callback: SnapshotCallback) -> Callable[[], None]:
        """Register a snapshot listener; returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def apply(self, patch: JsonPatch) -> UITree:
        """Apply one parsed patch and publish the result if it changed."""
        updated = apply_patch(self._tree, patch, logger=self.logger)
        if updated is not self._tree:
            self._tree = updated
            for callback in list(self._subscribers):
                callback(updated)
        return self._tree

    def apply_line(self, line: str) -> UITree | None:
        """Parse and apply one line; returns the new snapshot, if any."""
        patch = parse_patch_line(
            line, max_size=self.max_line_size, max_depth=self.max_depth, logger=self.logger
        )
        if patch is None:
            if line.strip():
                self.counter.track_line(applied=False)
            return None

        previous = self._tree
        current = self.apply(patch)
        self.counter.track_line(applied=current is not previous)
        return current if current is not previous else None

    def feed(self, chunk: str | bytes) -> list[UITree]:
        """
        Consume a chunk of the stream.

        Returns:
            Snapshots produced by the lines this chunk completed
        """
        self.counter.track_chunk()
        snapshots = []
        for line in self._buffer.add(chunk):
            if (snapshot := self.apply_line(line)) is not None:
                snapshots.append(snapshot)
        return snapshots

    def feed_all(self, chunks: Iterable[str | bytes]) -> UITree:
        """Consume a whole stream and return the final snapshot."""
        for chunk in chunks:
            self.feed(chunk)
        self.flush()
        return self._tree

    def flush(self) -> UITree | None:
        """Apply a trailing line that never received its newline."""
        tail = self._buffer.flush()
        if tail is None:
            return None
        return self.apply_line(tail)

    def reset(self, tree: UITree | None = None) -> None:
        """Drop buffered input and start over from ``tree`` (or empty)."""
        self._tree = tree or UITree()
        self._buffer = LineBuffer()
        chunks, lines, skipped = self.counter.reset()
        self.logger.debug("builder_reset", chunks=chunks, lines=lines, skipped=skipped)
