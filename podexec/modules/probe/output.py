"""Bounded output capture for a single probe invocation."""

from typing import List, Tuple


class OutputSink:
    """Append-only, ordered sequence of received text chunks."""

    def __init__(self, max_chunks: int = 1024):
        if max_chunks < 0:
            raise ValueError("max_chunks must be >= 0")
        self.max_chunks = max_chunks
        self.dropped = 0
        self._chunks: List[str] = []

    def append(self, chunk: str) -> None:
        """Record a chunk, empty chunks are ignored."""
        if not chunk:
            return
        if len(self._chunks) >= self.max_chunks:
            self.dropped += 1
            return
        self._chunks.append(chunk)

    @property
    def chunks(self) -> Tuple[str, ...]:
        return tuple(self._chunks)

    def __len__(self) -> int:
        return len(self._chunks)
