"""StreamingPipeline: decodes a line source into record, error and done streams.

One producer task decodes lines strictly in order and hands each result to a
consumer through a rendezvous ``Channel``: ``send`` only returns once a
consumer has taken the item, so a slow consumer throttles the producer and
nothing is buffered ahead or dropped.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Callable, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from ingester.core.exceptions import BadParameterError, ChannelClosedError, DecodeError
from ingester.core.logging_config import get_logger
from ingester.decoding.decoder import RecordDecoder
from ingester.models.record import Record
from ingester.models.results import DecodeResult

T = TypeVar("T")

LineSource = Iterable[bytes] | AsyncIterable[bytes]

logger = get_logger("pipeline")

_CLOSED = object()


class Channel(Generic[T]):
    """Unbuffered single-producer channel with close semantics."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=1)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, item: T) -> None:
        """Hand ``item`` to a consumer, waiting until it has been received."""
        if self._closed:
            raise ChannelClosedError(self.name)
        await self._queue.put(item)
        await self._queue.join()

    async def receive(self) -> T:
        item = await self._queue.get()
        if item is _CLOSED:
            # Leave the marker in place so every later receive also sees it.
            self._queue.put_nowait(_CLOSED)
            raise ChannelClosedError(self.name)
        self._queue.task_done()
        return item

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        # Drop an item a cancelled send left behind; nobody is waiting for it.
        while not self._queue.empty():
            self._queue.get_nowait()
            self._queue.task_done()
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            try:
                yield await self.receive()
            except ChannelClosedError:
                return


@dataclass(frozen=True)
class ParseStreams:
    """Read-only view of the three pipeline output streams."""

    records: Channel[Record]
    errors: Channel[DecodeError]
    done: Channel[bool]


class StreamingPipeline:
    """Applies a RecordDecoder to every line of a source, in order."""

    def __init__(self, source: LineSource, decoder: RecordDecoder) -> None:
        if source is None:
            raise BadParameterError("No input source provided")
        if decoder is None:
            raise BadParameterError("No record decoder provided")
        self._source = source
        self._decoder = decoder
        self._task: asyncio.Task[None] | None = None

    def parse(self) -> ParseStreams:
        """Start the producer task and return its output streams.

        Must be called from a running event loop, and only once.
        """
        if self._task is not None:
            raise BadParameterError("Pipeline has already been started")
        streams = ParseStreams(
            records=Channel("records"), errors=Channel("errors"), done=Channel("done"),
        )
        self._task = asyncio.get_running_loop().create_task(self._produce(streams))
        return streams

    def cancel(self) -> None:
        """Stop the producer; all streams close without a done signal."""
        if self._task is not None:
            self._task.cancel()

    async def join(self) -> None:
        """Wait for the producer to finish, re-raising a line source failure."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def results(self) -> AsyncIterator[DecodeResult]:
        """Yield one tagged result per line, preserving line order."""
        async for row, line in _enumerate(self._source):
            yield self._decode(row, line)

    async def _produce(self, streams: ParseStreams) -> None:
        try:
            async for row, line in _enumerate(self._source):
                result = self._decode(row, line)
                if result.ok:
                    await streams.records.send(result.record)
                else:
                    await streams.errors.send(result.error)
            await streams.done.send(True)
        finally:
            streams.done.close()
            streams.records.close()
            streams.errors.close()

    def _decode(self, row: int, line: bytes) -> DecodeResult:
        try:
            return DecodeResult(row=row, record=self._decoder.decode(row, line))
        except DecodeError as exc:
            logger.warning("%s", exc)
            return DecodeResult(row=row, error=exc)


async def _enumerate(source: LineSource) -> AsyncIterator[tuple[int, bytes]]:
    row = 0
    if isinstance(source, AsyncIterable):
        async for line in source:
            yield row, line
            row += 1
    else:
        for line in source:
            yield row, line
            row += 1


async def drain(
    streams: ParseStreams,
    on_record: Callable[[Record], Awaitable[None] | None],
    on_error: Callable[[DecodeError], Awaitable[None] | None] | None = None,
) -> tuple[int, int]:
    """Consume all three streams until done fires.

    Returns:
        Tuple of (record_count, error_count).
    """
    record_count = error_count = 0
    pending: dict[str, asyncio.Task[Any]] = {}
    channels = {"records": streams.records, "errors": streams.errors, "done": streams.done}
    try:
        while True:
            for name, channel in channels.items():
                if name not in pending:
                    pending[name] = asyncio.ensure_future(channel.receive())
            finished, _ = await asyncio.wait(
                pending.values(), return_when=asyncio.FIRST_COMPLETED
            )
            # "done" is handled last: items received in the same wakeup precede it.
            for name in [n for n in channels if n in pending and pending[n] in finished]:
                task = pending.pop(name)
                try:
                    item = task.result()
                except ChannelClosedError:
                    return record_count, error_count
                if name == "done":
                    logger.info("Done: %d records, %d errors", record_count, error_count)
                    return record_count, error_count
                if name == "records":
                    record_count += 1
                    outcome = on_record(item)
                else:
                    error_count += 1
                    outcome = on_error(item) if on_error is not None else None
                if outcome is not None:
                    await outcome
    finally:
        for task in pending.values():
            task.cancel()
