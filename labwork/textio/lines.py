"""
Async Line File Module

Buffered, line-oriented reading and appending of UTF-8 text files from
asyncio code. Blocking file calls run in a worker thread via
asyncio.to_thread() so the event loop is never blocked on disk.
"""

import asyncio
import codecs
import logging
import os
from typing import AsyncIterator, Callable, List, Optional

from ..config.settings import settings

logger = logging.getLogger(__name__)

# Lines handed from the reader thread to the event loop per round trip
READ_BATCH_LINES = 256


class LineFile:
    """
    A text file read and written one line at a time.

    Usage:
        data = LineFile("data.txt")
        await data.write_line("hello")
        async for line in data.read_lines():
            print(line)

    Attributes:
        path: Filesystem path of the file
        encoding: Text encoding (default from settings.FILE_ENCODING)
        buffer_size: I/O buffer size in bytes (default from settings.BUFFER_SIZE)
    """

    def __init__(
            self,
            path: str,
            encoding: str = None,
            buffer_size: int = None,
    ):
        self.path = path
        self.encoding = encoding if encoding is not None else settings.FILE_ENCODING
        self.buffer_size = buffer_size if buffer_size is not None else settings.BUFFER_SIZE

    def exists(self) -> bool:
        """Check if the file exists."""
        return os.path.isfile(self.path)

    async def write_line(self, data: str) -> None:
        """
        Append a single line to the file, creating it if missing.

        Args:
            data: Line content; a trailing newline is added
        """
        await asyncio.to_thread(self._append, data)
        logger.info("Data successfully written to file")

    def _append(self, data: str) -> None:
        with open(self.path, "a", encoding=self.encoding, buffering=self.buffer_size) as fh:
            fh.write(data + "\n")

    def _read_encoding(self) -> str:
        # A leading UTF-8 byte order mark is dropped on read
        if codecs.lookup(self.encoding).name == "utf-8":
            return "utf-8-sig"
        return self.encoding

    async def read_lines(self) -> AsyncIterator[str]:
        """
        Yield the lines of the file in order, without line terminators.
        Undecodable bytes are replaced with U+FFFD.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        fh = await asyncio.to_thread(
            open, self.path, "r",
            encoding=self._read_encoding(), errors="replace", buffering=self.buffer_size,
        )
        try:
            while True:
                batch = await asyncio.to_thread(self._read_batch, fh)
                if not batch:
                    break
                for line in batch:
                    yield line
        finally:
            await asyncio.to_thread(fh.close)

    @staticmethod
    def _read_batch(fh) -> List[str]:
        batch = []
        for _ in range(READ_BATCH_LINES):
            line = fh.readline()
            if not line:
                break
            batch.append(line.rstrip("\r\n"))
        return batch

    async def echo(self, out: Optional[Callable[[str], None]] = None) -> int:
        """
        Print every line of the file.

        Args:
            out: Line sink (default: print)

        Returns:
            Number of lines printed; 0 if the file does not exist
        """
        out = out if out is not None else print

        if not self.exists():
            logger.warning(f"File not found: {self.path}")
            out("File not found.")
            return 0

        count = 0
        async for line in self.read_lines():
            out(line)
            count += 1
        return count
