import os
from collections.abc import Iterator
from typing import BinaryIO

from batterylog.helper.logging import LOGGER

DEFAULT_BLOCK_SIZE = 8192
DEFAULT_MAX_LINE = 1024 * 1024


def read_lines_backward(
    path: str | os.PathLike,
    block_size: int = DEFAULT_BLOCK_SIZE,
    max_line: int = DEFAULT_MAX_LINE,
) -> Iterator[bytes]:
    """
    Yields the lines of a file from the last one to the first one.

    Raises:
        OSError: the file cannot be opened or read.
    """
    with open(path, 'rb') as handle:
        yield from iter_lines_backward(handle, block_size, max_line)


def iter_lines_backward(
    handle: BinaryIO,
    block_size: int = DEFAULT_BLOCK_SIZE,
    max_line: int = DEFAULT_MAX_LINE,
) -> Iterator[bytes]:
    """
    Yields the lines of an open binary file from the last one to the first one.

    The file is read in blocks starting at its end, so only one block and
    the line being assembled are held in memory. Lines are yielded without
    their terminator. A line longer than max_line is skipped.

    Raises:
        OSError: the file cannot be read.
    """
    if block_size <= 0:
        raise ValueError("block_size must be positive")

    position = handle.seek(0, os.SEEK_END)

    # Fragments of the line being assembled, last fragment first
    pending: list[bytes] = []
    pending_size = 0
    oversized = False
    at_file_end = True

    while position > 0:
        step = min(block_size, position)
        position -= step
        handle.seek(position)
        block = handle.read(step)
        if len(block) != step:
            name = getattr(handle, 'name', '<stream>')
            raise OSError(f"Short read at offset {position} in {name}")

        end = len(block)
        while True:
            newline = block.rfind(b'\n', 0, end)
            fragment = block[newline + 1 : end]

            if not oversized:
                pending_size += len(fragment)
                if pending_size > max_line:
                    oversized = True
                    pending.clear()
                else:
                    pending.append(fragment)

            if newline == -1:
                break

            if oversized:
                LOGGER.debug(
                    "Skipping line longer than %d bytes at offset %d",
                    max_line,
                    position + newline + 1,
                )
            elif not (at_file_end and pending_size == 0):
                yield _assemble(pending)

            at_file_end = False
            pending = []
            pending_size = 0
            oversized = False
            end = newline

    if oversized:
        LOGGER.debug("Skipping line longer than %d bytes at offset 0", max_line)
    elif pending_size:
        yield _assemble(pending)


def _assemble(fragments: list[bytes]) -> bytes:
    line = b''.join(reversed(fragments))
    if line.endswith(b'\r'):
        line = line[:-1]
    return line
