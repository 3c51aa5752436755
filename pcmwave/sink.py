"""Write a finished byte sequence to a path or a binary writer in one go."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, Union

from pcmwave.errors import WaveIOError


logger = logging.getLogger(__name__)

Destination = Union[str, "os.PathLike[str]", BinaryIO]


def is_path_like(dest: object) -> bool:
    return isinstance(dest, (str, os.PathLike))


def _current_umask() -> int:
    mask = os.umask(0)
    os.umask(mask)
    return mask


def _atomic_write_bytes(path: Path, data: bytes) -> None:
    # A unique sibling name so an existing file is never clobbered.
    fh = tempfile.NamedTemporaryFile(
        dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
    )
    tmp_path = Path(fh.name)
    try:
        with fh:
            fh.write(data)
        # NamedTemporaryFile creates 0600; give the result the usual mode.
        os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, path)
    finally:
        try:
            tmp_path.unlink()
        except OSError:
            pass


def write_bytes(dest: Destination, data: bytes) -> None:
    """Write `data` to `dest` as a single, indivisible operation.

    For paths the bytes land in a sibling temp file that replaces the target
    only once fully written, so a failure never leaves a partial file behind.
    For writers the payload is handed over in one `write()` call.
    """
    if is_path_like(dest):
        path = Path(os.fspath(dest))
        try:
            _atomic_write_bytes(path, data)
        except OSError as e:
            raise WaveIOError(f"could not write {path}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(data), path)
        return

    write = getattr(dest, "write", None)
    if write is None:
        raise TypeError(
            f"destination must be a path or a binary writer, got {type(dest).__name__}"
        )
    try:
        write(data)
        flush = getattr(dest, "flush", None)
        if flush is not None:
            flush()
    except OSError as e:
        raise WaveIOError(f"could not write to stream: {e}") from e
    logger.debug("Wrote %d bytes to %r", len(data), dest)
