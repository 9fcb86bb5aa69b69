from __future__ import annotations

import os
from pathlib import Path
import tempfile
from typing import TYPE_CHECKING

from .exceptions import EADWriteError

if TYPE_CHECKING:
    from collections.abc import Iterable


def write_ead_file(chunks: Iterable[str], output: Path) -> int:
    """Write streamed EAD text to ``output`` and return the character count.

    Chunks go to a temporary file beside the target, which replaces the
    target only after the last chunk was written.
    """
    written = 0
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output.name}.", suffix=".tmp", dir=output.parent
        )
    except OSError as exc:
        raise EADWriteError(f"Cannot create {output}: {exc}") from exc
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            for chunk in chunks:
                handle.write(chunk)
                written += len(chunk)
        tmp_path.replace(output)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise EADWriteError(f"Failed to write EAD to {output}: {exc}") from exc
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    return written


class EADFileWriter:
    """Adapter for writing EAD documents to disk.

    Implements ``EADWriterPort`` on top of :func:`write_ead_file`.
    """

    def write(self, chunks: Iterable[str], output_path: Path) -> int:
        return write_ead_file(chunks, output_path)
