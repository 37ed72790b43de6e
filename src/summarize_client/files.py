"""Scoped temporary files for text input."""

from collections.abc import Generator
from contextlib import contextmanager
import logging
from pathlib import Path
import tempfile

from .constants import TEMP_FILE_PREFIX, TEMP_FILE_SUFFIX

log = logging.getLogger(__name__)


@contextmanager
def temporary_text_file(
    text: str,
    *,
    prefix: str = TEMP_FILE_PREFIX,
    suffix: str = TEMP_FILE_SUFFIX,
) -> Generator[Path, None, None]:
    """Write ``text`` to a uniquely named file and yield its path.

    The file is complete and closed before the body runs, so another process
    can open it, and it is removed however the body exits.
    """
    f = tempfile.NamedTemporaryFile(
        mode="w",
        encoding="utf-8",
        newline="",
        prefix=prefix,
        suffix=suffix,
        delete=False,
    )
    temp_path = Path(f.name)
    try:
        with f:
            f.write(text)
            f.flush()
        log.debug("Wrote %d characters of text input to %s", len(text), temp_path)
        yield temp_path
    finally:
        temp_path.unlink(missing_ok=True)
