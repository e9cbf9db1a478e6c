"""
Buffered text writer for generated source files.

Collects the file body in memory, keeps track of indentation and writes
the finished text exactly once when the writer is closed.
"""

from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence, Union

from ..logging_config import get_logger

logger = get_logger(__name__)


class WriterError(Exception):
    """Base exception for source writer errors."""

    pass


class WriterIOError(WriterError):
    """Raised when the output file cannot be read or written."""

    pass


class GeneratorWriter:
    """
    Base class for source file writers.

    Lines are indented automatically: a line ending with ``{`` indents the
    lines after it, a line starting with ``}`` is outdented. Subclasses
    hook into finalization through ``before_close`` and into type name
    handling through ``ref_all``.
    """

    def __init__(
        self,
        path: Union[str, Path],
        encoding: str = "utf-8",
        newline: str = "\n",
    ):
        self.path = Path(path)
        self.encoding = encoding
        self._newline = newline
        self._tab = "\t"
        self._indent = 0
        self._at_line_start = True
        self._buffer: List[str] = []
        self._content: Optional[str] = None
        self._closed = False

    # Layout

    def tab_string(self, tab: str) -> "GeneratorWriter":
        """Set the text used for one level of indentation."""
        self._tab = tab
        return self

    def newline_string(self) -> str:
        return self._newline

    def indent(self, levels: int = 1) -> "GeneratorWriter":
        self._indent += levels
        return self

    def dedent(self, levels: int = 1) -> "GeneratorWriter":
        self._indent = max(0, self._indent - levels)
        return self

    # Body

    def print(self, text: Any = "", *args) -> "GeneratorWriter":
        """Append ``text``, formatted with ``args`` when any are given."""
        self._check_open()
        self._write(self._format(text, args))
        return self

    def println(self, text: Any = "", *args) -> "GeneratorWriter":
        """Append ``text`` followed by a line break."""
        self._check_open()
        for line in self._format(text, args).split("\n"):
            self._println_line(line)
        return self

    def ref(self, type_name: str, keep_segments: int = 1) -> str:
        """Return the text to write for a qualified type name."""
        return self.ref_all([type_name], keep_segments)[0]

    def ref_all(
        self, type_names: Optional[Iterable[str]], keep_segments: int = 1
    ) -> List[str]:
        """Return the text to write for each qualified type name."""
        return list(type_names or [])

    def _format(self, text: Any, args: Sequence[Any]) -> str:
        text = str(text)
        if not args:
            return text

        values = tuple(
            ", ".join(str(item) for item in arg)
            if isinstance(arg, (list, tuple))
            else arg
            for arg in args
        )
        return text % values

    def _println_line(self, line: str):
        stripped = line.strip()

        if stripped.startswith("}"):
            self.dedent()

        self._write(line)
        self._buffer.append(self._newline)
        self._at_line_start = True

        if stripped.endswith("{"):
            self.indent()

    def _write(self, text: str):
        if not text:
            return

        if self._at_line_start:
            self._buffer.append(self._tab * self._indent)
            self._at_line_start = False

        self._buffer.append(text)

    # Lifecycle

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def content(self) -> Optional[str]:
        """The finalized file text, available once the writer is closed."""
        return self._content

    def _check_open(self):
        if self._closed:
            raise WriterError(f"Writer for {self.path} is already closed")

    def before_close(self, text: str) -> str:
        """
        Post-process the complete body before it is written.

        Strips trailing whitespace and allows at most two consecutive blank
        lines.
        """
        lines = text.split(self._newline)
        formatted_lines = []
        blank_count = 0

        for line in lines:
            stripped = line.rstrip()
            if not stripped:
                blank_count += 1
                if blank_count <= 2:
                    formatted_lines.append("")
            else:
                blank_count = 0
                formatted_lines.append(stripped)

        return self._newline.join(formatted_lines)

    def close(self) -> bool:
        """
        Finalize the file and write it to disk.

        Returns:
            False if the file was empty and nothing was written, True otherwise

        Raises:
            WriterError: If the writer was already closed or the text
                cannot be encoded
            WriterIOError: If the file cannot be written

        If ``before_close`` raises, the writer stays open with its buffer
        intact, so it can still be closed again or discarded.
        """
        self._check_open()

        content = self.before_close("".join(self._buffer))
        self._closed = True
        self._buffer = []
        self._content = content

        if not content.strip():
            logger.info("Not writing empty file %s", self.path)
            return False

        try:
            encoded = content.encode(self.encoding)
        except UnicodeEncodeError as e:
            raise WriterError(
                f"Cannot encode {self.path} as {self.encoding}: {e}"
            ) from e

        try:
            if self.path.exists() and self.path.read_bytes() == encoded:
                logger.debug("Unchanged, not rewriting %s", self.path)
                return True

            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "wb") as f:
                f.write(encoded)
        except OSError as e:
            logger.error("Error writing %s: %s", self.path, e)
            raise WriterIOError(f"Error writing {self.path}: {e}") from e

        logger.debug("Wrote %s", self.path)
        return True

    def discard(self):
        """Drop the buffered body without writing anything."""
        self._closed = True
        self._buffer = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        if exc_type is None:
            self.close()
        elif not self._closed:
            logger.warning("Discarding %s after error: %s", self.path, exc_value)
            self.discard()
        return False
