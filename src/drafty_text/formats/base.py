"""Abstract base class for document format handlers."""

from abc import ABC, abstractmethod
from pathlib import Path

from drafty_text.formatting.ir import Content, Document


class FormatHandler(ABC):
    """Abstract base class for document format handlers.

    Each handler writes a Document in its file format and, where the
    format allows it, reads one back.
    """

    @property
    @abstractmethod
    def supported_extensions(self) -> tuple[str, ...]:
        """Return tuple of supported file extensions (e.g., ('.html',))."""
        ...

    @abstractmethod
    def write(self, document: Document, path: Path) -> None:
        """Write document to file.

        Args:
            document: The Document to write
            path: Path to write the output file
        """
        ...

    def read(self, path: Path) -> Document:
        """Read a document from file.

        Default implementation rejects reading.
        Override in handlers whose format can be read back.

        Args:
            path: Path to the input file

        Returns:
            The parsed Document
        """
        raise NotImplementedError(
            f"{type(self).__name__} cannot read {path.suffix} files"
        )


def join_content(content: Content) -> str:
    """Flatten string formatter content."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    return "".join(content)
