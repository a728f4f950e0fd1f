"""
Loading and persisting JSON documents.

A missing document reads as an empty object, so writes can create new
files. Everything else that prevents reading (permissions, directories,
malformed or empty content) is reported as a DocumentError.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.document.parsing as parsing

_logger = _logging.getLogger(__name__)


class DocumentError(Exception):
    """A document could not be read or written."""

    def __init__(self, path: _pathlib.Path | str, message: str) -> None:
        self.path = _pathlib.Path(path)
        super().__init__(message)


class DocumentStore:
    """
    Reads and writes value trees as JSON files.

    The store holds only formatting options; every call opens the file
    fresh, so one store can serve concurrent operations on distinct files.
    """

    def __init__(
        self,
        *,
        indent: int | None = constants.DEFAULT_INDENT,
        ensure_ascii: bool = False,
        encoding: str = constants.DEFAULT_ENCODING,
        trailing_newline: bool = False,
    ) -> None:
        """
        Initialize the store.

        Args:
            indent: Indentation for written documents (None = compact).
            ensure_ascii: Escape non-ASCII characters when writing.
            encoding: Text encoding for reads and writes.
            trailing_newline: Terminate written documents with a newline.
        """
        self.indent = indent
        self.ensure_ascii = ensure_ascii
        self.encoding = encoding
        self.trailing_newline = trailing_newline

    @classmethod
    def from_settings(cls, settings: _typing.Any) -> DocumentStore:
        """Build a store from Settings.documents."""
        documents = settings.documents
        return cls(
            indent=documents.indent,
            ensure_ascii=documents.ensure_ascii,
            encoding=documents.encoding,
            trailing_newline=documents.trailing_newline,
        )

    def load(
        self,
        path: _pathlib.Path | str,
        *,
        preserve_duplicates: bool = False,
    ) -> _typing.Any:
        """
        Load a document.

        Args:
            path: Document file path.
            preserve_duplicates: Keep repeated keys as ObjectEntries.

        Returns:
            The parsed value tree, or {} if the file does not exist.

        Raises:
            DocumentError: If the file exists but cannot be read or parsed.
        """
        path = _pathlib.Path(path)
        try:
            text = path.read_text(encoding=self.encoding)
        except FileNotFoundError:
            _logger.debug("Document %s does not exist, starting from {}", path)
            return {}
        except (OSError, UnicodeDecodeError) as e:
            raise DocumentError(path, f"Failed to read JSON file: {path}: {e}") from e

        try:
            return parsing.parse_json(text, preserve_duplicates=preserve_duplicates)
        except (_json.JSONDecodeError, RecursionError) as e:
            # RecursionError: nesting deeper than the decoder can follow
            raise DocumentError(path, f"Failed to read JSON file: {path}: {e}") from e

    def save(self, path: _pathlib.Path | str, value: _typing.Any) -> None:
        """
        Write a document, creating parent directories as needed.

        Raises:
            DocumentError: If the tree cannot be serialized or written.
        """
        path = _pathlib.Path(path)
        try:
            text = parsing.to_json(value, indent=self.indent, ensure_ascii=self.ensure_ascii)
        except (TypeError, ValueError) as e:
            raise DocumentError(path, f"Failed to write JSON file: {path}: {e}") from e

        if self.trailing_newline:
            text += "\n"

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding=self.encoding)
        except OSError as e:
            raise DocumentError(path, f"Failed to write JSON file: {e}") from e
        _logger.debug("Wrote document %s (%d chars)", path, len(text))
