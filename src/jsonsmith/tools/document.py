"""
Single-document tools: read, write, delete, merge, merge duplicate keys.

Each tool loads the document, hands the value tree to jsonsmith.core,
and saves it back when it changed. The blocking part of every call runs
in a worker thread.
"""

from __future__ import annotations

import abc as _abc
import asyncio as _asyncio
import copy as _copy
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.core as core
import jsonsmith.document as document
import jsonsmith.tools.base as base
import jsonsmith.tools.sandbox as sandbox

_logger = _logging.getLogger(__name__)

FILE_PATH_PROPERTY: dict[str, _typing.Any] = {
    "type": "string",
    "description": "Absolute path to the JSON file",
}

JSON_PATH_PROPERTY: dict[str, _typing.Any] = {
    "type": "string",
    "description": "Dot-notation path to the value (e.g. 'common.welcome')",
}

VALUE_PROPERTY: dict[str, _typing.Any] = {
    "description": (
        "Value to write. Any JSON value; a string holding a JSON object "
        "or array is decoded first"
    ),
}

# Failures a document operation reports as a tool error
OPERATION_ERRORS = (document.DocumentError, core.PathError)


class DocumentTool(base.Tool, base.SandboxMixin):
    """
    Base class for tools that operate on one JSON document.

    Subclasses implement apply() (blocking; raises DocumentError or
    PathError) and describe() (formats the outcome for the agent).
    Multi-document tools reuse apply() for each document.
    """

    def __init__(
        self,
        *,
        store: document.DocumentStore | None = None,
        base_dir: _pathlib.Path | None = None,
        sandbox_config: sandbox.SandboxConfig | None = None,
        parse_json_strings: bool = True,
    ) -> None:
        """
        Initialize the tool.

        Args:
            store: Document store used for load/save (default: DocumentStore())
            base_dir: Base directory for relative paths (default: cwd)
            sandbox_config: Sandbox configuration for path validation
            parse_json_strings: Decode string values holding JSON objects/arrays
        """
        self._store = store or document.DocumentStore()
        self._base_dir = base_dir or _pathlib.Path.cwd()
        self._sandbox_config = sandbox_config
        self._parse_json_strings = parse_json_strings

    @property
    def categories(self) -> list[str]:
        return ["json", "document"]

    @property
    def store(self) -> document.DocumentStore:
        return self._store

    @_abc.abstractmethod
    def apply(self, path: _pathlib.Path, input: dict[str, _typing.Any]) -> _typing.Any:
        """
        Perform the operation on one document.

        Raises:
            DocumentError: If the document cannot be loaded or saved.
            PathError: If the path cannot be resolved in the document.
        """
        ...

    @_abc.abstractmethod
    def describe(
        self,
        outcome: _typing.Any,
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        """Format the outcome of apply() for the agent."""
        ...

    def coerce_value(self, value: _typing.Any) -> _typing.Any:
        """
        Prepare an incoming value for insertion into a document.

        Returns a deep copy; the caller's input is never inserted as is.
        Strings holding a JSON object or array are decoded, if enabled.
        """
        if self._parse_json_strings:
            value = document.coerce_json_string(value)
        return _copy.deepcopy(value)

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        validation = self.validate_input(input)
        if not validation.is_valid:
            return base.ToolResult(
                success=False,
                output="",
                error=f"Invalid input: {'; '.join(validation.errors)}",
            )

        file_path = self._require_input(input, "file_path", label="file path")
        if isinstance(file_path, base.ToolResult):
            return file_path

        path = self._resolve_path_or_error(file_path)
        if isinstance(path, base.ToolResult):
            return path

        try:
            outcome = await _asyncio.to_thread(self.apply, path, input)
        except OPERATION_ERRORS as e:
            _logger.debug("%s failed on %s: %s", self.name, path, e)
            return base.ToolResult(success=False, output="", error=str(e))

        return base.ToolResult(
            success=True,
            output=self.describe(outcome, file_path, input),
        )


class ReadJsonValueTool(DocumentTool):
    """Read the value at a path."""

    @property
    def name(self) -> str:
        return "read_json_value"

    @property
    def description(self) -> str:
        return "Read a value from a JSON file at the specified dot-notation path."

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "file_path": FILE_PATH_PROPERTY,
                "path": JSON_PATH_PROPERTY,
            },
            "required": ["file_path", "path"],
        }

    @property
    def requires_permission(self) -> bool:
        return False

    def apply(self, path: _pathlib.Path, input: dict[str, _typing.Any]) -> _typing.Any:
        root = self._store.load(path)
        return core.get_value(root, input.get("path"))

    def describe(
        self,
        outcome: _typing.Any,
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        return document.to_json(outcome)


class WriteJsonValueTool(DocumentTool):
    """
    Write a value at a path, creating intermediate objects.

    A non-empty object value is expanded one level: each entry is written
    at path.key, so keys already under path survive.
    """

    @property
    def name(self) -> str:
        return "write_json_value"

    @property
    def description(self) -> str:
        return (
            "Write a value to a JSON file at the specified dot-notation path. "
            "Missing intermediate objects are created. An object value is "
            "written key by key, preserving existing siblings under the path."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "file_path": FILE_PATH_PROPERTY,
                "path": JSON_PATH_PROPERTY,
                "value": VALUE_PROPERTY,
            },
            "required": ["file_path", "path", "value"],
        }

    def apply(
        self,
        path: _pathlib.Path,
        input: dict[str, _typing.Any],
    ) -> list[tuple[str, _typing.Any]] | None:
        """Returns the (path, value) pairs written for an expanded object, else None."""
        json_path = input.get("path")
        value = self.coerce_value(input.get("value"))
        root = self._store.load(path)

        written: list[tuple[str, _typing.Any]] | None = None
        if core.is_object(value) and value:
            # Validate the base path before expanding it
            core.split_path(json_path)
            written = []
            for key, item in value.items():
                target = f"{json_path}{constants.PATH_SEPARATOR}{key}"
                core.set_value(root, target, item)
                written.append((target, item))
        else:
            core.set_value(root, json_path, value)

        self._store.save(path, root)
        return written

    def describe(
        self,
        outcome: list[tuple[str, _typing.Any]] | None,
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        json_path = input.get("path")
        if outcome is None:
            return f"Successfully wrote value to {json_path} in {file_path}"
        lines = [
            f"{target}: {document.to_json(item, indent=None)}" for target, item in outcome
        ]
        return f"Successfully wrote object to {json_path} in {file_path}:\n" + "\n".join(lines)


class DeleteJsonValueTool(DocumentTool):
    """Delete the key at a path."""

    @property
    def name(self) -> str:
        return "delete_json_value"

    @property
    def description(self) -> str:
        return (
            "Delete the value at the specified dot-notation path from a JSON file. "
            "Fails without changing the file if any part of the path is missing."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "file_path": FILE_PATH_PROPERTY,
                "path": JSON_PATH_PROPERTY,
            },
            "required": ["file_path", "path"],
        }

    def apply(self, path: _pathlib.Path, input: dict[str, _typing.Any]) -> None:
        root = self._store.load(path)
        core.delete_value(root, input.get("path"))
        self._store.save(path, root)

    def describe(
        self,
        outcome: None,
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        return f"Successfully deleted {input.get('path')} in {file_path}"


class MergeJsonValueTool(DocumentTool):
    """Deep-merge a value into the document root or the sub-tree at a path."""

    @property
    def name(self) -> str:
        return "merge_json_value"

    @property
    def description(self) -> str:
        return (
            "Deep-merge a value into a JSON file. Nested objects are merged key by key; "
            "any other value replaces what was there. Without a path the value "
            "(an object) is merged into the document root."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "file_path": FILE_PATH_PROPERTY,
                "value": {
                    "description": "Value to merge. A string holding a JSON object or array is decoded first",
                },
                "path": {
                    "type": "string",
                    "description": "Dot-notation path of the sub-tree to merge into (default: document root)",
                },
            },
            "required": ["file_path", "value"],
        }

    def apply(self, path: _pathlib.Path, input: dict[str, _typing.Any]) -> None:
        json_path = input.get("path")
        value = self.coerce_value(input.get("value"))
        root = self._store.load(path)

        if json_path is None:
            if not core.is_object(value):
                raise document.DocumentError(
                    path,
                    f"Cannot merge a {core.kind_of(value)} value into the document root; "
                    "merge an object or pass a path",
                )
            root = core.deep_merge(root, value)
        else:
            current = core.get_value(root, json_path) if core.has_value(root, json_path) else None
            core.set_value(root, json_path, core.deep_merge(current, value))

        self._store.save(path, root)

    def describe(
        self,
        outcome: None,
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        target = input.get("path") or "document root"
        return f"Successfully merged value into {target} in {file_path}"


class MergeDuplicateKeysTool(DocumentTool):
    """
    Reconcile repeated keys in a document.

    The file is parsed with duplicate keys preserved, every repeated key
    is folded with a deep merge in encounter order, and the result is
    written back.
    """

    @property
    def name(self) -> str:
        return "merge_duplicate_keys"

    @property
    def description(self) -> str:
        return (
            "Merge duplicate keys in a JSON file. Repeated object keys are combined "
            "with a deep merge (later occurrences win on conflicts) and the file is "
            "rewritten with unique keys."
        )

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        return {
            "type": "object",
            "properties": {
                "file_path": FILE_PATH_PROPERTY,
                "dry_run": {
                    "type": "boolean",
                    "description": "Report duplicate keys without rewriting the file",
                },
            },
            "required": ["file_path"],
        }

    def apply(self, path: _pathlib.Path, input: dict[str, _typing.Any]) -> list[str]:
        """Returns the dot paths of the keys that were folded."""
        root = self._store.load(path, preserve_duplicates=True)
        folded = core.find_duplicate_keys(root)
        if input.get("dry_run"):
            return folded

        self._store.save(path, core.reconcile_duplicates(root))
        if folded:
            _logger.info("Folded %d duplicate key(s) in %s", len(folded), path)
        return folded

    def describe(
        self,
        outcome: list[str],
        file_path: str,
        input: dict[str, _typing.Any],
    ) -> str:
        if input.get("dry_run"):
            if not outcome:
                return f"No duplicate keys in {file_path}"
            return f"Duplicate keys in {file_path}:\n" + "\n".join(outcome)

        message = f"Successfully merged duplicate keys in {file_path}"
        if outcome:
            message += ":\n" + "\n".join(outcome)
        return message
