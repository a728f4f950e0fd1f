"""
Multi-document tools.

Each tool applies one single-document operation to several files and
reports a map of file path to outcome. Every path is validated before
any document is touched; after that, a failure in one document does not
stop the others.
"""

from __future__ import annotations

import asyncio as _asyncio
import copy as _copy
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import jsonsmith.constants as constants
import jsonsmith.document as document
import jsonsmith.tools.base as base
import jsonsmith.tools.document as document_tools
import jsonsmith.tools.sandbox as sandbox

_logger = _logging.getLogger(__name__)


class MultiDocumentTool(base.Tool, base.SandboxMixin):
    """
    Fan a single-document tool out over a list of files.

    Paths that resolve to the same file are processed once and share the
    outcome, so two tasks never write the same document.
    """

    single_tool_class: type[document_tools.DocumentTool]
    """Operation applied to each document."""

    success_message: str | None = None
    """Per-document status on success; None reports the operation's value."""

    def __init__(
        self,
        *,
        store: document.DocumentStore | None = None,
        base_dir: _pathlib.Path | None = None,
        sandbox_config: sandbox.SandboxConfig | None = None,
        parse_json_strings: bool = True,
    ) -> None:
        self._base_dir = base_dir or _pathlib.Path.cwd()
        self._sandbox_config = sandbox_config
        self._single = self.single_tool_class(
            store=store,
            base_dir=self._base_dir,
            sandbox_config=sandbox_config,
            parse_json_strings=parse_json_strings,
        )

    @property
    def categories(self) -> list[str]:
        return ["json", "document", "batch"]

    @property
    def requires_permission(self) -> bool:
        return self._single.requires_permission

    @property
    def input_schema(self) -> dict[str, _typing.Any]:
        schema = _copy.deepcopy(self._single.input_schema)
        properties = schema["properties"]
        properties.pop("file_path", None)
        schema["properties"] = {
            "file_paths": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Absolute paths to the JSON files",
            },
            **properties,
        }
        schema["required"] = [
            "file_paths" if key == "file_path" else key for key in schema.get("required", [])
        ]
        return schema

    def _outcome_entry(self, outcome: _typing.Any) -> _typing.Any:
        if self.success_message is None:
            return outcome
        return self.success_message

    async def _apply_one(
        self,
        path: _pathlib.Path,
        input: dict[str, _typing.Any],
    ) -> _typing.Any:
        try:
            outcome = await _asyncio.to_thread(self._single.apply, path, input)
        except document_tools.OPERATION_ERRORS as e:
            _logger.debug("%s failed on %s: %s", self.name, path, e)
            return f"{constants.ERROR_PREFIX}{e}"
        except Exception as e:
            # Per-document failures stay in the result map
            _logger.exception("%s raised on %s", self.name, path)
            return f"{constants.ERROR_PREFIX}{str(e) or type(e).__name__}"
        return self._outcome_entry(outcome)

    async def execute(self, input: dict[str, _typing.Any]) -> base.ToolResult:
        validation = self.validate_input(input)
        if not validation.is_valid:
            return base.ToolResult(
                success=False,
                output="",
                error=f"Invalid input: {'; '.join(validation.errors)}",
            )

        try:
            resolved = sandbox.resolve_all(input["file_paths"], self._get_sandbox_config())
        except sandbox.PathValidationError as e:
            return base.ToolResult(success=False, output="", error=str(e))

        # One task per distinct file; spellings of the same file share it
        distinct = list(dict.fromkeys(resolved.values()))
        outcomes = await _asyncio.gather(
            *(self._apply_one(path, input) for path in distinct)
        )
        by_path = dict(zip(distinct, outcomes, strict=True))

        results = {spelling: by_path[path] for spelling, path in resolved.items()}
        return base.ToolResult(
            success=True,
            output=document.to_json(results),
        )


class ReadMultipleJsonValuesTool(MultiDocumentTool):
    """Read the value at one path from several files."""

    single_tool_class = document_tools.ReadJsonValueTool

    @property
    def name(self) -> str:
        return "read_multiple_json_values"

    @property
    def description(self) -> str:
        return (
            "Read a value from multiple JSON files at the same dot-notation path. "
            "Returns a map of file path to value (or an error message)."
        )


class WriteMultipleJsonValuesTool(MultiDocumentTool):
    """Write the same value at one path in several files."""

    single_tool_class = document_tools.WriteJsonValueTool
    success_message = constants.MULTI_SUCCESS_WRITE

    @property
    def name(self) -> str:
        return "write_multiple_json_values"

    @property
    def description(self) -> str:
        return (
            "Write a value to multiple JSON files at the same dot-notation path. "
            "Returns a map of file path to status."
        )


class DeleteMultipleJsonValuesTool(MultiDocumentTool):
    """Delete one path from several files."""

    single_tool_class = document_tools.DeleteJsonValueTool
    success_message = constants.MULTI_SUCCESS_DELETE

    @property
    def name(self) -> str:
        return "delete_multiple_json_values"

    @property
    def description(self) -> str:
        return (
            "Delete the value at the same dot-notation path from multiple JSON files. "
            "Returns a map of file path to status."
        )


class MergeMultipleJsonValuesTool(MultiDocumentTool):
    """Deep-merge the same value into several files."""

    single_tool_class = document_tools.MergeJsonValueTool
    success_message = constants.MULTI_SUCCESS_MERGE

    @property
    def name(self) -> str:
        return "merge_multiple_json_values"

    @property
    def description(self) -> str:
        return (
            "Deep-merge a value into multiple JSON files, at the document root or "
            "at a dot-notation path. Returns a map of file path to status."
        )
