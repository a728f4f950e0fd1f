"""
Edit audit logger for jsonsmith.

Records every tool call an agent makes against a document, and its
result, to a JSONL file.
"""

import datetime as _datetime
import json as _json
import logging as _logging
import os as _os
import pathlib as _pathlib
import tempfile as _tempfile
import typing as _typing

_logger = _logging.getLogger(__name__)


def _default_audit_dir() -> _pathlib.Path:
    user = _os.environ.get("USER", "unknown")
    return _pathlib.Path(_tempfile.gettempdir()) / f"jsonsmith-audit-{user}"


class EditLogger:
    """
    Logs document edit events to a JSONL file.

    Each line in the file is a JSON object representing an event:
    - session_start: Session metadata (session id, source)
    - tool_call: Tool invocation with its input
    - tool_result: Outcome of the invocation
    - session_end: Session completion

    Usage:
        audit = EditLogger(log_dir="/tmp/audit", source="cli")
        audit.log_tool_call("write_json_value", {"file_path": "/x.json", ...})
        audit.log_tool_result("write_json_value", success=True, output="...")
        audit.close()
    """

    def __init__(
        self,
        *,
        log_dir: _pathlib.Path | str | None = None,
        log_file: _pathlib.Path | str | None = None,
        private_mode: bool = True,
        source: str = "unknown",
        enabled: bool = True,
    ) -> None:
        """
        Initialize the edit logger.

        Args:
            log_dir: Directory for log files (default: <tmp>/jsonsmith-audit-{user}).
            log_file: Explicit log file path (overrides log_dir + auto name).
            private_mode: If True, set log directory to drwx------ (0o700).
            source: Which front end produced the edits ("cli", "mcp", ...).
            enabled: Whether logging is enabled.
        """
        self._enabled = enabled
        self._source = source
        self._file: _typing.TextIO | None = None
        self._file_path: _pathlib.Path | None = None
        self._session_id = _datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._event_count = 0

        if not enabled:
            return

        if log_file:
            self._file_path = _pathlib.Path(log_file)
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            base_dir = _pathlib.Path(log_dir) if log_dir else _default_audit_dir()
            base_dir.mkdir(parents=True, exist_ok=True)
            if private_mode:
                _os.chmod(base_dir, 0o700)
            self._file_path = base_dir / f"jsonsmith_{self._session_id}.jsonl"

        # Held as instance state, closed in close()
        self._file = open(self._file_path, "a", encoding="utf-8")  # noqa: SIM115
        _logger.debug("Edit audit log: %s", self._file_path)

        self._write_event(
            "session_start",
            {
                "session_id": self._session_id,
                "source": source,
            },
        )

    @classmethod
    def from_settings(cls, settings: _typing.Any, *, source: str = "unknown") -> "EditLogger":
        """Build an edit logger from Settings.logging."""
        config = settings.logging
        return cls(
            log_dir=_os.path.expanduser(config.audit_dir) if config.audit_dir else None,
            log_file=settings.get_audit_file(),
            source=source,
            enabled=config.audit_enabled,
        )

    def _write_event(
        self,
        event_type: str,
        data: dict[str, _typing.Any],
    ) -> None:
        """Write an event to the log file."""
        if not self._enabled or not self._file:
            return

        self._event_count += 1
        event = {
            "timestamp": _datetime.datetime.now().isoformat(),
            "event_number": self._event_count,
            "event_type": event_type,
            **data,
        }

        try:
            self._file.write(_json.dumps(event, default=str) + "\n")
            self._file.flush()
        except OSError as e:
            # Auditing must not break the edit itself
            _logger.warning("Failed to write audit event: %s", e)

    def log_tool_call(
        self,
        tool_name: str,
        tool_input: dict[str, _typing.Any],
    ) -> None:
        """Log a tool call request."""
        self._write_event(
            "tool_call",
            {
                "tool_name": tool_name,
                "tool_input": tool_input,
            },
        )

    def log_tool_result(
        self,
        tool_name: str,
        success: bool,
        output: str | None = None,
        error: str | None = None,
        duration_ms: float | None = None,
    ) -> None:
        """Log a tool execution result."""
        data: dict[str, _typing.Any] = {
            "tool_name": tool_name,
            "success": success,
            "output": output,
            "error": error,
        }
        if duration_ms is not None:
            data["duration_ms"] = round(duration_ms, 2)
        self._write_event("tool_result", data)

    @property
    def file_path(self) -> _pathlib.Path | None:
        """Get the log file path."""
        return self._file_path

    @property
    def enabled(self) -> bool:
        """Check if logging is enabled."""
        return self._enabled

    @property
    def event_count(self) -> int:
        return self._event_count

    def close(self) -> None:
        """Close the log file."""
        if not self._enabled or not self._file:
            return

        self._write_event("session_end", {"total_events": self._event_count})

        try:
            self._file.close()
        except OSError:
            _logger.warning("Failed to close audit log %s", self._file_path)
        finally:
            self._file = None

    def __enter__(self) -> "EditLogger":
        """Context manager entry."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: _typing.Any,
    ) -> None:
        """Context manager exit."""
        self.close()
