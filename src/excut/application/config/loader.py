"""Cut job file loading.

Job files are JSON documents validated against ``CutJobConfiguration``.
Every failure is raised as a ``ConfigError`` whose ``error_type`` tells the
CLI how to present it:

- ``file_not_found``, ``permission_denied``, ``file_read_error``: the file
  could not be read as UTF-8 text
- ``json_parse``: the text is not JSON; details carry line and column
- ``configuration``: the document is well formed but the stock size and
  kerf cannot describe a usable bin
- ``validation``: any other schema violation
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from excut.application.config.schema import KERF_NOT_BELOW_STOCK, CutJobConfiguration


class ConfigError(Exception):
    """Raised when a job file cannot be loaded.

    Attributes:
        message: Human-readable summary, one line per problem.
        error_type: Failure category, see the module docstring.
        path: Job file the error came from, if any.
        details: One dict per problem. Schema problems carry ``path``,
            ``message``, ``value`` and ``error_type``; JSON problems carry
            ``line``, ``column`` and ``message``.
    """

    def __init__(
        self,
        message: str,
        error_type: str = "unknown",
        path: Path | None = None,
        details: list[dict[str, Any]] | None = None,
    ) -> None:
        self.message = message
        self.error_type = error_type
        self.path = path
        self.details = details or []
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


def _field_path(loc: tuple[str | int, ...]) -> str:
    """Render a pydantic location such as ``("cutouts", 0, "size")`` as
    ``cutouts[0].size``."""
    path = ""
    for segment in loc:
        if isinstance(segment, int):
            path += f"[{segment}]"
        else:
            path += f".{segment}" if path else str(segment)
    return path or "(root)"


def _read_job_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(
            f"Config file not found: {path}", error_type="file_not_found", path=path
        )
    try:
        # utf-8-sig accepts files saved with a byte order mark
        return path.read_text(encoding="utf-8-sig")
    except PermissionError:
        raise ConfigError(
            f"Permission denied reading config file: {path}",
            error_type="permission_denied",
            path=path,
        )
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(
            f"Error reading config file: {path}: {e}",
            error_type="file_read_error",
            path=path,
        )


def _parse_json(text: str, path: Path) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"Invalid JSON in config file: {path} "
            f"(line {e.lineno}, column {e.colno}): {e.msg}",
            error_type="json_parse",
            path=path,
            details=[{"line": e.lineno, "column": e.colno, "message": e.msg}],
        )


def _validate(data: Any, path: Path | None = None) -> CutJobConfiguration:
    try:
        return CutJobConfiguration.model_validate(data)
    except PydanticValidationError as e:
        details = [
            {
                "path": _field_path(err["loc"]),
                "message": err["msg"],
                "value": err.get("input"),
                "error_type": err["type"],
            }
            for err in e.errors()
        ]

    lines = ["Configuration validation failed:"]
    for detail in details:
        value = detail["value"]
        suffix = "" if value is None or isinstance(value, (dict, list)) else f" (got: {value!r})"
        lines.append(f"  - {detail['path']}: {detail['message']}{suffix}")

    # A stock/kerf mismatch on an otherwise valid document is reported the
    # same way CuttingConfig reports it.
    error_type = "validation"
    if all(d["error_type"] == KERF_NOT_BELOW_STOCK for d in details):
        error_type = "configuration"

    raise ConfigError("\n".join(lines), error_type=error_type, path=path, details=details)


def load_config(path: Path) -> CutJobConfiguration:
    """Load and validate a cut job file.

    Args:
        path: Path to the JSON job file.

    Returns:
        The validated job configuration.

    Raises:
        ConfigError: If the file cannot be read, parsed, or validated.
    """
    return _validate(_parse_json(_read_job_text(path), path), path)


def load_config_from_dict(data: dict[str, Any]) -> CutJobConfiguration:
    """Validate an already parsed job document.

    Raises:
        ConfigError: With error_type ``configuration`` or ``validation``.
    """
    return _validate(data)
