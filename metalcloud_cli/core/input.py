"""
Input — Read bulk configuration from a file or from a pipe

Create commands accept their object either from a file path flag or,
when the pipe flag is set, from standard input. Exactly one source is
legal per invocation.
"""

import json
from pathlib import Path
from typing import IO, Any, Optional

import yaml

from ..errors import InvalidArgument, MissingArgument


# Formats accepted for configuration input
INPUT_FORMATS = ("json", "yaml")


def read_input_from_file(path: str) -> str:
    """Read configuration content from a file."""
    try:
        return Path(path).read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidArgument(f"Could not read {path}: {e.strerror or e}") from e


def read_input_from_pipe(stdin: IO[str]) -> str:
    """Read configuration content from standard input until end of stream."""
    return stdin.read()


def read_config_content(
    config_path: Optional[str],
    from_pipe: bool,
    stdin: IO[str],
    path_flag: str = "-config",
    pipe_flag: str = "-pipe"
) -> str:
    """
    Read configuration content from exactly one source.

    Args:
        config_path: Value of the file path flag (None if not given)
        from_pipe: Whether the pipe flag was set
        stdin: Stream read when from_pipe is set
        path_flag: File flag name, for error messages
        pipe_flag: Pipe flag name, for error messages

    Returns:
        Non-empty content

    Raises:
        InvalidArgument: Both sources given, file unreadable, or empty content
        MissingArgument: Neither source given
    """
    if from_pipe and config_path is not None:
        raise InvalidArgument(f"Use either {path_flag} or {pipe_flag}, not both")

    if from_pipe:
        content = read_input_from_pipe(stdin)
    elif config_path is not None:
        content = read_input_from_file(config_path)
    else:
        raise MissingArgument(
            f"{path_flag} <path_to_file> or {pipe_flag}",
        )

    if not content.strip():
        raise InvalidArgument("Content cannot be empty")

    return content


def decode_content(content: str, format: str) -> Any:
    """
    Decode configuration content.

    Args:
        content: Raw text
        format: "json" or "yaml"

    Returns:
        Decoded data (usually a dict)

    Raises:
        InvalidArgument: Unsupported format or malformed content
    """
    if format == "json":
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise InvalidArgument(f"Invalid json input: {e}") from e

    if format == "yaml":
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise InvalidArgument(f"Invalid yaml input: {e}") from e

    raise InvalidArgument(f'input format "{format}" not supported')


def read_raw_object(
    config_path: Optional[str],
    from_pipe: bool,
    format: str,
    stdin: IO[str],
    path_flag: str = "-config"
) -> dict:
    """
    Read and decode an object definition from a file or pipe.

    Raises:
        InvalidArgument: See read_config_content and decode_content, or
                         the content does not decode to a mapping
        MissingArgument: Neither source given
    """
    content = read_config_content(config_path, from_pipe, stdin, path_flag=path_flag)
    data = decode_content(content, format)
    if not isinstance(data, dict):
        raise InvalidArgument("Configuration must be a single object")
    return data
