"""Distribution metadata shown by the CLI ``info`` command.

Values fall back to static defaults when the package is imported from a
source checkout without being installed.
"""

from __future__ import annotations

from importlib import metadata as _metadata
from typing import Callable

name = "lib_log_relay"
title = "Forward log events to a single registered receiver"
homepage = "https://github.com/bitranox/lib_log_relay"
author = "bitranox"
shell_command = "lib_log_relay"


def _resolve_version() -> str:
    try:
        return _metadata.version(name)
    except _metadata.PackageNotFoundError:
        return "0.0.0.dev0"


version = _resolve_version()


def print_info(writer: Callable[[str], None] | None = None) -> None:
    """Write the metadata banner line by line through ``writer`` (default: ``print``)."""

    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("homepage", homepage),
        ("author", author),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:\n", "\n"]
    lines.extend(f"    {label.ljust(pad)} = {value}\n" for label, value in fields)
    emit = writer if writer is not None else (lambda text: print(text, end=""))
    for line in lines:
        emit(line)


__all__ = ["author", "homepage", "name", "print_info", "shell_command", "title", "version"]
