"""Static package metadata surfaced to the CLI and configuration discovery.

The ``LAYEREDCONF_*`` identifiers decide where lib_layered_config looks for
settings files (``~/.config/kvconfig/config.toml`` on Linux,
``Application Support/bitranox/kvconfig`` on macOS, ``AppData`` on Windows).
"""

from __future__ import annotations

name = "kvconfig"
title = "Materialize hierarchical configuration trees from Consul KV"
version = "1.0.0"
author = "bitranox"
author_email = "bitranox@gmail.com"
shell_command = "kvconfig"

LAYEREDCONF_VENDOR: str = "bitranox"
LAYEREDCONF_APP: str = "kvconfig"
LAYEREDCONF_SLUG: str = "kvconfig"


def print_info() -> None:
    """Print the metadata block used by the ``info`` command.

    Example:
        >>> print_info()  # doctest: +ELLIPSIS
        Info for kvconfig:
        ...
    """
    fields = [
        ("name", name),
        ("title", title),
        ("version", version),
        ("author", author),
        ("author_email", author_email),
        ("shell_command", shell_command),
    ]
    pad = max(len(label) for label, _ in fields)
    lines = [f"Info for {name}:", ""]
    lines.extend(f"    {label.ljust(pad)} = {value}" for label, value in fields)
    print("\n".join(lines))
