"""CLI parser construction for llm-dispatch.

This module wires subparsers but contains no execution logic. Provider
sub-commands are attached by :class:`~llm_dispatch.cli.binder.CommandBinder`;
the fixed sub-commands' handlers live in ``cli_actions``.
"""

from __future__ import annotations

import argparse

from ..config.defaults import CLI_PROG

# Sub-command names that no provider id may take.
RESERVED_COMMANDS = frozenset({"configure", "models", "providers"})

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _str2bool(v: str | None) -> bool:
    """Best-effort conversion of common truthy/falsey strings to bool.

    Parameters
    ----------
    v: str | None
        Incoming string value (e.g., "true", "false", "1", "0"). When ``None``
        and used via argparse with ``const=True``, this returns ``True``.

    Returns
    -------
    bool
        Parsed boolean value with a permissive mapping for typical CLI inputs.
    """
    if v is None:
        return True
    val = v.strip().lower()
    if val in {"1", "t", "true", "y", "yes", "on"}:
        return True
    return False if val in {"0", "f", "false", "n", "no", "off"} else bool(val)


def add_stream_flags(parser: argparse.ArgumentParser) -> None:
    """Attach ``--stream``/``--no-stream`` flags to a parser.

    Notes
    -----
    - ``--stream`` accepts an optional boolean (``--stream``, ``--stream true``,
      ``--stream false``). Without a value it means ``True``.
    - ``--no-stream`` is an explicit negation alias equivalent to
      ``--stream false``.
    """
    grp = parser.add_mutually_exclusive_group()
    grp.add_argument("--stream", nargs="?", const=True, type=_str2bool, default=False,
                     help="Print the response incrementally as it arrives")
    grp.add_argument("--no-stream", dest="stream", action="store_false",
                     help="Wait for the complete response (default)")


def build_parser() -> tuple[argparse.ArgumentParser, argparse._SubParsersAction]:
    """Construct the top-level parser with the fixed sub-commands.

    Returns
    -------
    tuple
        ``(parser, subparsers)``; the caller binds one sub-command per
        registered provider onto ``subparsers``.

    Design
    ------
    No I/O occurs here. Handlers are selected through ``set_defaults(cmd=...)``.
    """
    p = argparse.ArgumentParser(
        prog=CLI_PROG,
        description="Send a chat prompt to a configured AI provider",
    )
    p.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=None,
        help="Structured log level written to stderr (default: WARNING)",
    )
    sub = p.add_subparsers(dest="cmd", metavar="COMMAND")

    # configure
    p_cfg = sub.add_parser("configure", help="Store an API key for a provider")
    p_cfg.add_argument("--provider", default=None, help="Provider id; prompts with a list when omitted")
    p_cfg.add_argument("--remove", action="store_true", help="Delete the stored key instead of setting one")

    # models
    p_models = sub.add_parser("models", help="List cataloged models")
    p_models.add_argument("--provider", default=None)

    # providers
    sub.add_parser("providers", help="List registered providers and whether a key is configured")

    return p, sub


__all__ = ["RESERVED_COMMANDS", "LOG_LEVELS", "_str2bool", "add_stream_flags", "build_parser"]
