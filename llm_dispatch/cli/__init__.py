"""llm-dispatch command line interface (package entrypoint).

This package wires argument parsing to the command binder and the fixed
action handlers. It performs no provider logic directly.

Public API re-exports:
- ``main``: CLI entrypoint callable
- ``CommandBinder``: provider sub-command binder
"""

from __future__ import annotations

import getpass
import sys
from typing import Callable, Optional, TextIO

from ..base.logging import configure_logger
from ..di import ProvidersContainer, build_container
from .binder import CommandBinder
from .cli_actions import handle_configure, handle_models, handle_providers
from .cli_parser import build_parser

# argparse exits with 2 on usage errors; a missing command is reported the same way.
EXIT_USAGE = 2


def main(
	argv: Optional[list[str]] = None,
	*,
	container: Optional[ProvidersContainer] = None,
	stdout: Optional[TextIO] = None,
	stderr: Optional[TextIO] = None,
	input_fn: Callable[[str], str] = input,
	getpass_fn: Callable[[str], str] = getpass.getpass,
) -> int:
	"""CLI entrypoint.

	Parameters
	----------
	argv: Optional[list[str]]
		Argument vector; when ``None`` uses ``sys.argv[1:]``.
	container: Optional[ProvidersContainer]
		Pre-built services (tests inject one wired to a mock transport).
	stdout, stderr: Optional[TextIO]
		Output streams; default to the process streams.
	input_fn, getpass_fn:
		Prompt functions used by ``configure``.

	Returns
	-------
	int
		Process exit code (0 success, 1 on error, 2 on usage errors).
	"""
	out = stdout or sys.stdout
	err = stderr or sys.stderr
	services = container or build_container()
	binder = CommandBinder(
		services.registry,
		services.catalog,
		services.store,
		services.invoker,
		stdout=out,
		stderr=err,
	)
	parser, sub = build_parser()
	binder.bind(sub)
	try:
		args = parser.parse_args(list(sys.argv[1:] if argv is None else argv))
	except SystemExit as exc:
		return int(exc.code or 0)

	if args.log_level:
		configure_logger(level=args.log_level)

	if getattr(args, "provider_id", None):
		return binder.run_args(args)
	if args.cmd == "configure":
		return handle_configure(
			args,
			registry=services.registry,
			store=services.store,
			out=out,
			err=err,
			input_fn=input_fn,
			getpass_fn=getpass_fn,
		)
	if args.cmd == "models":
		return handle_models(args, catalog=services.catalog, out=out, err=err)
	if args.cmd == "providers":
		return handle_providers(args, registry=services.registry, store=services.store, out=out, err=err)
	parser.print_usage(err)
	return EXIT_USAGE


__all__ = ["main", "CommandBinder"]


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
