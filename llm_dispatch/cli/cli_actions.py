"""CLI action handlers for the fixed sub-commands.

Purpose
-------
Implement ``configure``, ``models`` and ``providers``. Provider chat commands
are handled by :class:`~llm_dispatch.cli.binder.CommandBinder`. This module
has no top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- Handlers print human-readable lines; errors go to stderr in the
  ``Error (<kind>): <message>`` form and return exit code ``1``.
- Secrets are read with ``getpass`` (no echo) and are never printed.
"""

from __future__ import annotations

import argparse
import getpass
from typing import Callable, Optional, TextIO

from ..base.catalog import ModelCatalog
from ..base.errors import ConfigurationError, ModelNotFoundError, ProviderError, UnknownProviderError
from ..base.registry import ProviderDescriptor, ProviderRegistry
from ..base.repositories.credentials import CredentialStore
from .binder import EXIT_FAILURE, EXIT_OK, format_error

InputFn = Callable[[str], str]


def _select_provider(
    registry: ProviderRegistry,
    store: CredentialStore,
    *,
    out: TextIO,
    input_fn: InputFn,
) -> Optional[ProviderDescriptor]:
    """Show a numbered provider list and return the user's choice.

    Accepts either the list number or the provider id. Returns ``None`` on an
    invalid selection.
    """
    descriptors = list(registry)
    configured = set(store.configured_providers([d.id for d in descriptors]))
    print("Available providers:", file=out)
    for idx, d in enumerate(descriptors, start=1):
        mark = " [configured]" if d.id in configured else ""
        print(f"  {idx}) {d.display_name} ({d.id}){mark}", file=out)
    choice = input_fn(f"Select a provider [1-{len(descriptors)}]: ").strip()
    if choice.isdigit() and 1 <= int(choice) <= len(descriptors):
        return descriptors[int(choice) - 1]
    if choice.lower() in registry:
        return registry.descriptor(choice)
    return None


def handle_configure(
    args: argparse.Namespace,
    *,
    registry: ProviderRegistry,
    store: CredentialStore,
    out: TextIO,
    err: TextIO,
    input_fn: InputFn = input,
    getpass_fn: InputFn = getpass.getpass,
) -> int:
    """Execute the ``configure`` sub-command.

    Parameters
    ----------
    args: argparse.Namespace
        Parsed arguments carrying optional ``provider`` and ``remove``.
    registry, store:
        Provider registry and credential store.
    out, err:
        Output streams.
    input_fn, getpass_fn:
        Injection points for prompts (tests pass canned answers).

    Returns
    -------
    int
        ``0`` when the record was written; ``1`` on an invalid selection, an
        empty key, an aborted prompt or an unwritable credential file.
    """
    try:
        if args.provider:
            try:
                descriptor = registry.descriptor(args.provider)
            except UnknownProviderError as exc:
                print(format_error(exc), file=err)
                return EXIT_FAILURE
        else:
            descriptor = _select_provider(registry, store, out=out, input_fn=input_fn)
            if descriptor is None:
                print("Invalid selection", file=err)
                return EXIT_FAILURE

        if args.remove:
            store.save({descriptor.id: None})
            print(f"Removed stored key for {descriptor.display_name}", file=out)
            return EXIT_OK

        secret = getpass_fn(f"API key for {descriptor.display_name}: ").strip()
    except (EOFError, KeyboardInterrupt):
        print("\nAborted", file=err)
        return EXIT_FAILURE
    except ConfigurationError as exc:
        print(format_error(exc), file=err)
        return EXIT_FAILURE

    if not secret:
        print("No key entered; nothing saved", file=err)
        return EXIT_FAILURE
    try:
        store.save({descriptor.id: secret})
    except ConfigurationError as exc:
        print(format_error(exc), file=err)
        return EXIT_FAILURE
    except OSError as exc:
        print(
            format_error(ConfigurationError(f"Cannot write credential file {store.path}: {exc.strerror or exc}")),
            file=err,
        )
        return EXIT_FAILURE
    print(f"Saved key for {descriptor.display_name} to {store.path}", file=out)
    return EXIT_OK


def handle_models(
    args: argparse.Namespace,
    *,
    catalog: ModelCatalog,
    out: TextIO,
    err: TextIO,
) -> int:
    """Execute the ``models`` sub-command (catalog listing)."""
    provider = (args.provider or "").strip().lower() or None
    if provider is not None and provider not in catalog.providers():
        print(format_error(ModelNotFoundError(provider, None)), file=err)
        return EXIT_FAILURE
    entries = catalog.entries(provider)
    header = f"{'PROVIDER':<11} {'MODEL':<34} {'CONTEXT':>9} {'MAX OUT':>8} {'$IN/M':>7} {'$OUT/M':>7}"
    print(header, file=out)
    for e in entries:
        mark = " *" if catalog.default_for(e.provider_id) == e else ""
        print(
            f"{e.provider_id:<11} {e.model_id:<34} {e.context_window_tokens:>9} "
            f"{e.max_output_tokens:>8} {e.pricing.input:>7.2f} {e.pricing.output:>7.2f}{mark}",
            file=out,
        )
    print(f"catalog version {catalog.version}; * marks the provider default", file=out)
    return EXIT_OK


def handle_providers(
    args: argparse.Namespace,
    *,
    registry: ProviderRegistry,
    store: CredentialStore,
    out: TextIO,
    err: TextIO,
) -> int:
    """Execute the ``providers`` sub-command.

    Shows each registered provider and whether a key resolves from the
    environment or the credential file. Secrets are never printed.
    """
    try:
        configured = set(store.configured_providers(list(registry.ids())))
    except ProviderError as exc:
        print(format_error(exc), file=err)
        return EXIT_FAILURE
    for d in registry:
        status = "configured" if d.id in configured else f"not configured ({store.env_hint(d.id)})"
        print(f"{d.id:<11} {d.display_name:<20} {status}", file=out)
    return EXIT_OK


__all__ = ["handle_configure", "handle_models", "handle_providers"]
