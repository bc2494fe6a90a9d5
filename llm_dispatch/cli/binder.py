"""Command Binder.

Turns every registered provider into a CLI sub-command sharing one option set,
and runs a single chat invocation for it. The execution order is fixed:

    credential -> catalog -> ``registry.create`` -> invoke -> print

so a missing credential or an unknown model is reported before any provider
instance (and therefore any network client) exists. The binder never retries;
every failure is reported once and mapped to exit code ``1``.
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional, TextIO

from pydantic import ValidationError

from ..base.errors import ConfigurationError, ProviderError, UnknownProviderError
from ..base.invoker import ChatInvoker
from ..base.catalog import ModelCatalog
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ChatMessage, ChatRequestOptions, ModelCatalogEntry, Usage
from ..base.registry import ProviderRegistry
from ..base.repositories.credentials import CredentialStore
from .cli_parser import RESERVED_COMMANDS, add_stream_flags

EXIT_OK = 0
EXIT_FAILURE = 1


def format_error(err: ProviderError) -> str:
    """Render a normalized error as the single line printed on stderr."""
    return f"Error ({err.kind.value}): {err.message}"


def _validation_message(exc: ValidationError) -> str:
    parts = []
    for item in exc.errors():
        loc = ".".join(str(p) for p in item.get("loc", ())) or "options"
        parts.append(f"{loc}: {item.get('msg', 'invalid value')}")
    return "Invalid request options (" + "; ".join(parts) + ")"


class CommandBinder:
    """Bind provider sub-commands and execute chat requests.

    Parameters
    ----------
    registry, catalog, store, invoker:
        Services from the DI container.
    stdout, stderr:
        Output streams; default to the process streams at call time.
    """

    def __init__(
        self,
        registry: ProviderRegistry,
        catalog: ModelCatalog,
        store: CredentialStore,
        invoker: ChatInvoker,
        *,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
    ) -> None:
        self._registry = registry
        self._catalog = catalog
        self._store = store
        self._invoker = invoker
        self._stdout = stdout
        self._stderr = stderr
        self._logger = get_logger("llm_dispatch.cli")

    @property
    def out(self) -> TextIO:
        return self._stdout or sys.stdout

    @property
    def err(self) -> TextIO:
        return self._stderr or sys.stderr

    # ---- binding -------------------------------------------------------
    def bind(self, subparsers: argparse._SubParsersAction) -> List[str]:
        """Add one sub-command per registered provider.

        Returns the bound provider ids in registry order.

        Raises
        ------
        ValueError
            If a provider id collides with a built-in command name.
        """
        bound: List[str] = []
        for descriptor in self._registry:
            if descriptor.id in RESERVED_COMMANDS:
                raise ValueError(f"Provider id '{descriptor.id}' clashes with a built-in command")
            default = self._catalog.default_for(descriptor.id)
            p = subparsers.add_parser(descriptor.id, help=f"Chat with {descriptor.display_name}")
            p.add_argument(
                "--model",
                default=None,
                help=f"Model id (default: {default.model_id})" if default else "Model id",
            )
            p.add_argument("--prompt", required=True, help="User prompt text")
            p.add_argument("--system", default=None, help="Optional system prompt")
            p.add_argument("--temperature", type=float, default=None)
            p.add_argument("--max-tokens", dest="max_tokens", type=int, default=None,
                           help="Completion token cap (default: the model's limit)")
            add_stream_flags(p)
            p.add_argument("--usage", action="store_true",
                           help="Print token usage and estimated cost to stderr")
            p.set_defaults(provider_id=descriptor.id)
            bound.append(descriptor.id)
        return bound

    def run_args(self, args: argparse.Namespace) -> int:
        """Dispatch a parsed provider sub-command to :meth:`run_chat`."""
        return self.run_chat(
            args.provider_id,
            prompt=args.prompt,
            model=args.model,
            system=args.system,
            temperature=args.temperature,
            max_tokens=args.max_tokens,
            stream=bool(args.stream),
            show_usage=bool(args.usage),
        )

    # ---- execution -----------------------------------------------------
    def run_chat(
        self,
        provider_id: str,
        *,
        prompt: str,
        model: Optional[str] = None,
        system: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        stream: bool = False,
        show_usage: bool = False,
    ) -> int:
        """Execute one chat request and return the process exit code."""
        pid = provider_id.strip().lower()
        if pid not in self._registry:
            return self._fail(UnknownProviderError(provider_id))

        try:
            credential = self._store.resolve(pid)
        except ConfigurationError as err:
            print(f"Configuration required: {err.message}", file=self.err)
            return EXIT_FAILURE

        try:
            entry = self._catalog.resolve(pid, model)
            options = ChatRequestOptions(
                model=entry.model_id,
                temperature=temperature,
                max_output_tokens=max_tokens,
                stream=stream,
            ).with_catalog_defaults(entry)
        except ProviderError as err:
            return self._fail(err)
        except ValidationError as exc:
            return self._fail(ConfigurationError(_validation_message(exc), provider=pid))

        messages: List[ChatMessage] = []
        if system:
            messages.append(ChatMessage.system(system))
        messages.append(ChatMessage.user(prompt))

        ctx = LogContext(provider=pid, model=entry.model_id)
        try:
            provider = self._registry.create(pid, credential)
        except ProviderError as err:
            return self._fail(err)
        try:
            if stream:
                usage = self._print_stream(provider, messages, options)
            else:
                response = self._invoker.chat(provider, messages, options)
                print(response.content, file=self.out)
                usage = response.usage
        except ProviderError as err:
            log_event(self._logger, "cli.error", ctx, error_kind=err.kind.value)
            return self._fail(err)
        except KeyboardInterrupt:
            print("Cancelled", file=self.err)
            return EXIT_FAILURE
        finally:
            close = getattr(provider, "close", None)
            if close is not None:
                close()

        if show_usage:
            self._print_usage(entry, usage)
        log_event(self._logger, "cli.done", ctx, stream=stream)
        return EXIT_OK

    # ---- helpers -------------------------------------------------------
    def _print_stream(self, provider, messages, options) -> Optional[Usage]:
        out = self.out
        printed = completed = False
        try:
            with self._invoker.stream_chat(provider, messages, options) as chat_stream:
                for chunk in chat_stream:
                    if chunk.content:
                        out.write(chunk.content)
                        out.flush()
                        printed = True
                completed = True
                return chat_stream.usage
        finally:
            # Terminate partial output so a following stderr line starts clean.
            if printed or completed:
                out.write("\n")
                out.flush()

    def _print_usage(self, entry: ModelCatalogEntry, usage: Optional[Usage]) -> None:
        if usage is None:
            print("Usage: not reported by provider", file=self.err)
            return
        cost = entry.estimate_cost(usage)
        print(
            f"Usage: input={usage.input_tokens} output={usage.output_tokens} "
            f"total={usage.total_tokens} est_cost=${cost:.6f}",
            file=self.err,
        )

    def _fail(self, err: ProviderError) -> int:
        print(format_error(err), file=self.err)
        return EXIT_FAILURE


__all__ = ["CommandBinder", "format_error", "EXIT_OK", "EXIT_FAILURE"]
