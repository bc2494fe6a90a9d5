"""Cooperative cancellation primitives (public API facade).

``CancellationToken`` signals cancellation across threads; ``CancelledError``
is raised by operations that observe it. Implementations live under
``cancellation_parts``.
"""

from .cancellation_parts.cancelled_error import CancelledError
from .cancellation_parts.cancellation_token import CancellationToken

__all__ = ["CancellationToken", "CancelledError"]
