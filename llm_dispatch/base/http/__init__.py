"""HTTP helpers shared by HTTP-based adapters."""

from .client import SSE_DONE, build_http_client, iter_sse_data

__all__ = ["build_http_client", "iter_sse_data", "SSE_DONE"]
