"""Logging helpers for routing plan output and diagnostics."""

from dependsload.logging.formatters import StreamFormatter, StreamRoutingFilter

__all__ = ["StreamFormatter", "StreamRoutingFilter"]
