"""Logging formatters and filters for stream routing."""

import logging


class StreamFormatter(logging.Formatter):
    """Logging formatter that prefixes diagnostics with their level.

    Records routed to stdout carry plan output and are emitted as-is.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record, prefixing warnings and errors with the level name.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message
        """
        msg = super().format(record)
        stream = getattr(record, "stream", None)

        if stream != "stdout" and record.levelno >= logging.WARNING:
            return f"[{record.levelname.lower()}] {msg}"

        return msg


class StreamRoutingFilter(logging.Filter):
    """Filter that routes log records based on stream extra parameter.

    Parameters
    ----------
    stream_type : str
        Stream type to allow: "stdout" or "stderr"
    """

    def __init__(self, stream_type: str) -> None:
        super().__init__()
        self.stream_type = stream_type

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter log records by stream type.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to filter

        Returns
        -------
        bool
            True if record should be emitted by this handler
        """
        record_stream = getattr(record, "stream", None)

        if record_stream is None:
            return self.stream_type == "stderr"

        return record_stream == self.stream_type
