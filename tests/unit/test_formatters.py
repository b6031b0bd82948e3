import logging

import pytest

from dependsload.logging import StreamFormatter, StreamRoutingFilter


def make_record(level: int, msg: str, stream: str | None = None) -> logging.LogRecord:
    record = logging.LogRecord("dependsload", level, __file__, 1, msg, None, None)
    if stream is not None:
        record.stream = stream
    return record


@pytest.mark.parametrize(
    ("level", "stream", "expected"),
    [
        (logging.INFO, None, "message"),
        (logging.WARNING, None, "[warning] message"),
        (logging.ERROR, "stderr", "[error] message"),
        (logging.ERROR, "stdout", "message"),
    ],
)
def test_stream_formatter(level: int, stream: str | None, expected: str) -> None:
    formatter = StreamFormatter("%(message)s")

    assert formatter.format(make_record(level, "message", stream)) == expected


def test_records_without_stream_go_to_stderr() -> None:
    record = make_record(logging.INFO, "message")

    assert StreamRoutingFilter("stderr").filter(record)
    assert not StreamRoutingFilter("stdout").filter(record)


def test_stdout_records_only_reach_stdout() -> None:
    record = make_record(logging.INFO, "message", "stdout")

    assert StreamRoutingFilter("stdout").filter(record)
    assert not StreamRoutingFilter("stderr").filter(record)
