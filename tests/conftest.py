"""Shared fixtures for logweave tests."""

import pytest

from logweave.core.scheme import compile_scheme
from logweave.models import Scheme

DATE_TIME = r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}"

@pytest.fixture
def simple_scheme():
    """Scheme for lines like '2024-01-01 00:00:01 hostA svcA: boot ok'."""
    return Scheme(
        date_time_pattern=DATE_TIME,
        host_pattern=r"\w+",
        service_pattern=r"\w+",
        message_pattern=r".*",
        whole_line_template="{d} {h} {s}: {m}",
        delimiter_pattern="^" + DATE_TIME,
        timestamp_format="%Y-%m-%d %H:%M:%S"
    )

@pytest.fixture
def compiled(simple_scheme):
    return compile_scheme(simple_scheme)

@pytest.fixture
def host_a_text():
    return (
        "2024-01-01 00:00:01 hostA sshd: session opened\n"
        "2024-01-01 00:00:03 hostA nginx: GET /health 200\n"
        "2024-01-01 00:00:05 hostA cron: job finished\n"
    )

@pytest.fixture
def host_b_text():
    return (
        "2024-01-01 00:00:01 hostB sshd: session opened\n"
        "2024-01-01 00:00:02 hostB nginx: GET / 200\n"
        "2024-01-01 00:00:05 hostB cron: job started\n"
    )
