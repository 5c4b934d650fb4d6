"""Configuration models for the application."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict

# journalctl -o short-iso-precise, e.g.
# 2024-01-01T00:00:01.123456+00:00 web1 sshd[812]: Accepted publickey for deploy
JOURNAL_DATE_TIME = r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{6}[+-]\d{2}:?\d{2}"

class UnmatchedPolicy(str, Enum):
    """What to do with a candidate entry that does not match the scheme."""
    DROP = "drop"
    WARN = "warn"
    APPEND = "append"

class Scheme(BaseModel):
    """Description of a log line format.

    The whole-line template refers to the four sub-patterns as ``{d}``,
    ``{h}``, ``{s}`` and ``{m}``. Literal braces are written ``{{`` and ``}}``.
    """
    date_time_pattern: str = Field(default=JOURNAL_DATE_TIME, description="Pattern of the timestamp")
    host_pattern: str = Field(default=r"\S+", description="Pattern of the host name")
    service_pattern: str = Field(default=r"[^\s\[:]+", description="Pattern of the service name")
    message_pattern: str = Field(default=r".*", description="Pattern of the message body")
    whole_line_template: str = Field(
        default=r"{d} {h} {s}(?:\[\d+\])?: {m}",
        description="Line template built from the four sub-patterns"
    )
    delimiter_pattern: str = Field(
        default=r"^" + JOURNAL_DATE_TIME,
        description="Pattern marking the start of every entry"
    )
    timestamp_format: str = Field(
        default="%Y-%m-%dT%H:%M:%S.%f%z",
        description="strptime format of the timestamp text"
    )

    model_config = ConfigDict(frozen=True, extra="forbid")

class SourceConfig(BaseModel):
    """A command whose output is collected, locally or over ssh."""
    name: str
    command: str = "journalctl"
    args: List[str] = Field(default_factory=lambda: ["-o", "short-iso-precise", "--no-pager"])
    address: Optional[str] = Field(default=None, description="ssh destination, local when unset")

    model_config = ConfigDict(frozen=True, extra="forbid")

    @property
    def is_remote(self) -> bool:
        return self.address is not None

class TransportSettings(BaseModel):
    """Settings shared by every command invocation."""
    timeout_seconds: float = Field(default=30.0, gt=0)
    connect_timeout_seconds: int = Field(default=10, gt=0)
    known_hosts_file: Optional[str] = None
    fail_on_nonzero_exit: bool = True
    decode_errors: str = Field(default="replace", pattern="^(replace|strict)$")

    model_config = ConfigDict(frozen=True)
