"""Compilation of log schemes and field extraction.

A scheme describes a log line as four sub-patterns (date/time, host,
service, message) placed into a whole-line template. Compiling a scheme
produces an immutable :class:`CompiledScheme` that is reused for every
candidate entry.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from string import Formatter
from typing import Dict, List, Optional

from logweave.core.errors import ConfigError, ParsingError
from logweave.models import Scheme, ExtractedFields
from logweave.models.data import EPOCH

# Placeholder name -> capture group name, in the order they must appear
PLACEHOLDERS = {
    "d": "datetime_text",
    "h": "host",
    "s": "service",
    "m": "message",
}

ONE_MICROSECOND = timedelta(microseconds=1)

@dataclass(frozen=True)
class CompiledScheme:
    """A scheme turned into working matchers."""
    scheme: Scheme
    pattern: str
    line_regex: re.Pattern
    delimiter_regex: re.Pattern
    timestamp_format: str

def _sub_patterns(scheme: Scheme) -> Dict[str, str]:
    return {
        "d": scheme.date_time_pattern,
        "h": scheme.host_pattern,
        "s": scheme.service_pattern,
        "m": scheme.message_pattern,
    }

def _check_sub_pattern(name: str, source: str) -> None:
    try:
        compiled = re.compile(source)
    except re.error as e:
        raise ConfigError(
            f"Invalid sub-pattern for '{name}'",
            details={"pattern": source, "error": str(e)}
        ) from e
    if compiled.groups:
        raise ConfigError(
            f"Sub-pattern for '{name}' must not contain capturing groups, use (?:...)",
            details={"pattern": source, "groups": compiled.groups}
        )

def expand_template(scheme: Scheme) -> str:
    """Substitute the sub-patterns into the whole-line template.

    Args:
        scheme: Scheme to expand

    Returns:
        Pattern source with one named group per sub-pattern

    Raises:
        ConfigError: If the template is malformed or does not reference
            each of d, h, s and m exactly once, in that order
    """
    template = scheme.whole_line_template
    sub_patterns = _sub_patterns(scheme)
    try:
        pieces = list(Formatter().parse(template))
    except ValueError as e:
        raise ConfigError(
            "Malformed braces in line template",
            details={"template": template, "error": str(e)}
        ) from e

    parts: List[str] = []
    seen: List[str] = []
    for literal, name, format_spec, conversion in pieces:
        parts.append(literal)
        if name is None:
            continue
        if name not in PLACEHOLDERS:
            raise ConfigError(
                f"Unknown placeholder '{{{name}}}' in line template",
                details={"template": template, "allowed": sorted(PLACEHOLDERS)}
            )
        if format_spec or conversion:
            raise ConfigError(
                f"Placeholder '{{{name}}}' must not carry a conversion or format spec",
                details={"template": template}
            )
        if name in seen:
            raise ConfigError(
                f"Placeholder '{{{name}}}' used more than once",
                details={"template": template}
            )
        seen.append(name)
        _check_sub_pattern(name, sub_patterns[name])
        parts.append(f"(?P<{PLACEHOLDERS[name]}>{sub_patterns[name]})")

    if seen != list(PLACEHOLDERS):
        raise ConfigError(
            "Line template must reference {d}, {h}, {s} and {m} once each, in that order",
            details={"template": template, "found": seen}
        )
    return "".join(parts)

def compile_scheme(scheme: Scheme, timestamp_format: Optional[str] = None) -> CompiledScheme:
    """Compile a scheme into line and delimiter matchers.

    Args:
        scheme: Scheme to compile
        timestamp_format: strptime format overriding the scheme's own

    Returns:
        Compiled scheme

    Raises:
        ConfigError: If the scheme cannot be compiled
    """
    pattern = expand_template(scheme)
    try:
        # DOTALL lets the message run over several physical lines
        line_regex = re.compile(pattern, re.DOTALL)
    except re.error as e:
        raise ConfigError(
            "Line template does not compile",
            details={"pattern": pattern, "error": str(e)}
        ) from e
    if line_regex.groups != len(PLACEHOLDERS):
        raise ConfigError(
            f"Line template must produce exactly {len(PLACEHOLDERS)} capture groups",
            details={"pattern": pattern, "groups": line_regex.groups}
        )

    try:
        delimiter_regex = re.compile(scheme.delimiter_pattern, re.MULTILINE)
    except re.error as e:
        raise ConfigError(
            "Delimiter pattern does not compile",
            details={"pattern": scheme.delimiter_pattern, "error": str(e)}
        ) from e
    if delimiter_regex.search("") is not None:
        raise ConfigError(
            "Delimiter pattern matches empty text",
            details={"pattern": scheme.delimiter_pattern}
        )

    fmt = timestamp_format if timestamp_format is not None else scheme.timestamp_format
    if not fmt:
        raise ConfigError("Timestamp format is empty")

    return CompiledScheme(
        scheme=scheme,
        pattern=pattern,
        line_regex=line_regex,
        delimiter_regex=delimiter_regex,
        timestamp_format=fmt,
    )

def extract(compiled: CompiledScheme, candidate: str) -> Optional[ExtractedFields]:
    """Match one candidate entry against the scheme.

    Returns:
        The four field texts, or None when the candidate does not match
    """
    match = compiled.line_regex.match(candidate.rstrip("\r\n"))
    if match is None:
        return None
    return ExtractedFields(**{
        group: match.group(group) for group in PLACEHOLDERS.values()
    })

def parse_timestamp(compiled: CompiledScheme, text: str) -> int:
    """Parse timestamp text into microseconds since the Unix epoch.

    Values without an offset are read as UTC.

    Raises:
        ParsingError: If the text does not fit the timestamp format
    """
    try:
        parsed = datetime.strptime(text, compiled.timestamp_format)
    except ValueError as e:
        raise ParsingError(
            "Timestamp does not match format",
            details={"text": text, "format": compiled.timestamp_format, "error": str(e)}
        ) from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return (parsed - EPOCH) // ONE_MICROSECOND
