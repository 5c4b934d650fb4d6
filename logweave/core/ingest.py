"""Turns captured text into log records."""

import dataclasses
from typing import List, Optional

from logweave.core.errors import ParsingError
from logweave.core.logging import get_logger
from logweave.core.scheme import CompiledScheme, extract, parse_timestamp
from logweave.core.splitter import split_entries
from logweave.models import IngestReport, IngestResult, LogRecord, UnmatchedPolicy

logger = get_logger(__name__)

PREVIEW_LENGTH = 80

def _preview(candidate: str) -> str:
    text = candidate.strip()
    return text if len(text) <= PREVIEW_LENGTH else text[:PREVIEW_LENGTH] + "..."

def parse_entries(
    compiled: CompiledScheme,
    text: str,
    policy: UnmatchedPolicy = UnmatchedPolicy.APPEND,
    source: str = "<text>"
) -> IngestResult:
    """Parse a blob of captured log output.

    The text is split on the scheme's delimiter and every candidate is
    matched against the line template. Candidates that do not match are
    handled according to ``policy``. A candidate whose timestamp does not
    parse is dropped without affecting the others.

    Args:
        compiled: Compiled scheme
        text: Captured output
        policy: Handling of candidates that do not match the template
        source: Name used in the report and in log events

    Returns:
        Parsed records in input order with a report of what was kept
    """
    report = IngestReport(source=source)
    records: List[LogRecord] = []
    # Line break that ended the candidate behind records[-1], None when the
    # last candidate was dropped and nothing may be appended.
    trailing: Optional[str] = None

    for candidate in split_entries(compiled.delimiter_regex, text):
        if not candidate.strip():
            continue
        report.candidates += 1
        body = candidate.rstrip("\r\n")

        fields = extract(compiled, candidate)
        if fields is None:
            if policy is UnmatchedPolicy.APPEND and trailing is not None:
                previous = records[-1]
                records[-1] = dataclasses.replace(previous, message=previous.message + trailing + body)
                trailing = candidate[len(body):]
                report.appended += 1
                continue
            if policy is not UnmatchedPolicy.DROP:
                logger.warning("candidate_unmatched", source=source, candidate=_preview(candidate))
            report.dropped += 1
            trailing = None
            continue

        try:
            timestamp = parse_timestamp(compiled, fields.datetime_text)
        except ParsingError as e:
            logger.warning("timestamp_unparsed", source=source, **e.details)
            report.dropped += 1
            trailing = None
            continue

        records.append(LogRecord(
            timestamp=timestamp,
            hostname=fields.host,
            service=fields.service,
            message=fields.message
        ))
        trailing = candidate[len(body):]
        report.parsed += 1

    logger.debug(
        "text_parsed",
        source=source,
        candidates=report.candidates,
        parsed=report.parsed,
        appended=report.appended,
        dropped=report.dropped
    )
    return IngestResult(records=records, report=report)
