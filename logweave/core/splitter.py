"""Splitting of raw text into entry candidates.

Both functions are lossless: joining their output gives back the input.
"""

import re
from typing import List

def split_keep(delimiter: re.Pattern, text: str) -> List[str]:
    """Split text on a pattern, keeping the matched delimiters.

    Returns non-empty spans preceding each match, each matched delimiter and
    the trailing remainder, in order.

    Args:
        delimiter: Compiled delimiter pattern
        text: Text to split

    Returns:
        List of segments
    """
    result: List[str] = []
    last = 0
    for match in delimiter.finditer(text):
        if match.start() > last:
            result.append(text[last:match.start()])
        if match.group(0):
            result.append(match.group(0))
        last = match.end()
    if last < len(text):
        result.append(text[last:])
    return result

def split_entries(delimiter: re.Pattern, text: str) -> List[str]:
    """Split text into one candidate per delimiter occurrence.

    Each candidate runs from a delimiter match up to the next one, so entries
    spanning several lines stay whole. Text before the first match is
    returned as its own candidate.

    Args:
        delimiter: Compiled delimiter pattern
        text: Text to split

    Returns:
        List of candidate entries
    """
    bounds = [0]
    for match in delimiter.finditer(text):
        if match.start() > bounds[-1]:
            bounds.append(match.start())
    bounds.append(len(text))
    return [text[start:end] for start, end in zip(bounds, bounds[1:]) if end > start]
