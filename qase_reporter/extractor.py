"""Qase case ID extraction from test names."""

import re

CASE_ID_PATTERN = re.compile(r"QASE-([0-9]+)")


def parse_case_ids(text: str) -> list[int]:
    """Return every ``QASE-<digits>`` ID in ``text``, left to right.

    Duplicates are kept. A bare ``QASE-`` prefix is not a match.

    >>> parse_case_ids("TestLogin/QASE-12/QASE-7_retry")
    [12, 7]
    """
    return [int(match.group(1)) for match in CASE_ID_PATTERN.finditer(text)]
