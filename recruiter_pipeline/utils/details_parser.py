"""Utility functions for formatting free-text applicant details."""

import re
from typing import List, Optional

from pydantic import BaseModel


# All-caps header such as "EDUCATION" or "SKILLS & TOOLS"
HEADER_PATTERN = re.compile(r"^[A-Z0-9][A-Z0-9 &/()\-]*$")
KEY_VALUE_PATTERN = re.compile(r"^([^:]{1,60}):\s*(.+)$")


class DetailItem(BaseModel):
    """One line of a details section: a key/value pair or free text."""
    key: Optional[str] = None
    value: str


class DetailSection(BaseModel):
    """A headed group of detail lines; the leading group has no header."""
    header: Optional[str] = None
    items: List[DetailItem] = []


def is_header(line: str) -> bool:
    """Check if a line opens a new section.

    Args:
        line: Stripped, non-empty line.

    Returns:
        True for all-caps lines without a colon, or lines ending in a bare colon.
    """
    if line.endswith(":") and ":" not in line[:-1]:
        return True
    return ":" not in line and any(char.isalpha() for char in line) and bool(HEADER_PATTERN.match(line))


def parse_additional_details(text: Optional[str]) -> List[DetailSection]:
    """Split free-text additional details into headed sections.

    The backend does not guarantee any structure, so this is a best-effort
    display aid and never raises.

    Args:
        text: Raw additional_details string.

    Returns:
        Sections in the order they appear; empty for blank input.

    Examples:
        >>> sections = parse_additional_details("EXPERIENCE\\nCompany: Acme\\nLed migrations")
        >>> sections[0].header, sections[0].items[0].key
        ('EXPERIENCE', 'Company')
    """
    if not text or not isinstance(text, str):
        return []

    sections: List[DetailSection] = []
    current: Optional[DetailSection] = None

    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if is_header(line):
            current = DetailSection(header=line.rstrip(":").strip())
            sections.append(current)
            continue

        if current is None:
            current = DetailSection()
            sections.append(current)

        match = KEY_VALUE_PATTERN.match(line)
        if match:
            current.items.append(DetailItem(key=match.group(1).strip(), value=match.group(2).strip()))
        else:
            current.items.append(DetailItem(value=line))

    return sections
