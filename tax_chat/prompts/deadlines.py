"""Filing deadlines for the 2025 declaración de renta (taxable year 2024).

Deadlines depend on the last two digits of the taxpayer's cédula; each
date covers a pair of consecutive suffixes (``01-02``, ``03-04`` ... ``99-00``).
"""

from __future__ import annotations

FILING_DEADLINES: tuple[tuple[str, str, str], ...] = (
    ("01", "02", "12 agosto"),
    ("03", "04", "13 agosto"),
    ("05", "06", "14 agosto"),
    ("07", "08", "15 agosto"),
    ("09", "10", "19 agosto"),
    ("11", "12", "20 agosto"),
    ("13", "14", "21 agosto"),
    ("15", "16", "22 agosto"),
    ("17", "18", "25 agosto"),
    ("19", "20", "26 agosto"),
    ("21", "22", "27 agosto"),
    ("23", "24", "28 agosto"),
    ("25", "26", "29 agosto"),
    ("27", "28", "1 sept"),
    ("29", "30", "2 sept"),
    ("31", "32", "3 sept"),
    ("33", "34", "4 sept"),
    ("35", "36", "5 sept"),
    ("37", "38", "8 sept"),
    ("39", "40", "9 sept"),
    ("41", "42", "10 sept"),
    ("43", "44", "11 sept"),
    ("45", "46", "12 sept"),
    ("47", "48", "15 sept"),
    ("49", "50", "16 sept"),
    ("51", "52", "17 sept"),
    ("53", "54", "18 sept"),
    ("55", "56", "19 sept"),
    ("57", "58", "22 sept"),
    ("59", "60", "23 sept"),
    ("61", "62", "24 sept"),
    ("63", "64", "25 sept"),
    ("65", "66", "26 sept"),
    ("67", "68", "1 oct"),
    ("69", "70", "2 oct"),
    ("71", "72", "3 oct"),
    ("73", "74", "6 oct"),
    ("75", "76", "7 oct"),
    ("77", "78", "8 oct"),
    ("79", "80", "9 oct"),
    ("81", "82", "10 oct"),
    ("83", "84", "14 oct"),
    ("85", "86", "15 oct"),
    ("87", "88", "16 oct"),
    ("89", "90", "17 oct"),
    ("91", "92", "20 oct"),
    ("93", "94", "21 oct"),
    ("95", "96", "22 oct"),
    ("97", "98", "23 oct"),
    ("99", "00", "24 oct"),
)

ENTRIES_PER_LINE = 4


def render_deadline_table(per_line: int = ENTRIES_PER_LINE) -> str:
    """Render the deadline table as ``01-02: 12 agosto | 03-04: ...`` lines."""
    entries = [f"{first}-{second}: {date}" for first, second, date in FILING_DEADLINES]
    lines = [
        " | ".join(entries[start:start + per_line])
        for start in range(0, len(entries), per_line)
    ]
    return "\n".join(lines)

