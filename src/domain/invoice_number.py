"""Invoice number format

Auto-generated numbers look like ``{prefix}{YY}/{MM}/{sequence}`` where YY/MM
come from the invoice date. Imported numbers that end in ``/{digits}`` carry a
sequence the counter must move past.
"""

import re
from datetime import datetime
from typing import Optional

_SEQUENCE_SUFFIX = re.compile(r"/(\d+)$")


def format_invoice_number(invoice_date: datetime, sequence: int, prefix: str = "") -> str:
    return f"{prefix or ''}{invoice_date:%y}/{invoice_date:%m}/{sequence}"


def parse_sequence(invoice_number: str) -> Optional[int]:
    """Return the trailing sequence of ``.../1234`` numbers, None otherwise."""
    match = _SEQUENCE_SUFFIX.search(invoice_number)
    if not match:
        return None
    return int(match.group(1))
