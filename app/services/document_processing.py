import os
import re
import random

# Pickup code alphabet: no I, L, O, 0 or 1
CODE_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
CODE_LENGTH = 6

# '/Type /Page' but not '/Type /Pages'
PAGE_MARKER = re.compile(r"/Type[\t\n\v\f\r \xa0]*/Page\b", re.ASCII)

UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]+')


def count_pdf_pages(file_content: bytes) -> int:
    """
    Estimate the page count of a PDF by scanning for page objects.

    This is a heuristic, not a structural parse. PDFs whose page objects
    live in compressed object streams have no visible markers and count
    as a single page.
    """
    text = file_content.decode("latin-1")
    matches = PAGE_MARKER.findall(text)
    return len(matches) if matches else 1


def generate_code() -> str:
    """Random human-readable pickup code. Not cryptographically secure."""
    return "".join(random.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


def sanitize_filename(file_name: str) -> str:
    # Each run of unsafe characters collapses to a single underscore
    return UNSAFE_FILENAME_CHARS.sub("_", file_name)


def is_pdf_filename(file_name: str) -> bool:
    _, ext = os.path.splitext(file_name)
    return ext.lower() == ".pdf"


def parse_copies(raw_copies) -> int:
    """
    Parse the copies form field.

    Reads a leading integer the way browsers' parseInt does ('3 copies' -> 3),
    falls back to 1 when nothing parses, and never returns less than 1.
    """
    if raw_copies is None:
        return 1
    match = re.match(r"\s*([+-]?\d+)", str(raw_copies))
    if not match:
        return 1
    try:
        copies = int(match.group(1))
    except ValueError:
        # Too many digits to convert
        return 1
    return max(copies, 1)
