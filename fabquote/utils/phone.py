import re

PHONE_CHARS_RE = re.compile(r"^[\d\s\-()+]+$")
MIN_PHONE_LENGTH = 10


def is_valid_contact_phone(value: str) -> bool:
    raw = str(value or "").strip()
    return len(raw) >= MIN_PHONE_LENGTH and bool(PHONE_CHARS_RE.match(raw))
