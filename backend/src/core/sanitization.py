import re

CONTROL_CHARS_PATTERN = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')
MARKUP_CHARS_PATTERN = re.compile(r'[\[\]<>{}\n\r]')

# Max lengths
MAX_COMMENT_LENGTH = 2000
MAX_TITLE_NAME_LENGTH = 255
MAX_PROFILE_NAME_LENGTH = 100
MAX_ADDRESS_LENGTH = 255
MAX_PHONE_DIGITS = 9


def sanitize_comment(text: str) -> str:
    """Strip control characters from a user comment and cap its length."""
    if not text:
        return ""

    text = CONTROL_CHARS_PATTERN.sub('', text).strip()

    if len(text) > MAX_COMMENT_LENGTH:
        text = text[:MAX_COMMENT_LENGTH] + "..."

    return text


def sanitize_title_name(name: str) -> str:
    if not name:
        return ""
    name = CONTROL_CHARS_PATTERN.sub('', name).strip()
    return name[:MAX_TITLE_NAME_LENGTH]


def sanitize_profile_field(value: str | None, max_length: int = MAX_PROFILE_NAME_LENGTH) -> str | None:
    """Remove control and delimiter-like characters from a profile field.

    Returns None when nothing is left, so optional columns stay NULL.
    """
    if not value:
        return None

    value = CONTROL_CHARS_PATTERN.sub('', value)
    value = MARKUP_CHARS_PATTERN.sub('', value)

    if len(value) > max_length:
        value = value[:max_length]

    return value.strip() or None


def normalize_phone(value: str | None) -> str | None:
    """Keep at most 9 digits, grouped as ``123 456 789``."""
    if not value:
        return None

    digits = re.sub(r'\D', '', value)[:MAX_PHONE_DIGITS]
    if not digits:
        return None

    groups = [digits[i:i + 3] for i in range(0, len(digits), 3)]
    return " ".join(groups)
