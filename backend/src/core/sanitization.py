import re
import secrets
import string

# Markup and script fragments stripped from free-text input
HTML_TAG_CHARS = re.compile(r"[<>]")
JS_PROTOCOL = re.compile(r"javascript:", re.IGNORECASE)
EVENT_HANDLER = re.compile(r"on\w+=", re.IGNORECASE)
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")

LEAGUE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9\s\-_']+$")
INVITE_CODE_PATTERN = re.compile(r"^[A-Z0-9]{6}$")

# Max lengths
MIN_LEAGUE_NAME_LENGTH = 3
MAX_LEAGUE_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 500
INVITE_CODE_LENGTH = 6
INVITE_CODE_ALPHABET = string.ascii_uppercase + string.digits


def sanitize_input(text: str | None) -> str:
    """Strip markup, script protocols and inline event handlers."""
    if not text:
        return ""
    text = CONTROL_CHARS_PATTERN.sub("", text)
    text = HTML_TAG_CHARS.sub("", text)
    text = JS_PROTOCOL.sub("", text)
    text = EVENT_HANDLER.sub("", text)
    return text.strip()


def sanitize_league_name(name: str) -> str:
    name = sanitize_input(name)
    return re.sub(r"[^\w\s\-']", "", name)


def validate_league_name(name: str) -> str | None:
    """Return an error message, or None when the name is acceptable."""
    if not name or not name.strip():
        return "League name cannot be empty"
    if len(name) < MIN_LEAGUE_NAME_LENGTH:
        return f"League name must be at least {MIN_LEAGUE_NAME_LENGTH} characters"
    if len(name) > MAX_LEAGUE_NAME_LENGTH:
        return f"League name must not exceed {MAX_LEAGUE_NAME_LENGTH} characters"
    if not LEAGUE_NAME_PATTERN.match(name):
        return "League name contains invalid characters"
    return None


def normalize_invite_code(code: str | None) -> str:
    """Keep alphanumerics only, upper-cased, truncated to the code length."""
    if not code:
        return ""
    return re.sub(r"[^A-Za-z0-9]", "", code).upper()[:INVITE_CODE_LENGTH]


def validate_invite_code(code: str) -> str | None:
    if len(code) != INVITE_CODE_LENGTH:
        return f"Invite code must be exactly {INVITE_CODE_LENGTH} characters"
    if not INVITE_CODE_PATTERN.match(code):
        return "Invite code must contain only uppercase letters and numbers"
    return None


def generate_invite_code() -> str:
    return "".join(secrets.choice(INVITE_CODE_ALPHABET) for _ in range(INVITE_CODE_LENGTH))
