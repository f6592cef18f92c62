"""Records and the repositories that persist them as JSON documents."""

import secrets
import string

_ID_ALPHABET = string.ascii_lowercase + string.digits


def new_id(length: int = 9) -> str:
    """Short random base-36 identifier for log entries, sessions and guided exercises."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))
