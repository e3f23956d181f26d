"""ID generators (document auto ids)."""

import secrets

from firelite.core.constants import AUTO_ID_ALPHABET, AUTO_ID_LENGTH


def generate_auto_id() -> str:
    """Generate a random document id (20 chars of [A-Za-z0-9]).

    Uses the secrets module so ids are uniformly distributed and not
    predictable from earlier ids.

    Returns:
        A new document id string.
    """
    return "".join(secrets.choice(AUTO_ID_ALPHABET) for _ in range(AUTO_ID_LENGTH))
