"""Core constants: Firestore endpoints and shared literal values."""

import re

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_DATABASE_ID = "(default)"

# Audience for self-signed service account JWTs.
FIRESTORE_TOKEN_AUDIENCE = (
    "https://firestore.googleapis.com/google.firestore.v1.Firestore"
)

# projects/<p>/databases/<d>/documents/<rel> -> <rel>
RESOURCE_PATH_RE = re.compile(r"^projects/([^/]+)/databases/([^/]+)(?:/documents/?)?")

# Server-side value used by the serverTimestamp transform.
SERVER_VALUE_REQUEST_TIME = "REQUEST_TIME"

# Document auto ids: 20 chars of [A-Za-z0-9].
AUTO_ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789"
AUTO_ID_LENGTH = 20

# Signed 64-bit range carried by integerValue.
INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
