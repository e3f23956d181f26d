"""Print a Firestore bearer token for the configured service account.

Usage:
    uv run python -m scripts.print_token
Requires FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH.
Useful for calling the REST API by hand, e.g.:
    curl -H "Authorization: Bearer $TOKEN" https://firestore.googleapis.com/v1/...
"""

import sys

from firelite.infrastructure.firebase._rest_client import _get_access_token, _get_credentials
from firelite.infrastructure.firebase.client import _load_key_dict
from firelite.shared.telemetry import setup_logging


def main() -> None:
    setup_logging()
    key_dict = _load_key_dict()
    if not key_dict:
        print(
            "Set FIREBASE_SERVICE_ACCOUNT_KEY or FIREBASE_SERVICE_ACCOUNT_PATH",
            file=sys.stderr,
        )
        sys.exit(1)
    token = _get_access_token(_get_credentials(key_dict))
    print("======= TOKEN FOR TESTING =======")
    print(token)
    print("=================================")


if __name__ == "__main__":
    main()
