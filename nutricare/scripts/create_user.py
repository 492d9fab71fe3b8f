"""
Create an account from the command line. Run from project root:
  python -m nutricare.scripts.create_user USERNAME PASSWORD
Example:
  python -m nutricare.scripts.create_user admin your-secure-password
"""
import argparse
import logging
import sys

from nutricare.core.config import get_settings
from nutricare.core.database import SessionLocal
from nutricare.core.errors import AuthError
from nutricare.core.security import build_password_hasher, build_token_issuer
from nutricare.services.auth import AuthService
from nutricare.services.credential_store import CredentialStore

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Nutricare API account.")
    parser.add_argument("username", help="Username (1-255 chars, no spaces)")
    parser.add_argument("password", help="Password (6-128 chars)")
    args = parser.parse_args(argv)

    settings = get_settings()
    db = SessionLocal()
    try:
        service = AuthService(
            store=CredentialStore(db),
            hasher=build_password_hasher(settings),
            issuer=build_token_issuer(settings),
        )
        account = service.register(args.username, args.password)
    except AuthError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created account '%s' (id=%s)", account.username, account.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
