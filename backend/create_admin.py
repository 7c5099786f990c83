"""
One-off script to provision an administrator account.
Run from backend/ directory:
    python create_admin.py --username root --email root@example.com \
        --password secret --referral-id REF-1 --phone 5550100
"""
import argparse
import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

from druginfo.exceptions import ConflictError
from druginfo.models.models import Admin
from druginfo.services.passwords import hash_password
from druginfo.services.store import get_store


def create_admin(username, email, password, referral_id, phone_number,
                 referred_id=None, my_referrals=None):
    """Insert an Admin record. Must run inside an application context."""
    store = get_store()
    if store.find_admin_by_email(email):
        raise ConflictError(f"Admin with email '{email}' already exists.")

    admin = Admin(
        username=username,
        email=email,
        password_hash=hash_password(password),
        referral_id=referral_id,
        referred_id=referred_id,
        my_referrals=my_referrals,
        phone_number=phone_number,
        bookmarks=[],
    )
    return store.add(admin, conflict_message=f"Admin with email '{email}' already exists.")


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create a druginfo administrator.")
    parser.add_argument("--username", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--referral-id", required=True)
    parser.add_argument("--phone", required=True)
    parser.add_argument("--referred-id")
    args = parser.parse_args(argv)

    from druginfo.main import create_app

    app = create_app()
    with app.app_context():
        try:
            admin = create_admin(
                args.username, args.email, args.password,
                args.referral_id, args.phone, referred_id=args.referred_id,
            )
        except ConflictError as exc:
            print(f"ERROR: {exc.message}")
            return 1
        print(f"Created admin '{admin.username}' <{admin.email}>.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
