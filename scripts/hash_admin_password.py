"""Print an admin credentials entry for the given username and password."""

import json
import sys

from src.sitecms.auth.auth_service import hash_password


def main() -> None:
    if len(sys.argv) != 3:
        print("usage: python -m scripts.hash_admin_password <username> <password>")
        raise SystemExit(2)
    username, password = sys.argv[1], sys.argv[2]
    entry = {"username": username, "password_hash": hash_password(password), "role": "admin"}
    print(json.dumps(entry, ensure_ascii=False))


if __name__ == "__main__":
    main()
