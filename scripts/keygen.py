#!/usr/bin/env python3
"""
Encrypt or decrypt short secrets with AES-GCM.

Examples:
    GEOCODING_ENCRYPTION_KEY=0123456789abcdef0123456789abcdef \
        python scripts/keygen.py encrypt "my-secret"
    python scripts/keygen.py decrypt --key 0123456789abcdef <token>
"""

import argparse
import sys
import os

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))

from shared.crypto import decrypt, encrypt  # noqa: E402
from shared.errors import EncryptionError  # noqa: E402

KEY_ENV = "GEOCODING_ENCRYPTION_KEY"


def _parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="AES-GCM encrypt/decrypt helper.")
    parser.add_argument("--key", default=os.getenv(KEY_ENV), help=f"16, 24 or 32 byte key (default: ${KEY_ENV})")
    sub = parser.add_subparsers(dest="command", required=True)

    enc = sub.add_parser("encrypt", help="Encrypt plaintext (argument or stdin)")
    enc.add_argument("data", nargs="?", help="Plaintext; read from stdin when omitted")

    dec = sub.add_parser("decrypt", help="Decrypt a token (argument or stdin)")
    dec.add_argument("data", nargs="?", help="Token; read from stdin when omitted")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = _parse_args(argv)
    if not args.key:
        print(f"[keygen] no key given; pass --key or set {KEY_ENV}", file=sys.stderr)
        return 2

    key = args.key.encode("utf-8")
    data = args.data if args.data is not None else sys.stdin.read().strip()

    try:
        if args.command == "encrypt":
            print(f"Encrypted: {encrypt(data.encode('utf-8'), key)}")
        else:
            print(f"Decrypted: {decrypt(data, key).decode('utf-8')}")
    except EncryptionError as exc:
        print(f"[keygen] {exc.message}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
