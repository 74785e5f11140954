"""
Command-line front end: prints the current TOTP code for a Base32 secret.

usage with an argument:   totp <base32 secret>
usage reading from stdin: echo <base32 secret> | totp
"""

import argparse
import hashlib
import logging
import sys
from typing import List, Optional

from . import compute_totp, format_code
from .errors import TOTPError
from .otp import DEFAULT_DIGITS
from .totp import DEFAULT_EPOCH, DEFAULT_INTERVAL

logger = logging.getLogger(__name__)

ALGORITHMS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}

RED = "\033[31m"
RESET = "\033[0m"


class StdinError(Exception):
    pass


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="totp",
        description="Print the RFC 6238 one-time password for a Base32 secret.",
        epilog="usage reading from stdin: echo <base32 secret> | totp",
    )
    p.add_argument("secret", nargs="?", help="Base32 secret; read from stdin when omitted")
    p.add_argument("-d", "--digits", type=int, default=DEFAULT_DIGITS, help="number of code digits (default: %(default)s)")
    p.add_argument("-e", "--epoch", type=int, default=DEFAULT_EPOCH, help="Unix time steps are counted from (default: %(default)s)")
    p.add_argument("-i", "--interval", type=int, default=DEFAULT_INTERVAL, help="seconds per time step (default: %(default)s)")
    p.add_argument("-t", "--time", type=int, dest="at_time", help="Unix time to evaluate instead of now")
    p.add_argument("-a", "--algorithm", choices=sorted(ALGORITHMS), default="sha1", help="HMAC hash (default: %(default)s)")
    p.add_argument("-v", "--verbose", action="store_true", help="log each step to stderr")
    return p


def read_stdin() -> str:
    try:
        line = sys.stdin.readline()
    except (OSError, UnicodeDecodeError) as e:
        raise StdinError("error reading stdin") from e
    if not line:
        raise StdinError("error reading stdin")
    return line.strip()


def error(message: str) -> int:
    text = "error: {}, try --help".format(message)
    if sys.stderr.isatty():
        text = RED + text + RESET
    print(text, file=sys.stderr)
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        secret = args.secret if args.secret is not None else read_stdin()
        code = compute_totp(
            secret,
            digits=args.digits,
            epoch=args.epoch,
            interval=args.interval,
            at_time=args.at_time,
            digest=ALGORITHMS[args.algorithm],
        )
    except (StdinError, TOTPError, ValueError) as e:
        logger.debug("failed to compute code", exc_info=True)
        return error(str(e))

    print(format_code(code, args.digits))
    return 0


if __name__ == "__main__":
    sys.exit(main())
