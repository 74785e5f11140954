import base64
import time
import unicodedata
from hmac import compare_digest

from .errors import ClockError, InvalidBase32

BASE32_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"
_BASE32_SYMBOLS = frozenset(BASE32_ALPHABET + BASE32_ALPHABET.lower())


def decode_base32(secret: str) -> bytes:
    """
    Decodes an unpadded, case-insensitive RFC 4648 Base32 secret.

    Every 8 characters yield 5 bytes. A trailing partial group yields
    ``len * 5 // 8`` bytes and any leftover bits are dropped, so "MZXW6YQ"
    decodes to ``b"foob"`` and a single character decodes to ``b""``.

    :param secret: the Base32 text, e.g. as typed from an authenticator setup page
    :returns: the raw key bytes
    :raises InvalidBase32: if any character is outside A-Z / 2-7 (``=`` included)
    """
    for position, char in enumerate(secret):
        if char not in _BASE32_SYMBOLS:
            raise InvalidBase32("invalid base32 character {!r} at position {}".format(char, position))
    secret = secret.upper()

    length = len(secret) * 5 // 8
    missing = -len(secret) % 8
    # "A" is the zero quintet, so filling with it only adds bits past ``length``.
    return base64.b32decode(secret + "A" * missing)[:length]


def strings_equal(s1: str, s2: str) -> bool:
    """
    Timing-attack resistant string comparison.

    Normal comparison using == will short-circuit on the first mismatching
    character. This avoids that by scanning the whole string, though we
    still reveal to a timing attack whether the strings are the same
    length.
    """
    s1 = unicodedata.normalize("NFKC", s1)
    s2 = unicodedata.normalize("NFKC", s2)
    return compare_digest(s1.encode("utf-8"), s2.encode("utf-8"))


def current_unix_time() -> int:
    """
    Reads the wall clock as whole seconds since the Unix epoch.

    :raises ClockError: if the clock reports a time before 1970-01-01
    """
    now = time.time()
    if now < 0:
        raise ClockError("system time is before the Unix epoch")
    return int(now)


def format_code(code: int, digits: int) -> str:
    """Left-pads ``code`` with zeros to exactly ``digits`` characters."""
    return str(code).zfill(digits)
