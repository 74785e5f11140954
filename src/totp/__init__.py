from typing import Any, Optional

from . import utils
from .errors import ClockError as ClockError
from .errors import InvalidBase32 as InvalidBase32
from .errors import InvalidDigits as InvalidDigits
from .errors import InvalidEpoch as InvalidEpoch
from .errors import InvalidInterval as InvalidInterval
from .errors import TOTPError as TOTPError
from .hotp import HOTP as HOTP
from .otp import DEFAULT_DIGEST, DEFAULT_DIGITS
from .otp import OTP as OTP
from .totp import DEFAULT_EPOCH, DEFAULT_INTERVAL
from .totp import TOTP as TOTP
from .utils import decode_base32 as decode_base32
from .utils import format_code as format_code


def compute_totp(
    secret: str,
    digits: int = DEFAULT_DIGITS,
    epoch: int = DEFAULT_EPOCH,
    interval: int = DEFAULT_INTERVAL,
    at_time: Optional[int] = None,
    digest: Any = DEFAULT_DIGEST,
) -> int:
    """
    Computes the RFC 6238 code for a Base32 secret.

    The result is an integer; render it with :func:`format_code` so that
    e.g. 42 with 6 digits reads "000042".

    :param secret: Base32 secret, case-insensitive, unpadded
    :param digits: number of decimal digits in the code
    :param epoch: Unix time from which time steps are counted
    :param interval: seconds per time step
    :param at_time: Unix time to evaluate; the wall clock when None
    :param digest: hashlib constructor used in the HMAC
    :returns: code in ``[0, 10**digits)``
    :raises InvalidBase32: malformed secret
    :raises InvalidInterval: interval is not positive
    :raises InvalidDigits: digits outside 1..10
    :raises InvalidEpoch: epoch is negative or not an integer
    :raises ClockError: no explicit time and the clock is before the Unix epoch
    """
    otp = TOTP(secret, digits=digits, digest=digest, interval=interval, epoch=epoch)
    if at_time is None:
        return otp.code_at(utils.current_unix_time())
    return otp.code_at(at_time)

