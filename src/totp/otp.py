import hashlib
import hmac
import logging
import struct
from typing import Any

from . import utils
from .errors import InvalidDigits

logger = logging.getLogger(__name__)

DEFAULT_DIGITS = 6
DEFAULT_DIGEST = hashlib.sha1

# Dynamic truncation reads 4 bytes at an offset of up to 15.
MIN_DIGEST_SIZE = 20
MAX_COUNTER = 2**64 - 1


class OTP(object):
    """
    Base class for OTP handlers.
    """

    def __init__(self, s: str, digits: int = DEFAULT_DIGITS, digest: Any = DEFAULT_DIGEST) -> None:
        """
        :param s: secret in base32 format, case-insensitive and unpadded
        :param digits: number of decimal digits in the OTP, 1 to 10
        :param digest: hashlib constructor used in the HMAC (SHA1 per RFC 4226)
        """
        if isinstance(digits, bool) or not isinstance(digits, int) or digits < 1 or digits > 10:
            raise InvalidDigits("digits must be an integer between 1 and 10, got {!r}".format(digits))
        self.digits = digits
        if digest().digest_size < MIN_DIGEST_SIZE:
            raise ValueError("selected digest function must generate digest size greater than or equals to 20 bytes")
        self.digest = digest
        self.secret = s
        self._byte_secret = utils.decode_base32(s)
        if not self._byte_secret:
            logger.warning("OTP secret decodes to an empty key")

    def generate_code(self, input: int) -> int:
        """
        Computes the RFC 4226 HOTP value for a counter, before padding.

        :param input: the HMAC counter value to use as the OTP input.
            Usually either the counter, or the computed integer based on the Unix timestamp
        :returns: an integer in ``[0, 10**digits)``
        """
        hasher = hmac.new(self.byte_secret(), self.int_to_bytestring(input), self.digest)
        hmac_hash = hasher.digest()
        offset = hmac_hash[-1] & 0x0F
        code = struct.unpack(">I", hmac_hash[offset : offset + 4])[0] & 0x7FFFFFFF
        logger.debug("computed %s HMAC for counter %d", hasher.name, input)
        return code % 10**self.digits

    def generate_otp(self, input: int) -> str:
        """
        :param input: the HMAC counter value to use as the OTP input
        :returns: the OTP, zero-padded to ``digits`` characters
        """
        return utils.format_code(self.generate_code(input), self.digits)

    def byte_secret(self) -> bytes:
        return self._byte_secret

    @staticmethod
    def int_to_bytestring(i: int) -> bytes:
        """
        Turns an integer to the OATH specified
        bytestring, which is fed to the HMAC
        along with the secret: 8 bytes, big-endian.
        """
        if isinstance(i, bool) or not isinstance(i, int) or i < 0 or i > MAX_COUNTER:
            raise ValueError("counter must be an unsigned 64-bit integer, got {!r}".format(i))
        return struct.pack(">Q", i)
