import calendar
import datetime
import logging
import math
from typing import Any, Optional, Union

from . import utils
from .errors import InvalidEpoch, InvalidInterval
from .otp import DEFAULT_DIGEST, DEFAULT_DIGITS, OTP

logger = logging.getLogger(__name__)

DEFAULT_EPOCH = 0
DEFAULT_INTERVAL = 30


class TOTP(OTP):
    """
    Handler for time-based OTP counters.
    """

    def __init__(
        self,
        s: str,
        digits: int = DEFAULT_DIGITS,
        digest: Optional[Any] = None,
        interval: int = DEFAULT_INTERVAL,
        epoch: int = DEFAULT_EPOCH,
    ) -> None:
        """
        :param s: secret in base32 format
        :param digits: number of integers in the OTP. Some apps expect this to be 6 digits, others support more.
        :param digest: digest function to use in the HMAC (expected to be SHA1)
        :param interval: the time interval in seconds for OTP. This defaults to 30.
        :param epoch: Unix time from which time steps are counted (T0 in RFC 6238)
        """
        if isinstance(interval, bool) or not isinstance(interval, int) or interval <= 0:
            raise InvalidInterval("interval must be a positive number of seconds, got {!r}".format(interval))
        if isinstance(epoch, bool) or not isinstance(epoch, int) or epoch < 0:
            raise InvalidEpoch("epoch must be a non-negative Unix time in seconds, got {!r}".format(epoch))
        self.interval = interval
        self.epoch = epoch
        super().__init__(s=s, digits=digits, digest=digest or DEFAULT_DIGEST)

    def at(self, for_time: Union[int, float, datetime.datetime], counter_offset: int = 0) -> str:
        """
        Accepts either a Unix timestamp integer or a datetime object.

        :param for_time: the time to generate an OTP for
        :param counter_offset: the amount of ticks to add to the time counter
        :returns: OTP value
        """
        return self.generate_otp(self.timecode(for_time) + counter_offset)

    def code_at(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """Same as :meth:`at` but returns the unpadded integer code."""
        return self.generate_code(self.timecode(for_time))

    def now(self) -> str:
        """
        Generate the current time OTP

        :returns: OTP value
        :raises ClockError: if the system clock is before the Unix epoch
        """
        return self.at(utils.current_unix_time())

    def verify(self, otp: str, for_time: Optional[Union[int, float, datetime.datetime]] = None, valid_window: int = 0) -> bool:
        """
        Verifies the OTP passed in against the current time OTP.

        :param otp: the OTP to check against
        :param for_time: Time to check OTP at (defaults to now)
        :param valid_window: extends the validity to this many counter ticks before and after the current one
        :returns: True if verification succeeded, False otherwise
        """
        if for_time is None:
            for_time = utils.current_unix_time()

        if valid_window:
            for i in range(-valid_window, valid_window + 1):
                if self.timecode(for_time) + i < 0:
                    continue
                if utils.strings_equal(str(otp), str(self.at(for_time, i))):
                    return True
            return False

        return utils.strings_equal(str(otp), str(self.at(for_time)))

    def timecode(self, for_time: Union[int, float, datetime.datetime]) -> int:
        """
        Maps a point in time to its time-step counter,
        ``(for_time - epoch) // interval``.
        """
        if isinstance(for_time, datetime.datetime):
            if for_time.tzinfo:
                seconds = calendar.timegm(for_time.utctimetuple())
            else:
                seconds = math.floor(for_time.timestamp())
        else:
            seconds = math.floor(for_time)
        counter = (seconds - self.epoch) // self.interval
        logger.debug("time %d maps to counter %d (epoch=%d, interval=%d)", seconds, counter, self.epoch, self.interval)
        return counter
