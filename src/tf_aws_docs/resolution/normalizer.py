"""
Label normalization for fuzzy resolution.

Turns "Amazon S3 Bucket", "aws_s3_bucket" and "S3-Bucket" into the same
comparable token ("s3bucket").
"""
import re
from functools import lru_cache
from typing import Iterable, Pattern, Tuple

from ..constants import DEFAULT_VENDOR_PREFIXES

_NON_ALNUM = re.compile(r"[^a-z0-9]")
_VENDOR_FILE_PREFIX = re.compile(r"^aws[-_]")


@lru_cache(maxsize=16)
def _vendor_prefix_pattern(prefixes: Tuple[str, ...]) -> Pattern[str]:
    alternatives = "|".join(re.escape(p.lower()) for p in prefixes)
    return re.compile(rf"^(?:{alternatives})[ _-]?")


def _normalize_once(value: str, pattern: Pattern[str]) -> str:
    return _NON_ALNUM.sub("", pattern.sub("", value.lower(), count=1))


def normalize(value: str, vendor_prefixes: Iterable[str] = DEFAULT_VENDOR_PREFIXES) -> str:
    """
    Canonicalize a label into a comparable token.

    Lower-cases, strips one leading vendor token ("aws", "amazon") with an
    optional single separator, then drops everything that is not an ASCII
    letter or digit. The pass is repeated until the value is stable so
    that ``normalize(normalize(s)) == normalize(s)``.

    :param value: Raw label (query, title, heading, ...)
    :param vendor_prefixes: Vendor tokens stripped from the start
    :return: Normalized token, possibly empty
    """
    prefixes = tuple(vendor_prefixes)
    if not prefixes:
        return _NON_ALNUM.sub("", value.lower())

    pattern = _vendor_prefix_pattern(prefixes)
    current = _normalize_once(value, pattern)
    while True:
        following = _normalize_once(current, pattern)
        if following == current:
            return current
        current = following


def strip_vendor_file_prefix(file_name: str) -> str:
    """Remove a leading "aws-" or "aws_" from a documentation file name."""
    return _VENDOR_FILE_PREFIX.sub("", file_name)
