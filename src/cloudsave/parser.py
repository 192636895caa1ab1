from __future__ import annotations

import re

from cloudsave.errors import InvalidArgumentError
from cloudsave.models import BaseInfo

PATTERN = re.compile(r"[+-]?[0-9]+")

MIN_AID = 0
MAX_AID = 9

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1


def parse_aid(text: object) -> int | None:
    if not isinstance(text, str) or not PATTERN.fullmatch(text):
        return None

    aid = int(text)
    # Wire field is int32.
    if aid < _INT32_MIN or aid > _INT32_MAX:
        return None
    return aid


def build_base_info(bid: str, uid: str, aid: int) -> BaseInfo:
    if not bid or not uid:
        raise InvalidArgumentError("bid and uid are required")
    if aid < MIN_AID or aid > MAX_AID:
        raise InvalidArgumentError(f"aid must be in [{MIN_AID}, {MAX_AID}], got {aid}")
    return BaseInfo(bid=bid, uid=uid, aid=aid)
