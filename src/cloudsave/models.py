from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class AbnormalUser:
    uid: str
    bid: str
    aid: str
    reason: int = 0


@dataclass(slots=True)
class SocialInfo:
    sid: str
    aid: int


@dataclass(slots=True)
class UserInfo:
    did: str
    uid: str
    reg_time: int
    sis: list[SocialInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        # Field names match what legacy HTTP callers already consume.
        return {
            "did": self.did,
            "uid": self.uid,
            "regtime": self.reg_time,
            "sis": [{"sid": s.sid, "aid": s.aid} for s in self.sis],
        }


@dataclass(slots=True)
class UserKey:
    uid: str
    bid: str
    aid: int

    def to_dict(self) -> dict[str, Any]:
        return {"uid": self.uid, "bid": self.bid, "aid": self.aid}


@dataclass(slots=True)
class BaseInfo:
    bid: str
    uid: str
    aid: int
