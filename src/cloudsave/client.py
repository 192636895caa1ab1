from __future__ import annotations

from collections.abc import Sequence
import queue

import grpc
from loguru import logger

from cloudsave import protocol
from cloudsave.codes import BATCH_FAILED, BATCH_INVALID, DESTROY_FAILED, batch_result, destroy_result
from cloudsave.config import Settings, settings as default_settings
from cloudsave.errors import ArchiveConnectionError, InvalidArgumentError
from cloudsave.models import AbnormalUser, SocialInfo, UserInfo, UserKey
from cloudsave.parser import build_base_info, parse_aid

Metadata = Sequence[tuple[str, str]]

_END_OF_STREAM = object()


def _to_user_info(resp: protocol.GetUserInfoResp) -> UserInfo:
    return UserInfo(
        did=resp.did,
        uid=resp.uid,
        reg_time=int(resp.reg_time),
        sis=[SocialInfo(sid=item.sid, aid=int(item.aid)) for item in resp.list],
    )


class ArchiveClient:
    """Blocking client for the cloud-save archive service.

    One channel is opened at construction and shared by every call; grpc
    multiplexes concurrent calls over it, so instances can be used from
    several threads. Reachability is not checked until the first call.

    Every remote method accepts ``timeout`` (seconds) and ``metadata`` for
    that call only. Without ``timeout`` the client's ``default_timeout``
    applies, and ``None`` there means no deadline.
    """

    def __init__(
        self,
        addr: str,
        *,
        secure: bool = False,
        default_timeout: float | None = None,
        channel: grpc.Channel | None = None,
    ) -> None:
        if channel is None:
            try:
                if secure:
                    channel = grpc.secure_channel(addr, grpc.ssl_channel_credentials())
                else:
                    channel = grpc.insecure_channel(addr)
            except Exception as exc:
                raise ArchiveConnectionError(f"cannot open channel to {addr}: {exc}") from exc

        self.addr = addr
        self.default_timeout = default_timeout
        self._channel = channel
        self._stub = protocol.ArchiveInnerStub(channel)
        logger.info("Archive client opened for {} (secure={})", addr, secure)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> ArchiveClient:
        if settings is None:
            settings = default_settings
        return cls(settings.addr, secure=settings.secure, default_timeout=settings.timeout)

    def close(self) -> None:
        self._channel.close()
        logger.info("Archive client for {} closed", self.addr)

    def __enter__(self) -> ArchiveClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _call_options(self, timeout: float | None, metadata: Metadata | None) -> dict:
        return {
            "timeout": self.default_timeout if timeout is None else timeout,
            "metadata": metadata,
        }

    def remove_from_blacklist(
        self,
        uid: str,
        bid: str,
        aid: int,
        action: int,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> None:
        logger.debug("DisAbnormal uid={} bid={} aid={} action={}", uid, bid, aid, action)
        self._stub.DisAbnormal(
            protocol.DisAbnormalReq(uid=uid, bid=bid, aid=aid, action=action),
            **self._call_options(timeout, metadata),
        )

    def destroy_by_verification_code(
        self,
        uid: str,
        aid: str,
        bid: str,
        code: str,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> int:
        parsed_aid = parse_aid(aid)
        if parsed_aid is None:
            logger.warning("WebDestroy skipped, invalid aid {!r} for uid={}", aid, uid)
            return DESTROY_FAILED

        logger.debug("WebDestroy uid={} bid={} aid={}", uid, bid, parsed_aid)
        try:
            self._stub.WebDestroy(
                protocol.WebDestroyReq(uid=uid, bid=bid, aid=parsed_aid, code=code),
                **self._call_options(timeout, metadata),
            )
        except grpc.RpcError as exc:
            result = destroy_result(exc)
            if result == DESTROY_FAILED:
                logger.warning("WebDestroy uid={} bid={} aid={} failed: {}", uid, bid, parsed_aid, exc)
            return result
        return destroy_result(None)

    def batch_mark_abnormal(
        self,
        users: Sequence[AbnormalUser] | None,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> list[str]:
        """Mark users abnormal over one bidirectional stream.

        Returns one status string per input item, in input order. Items are
        sent and answered in lockstep; a failing item is recorded and the next
        one is processed. Once a receive fails the stream is treated as
        terminated: later items are still parsed but not sent, and record
        "500" (or "-1" when their aid is not an integer).
        """
        if not users:
            raise InvalidArgumentError("users must not be empty")

        outbox: queue.Queue = queue.Queue()
        responses = self._stub.BatchAbnuser(
            iter(outbox.get, _END_OF_STREAM),
            **self._call_options(timeout, metadata),
        )

        results: list[str] = []
        terminated = False
        try:
            for user in users:
                aid = parse_aid(user.aid)
                if aid is None:
                    results.append(BATCH_INVALID)
                    continue
                if terminated:
                    results.append(BATCH_FAILED)
                    continue

                try:
                    request = protocol.BatchAbnuserReq(
                        uid=user.uid,
                        bid=user.bid,
                        aid=aid,
                        reason=user.reason,
                    )
                except (TypeError, ValueError) as exc:
                    logger.warning("BatchAbnuser send failed for uid={}: {}", user.uid, exc)
                    results.append(BATCH_FAILED)
                    continue
                outbox.put(request)

                try:
                    resp = next(responses)
                except StopIteration:
                    logger.warning("BatchAbnuser stream closed before answering uid={}", user.uid)
                    terminated = True
                    results.append(BATCH_FAILED)
                    continue
                except grpc.RpcError as exc:
                    logger.warning("BatchAbnuser receive failed for uid={}: {}", user.uid, exc)
                    terminated = True
                    results.append(BATCH_FAILED)
                    continue

                results.append(batch_result(resp.code))
        finally:
            outbox.put(_END_OF_STREAM)

        return results

    def lookup_archive_user_by_uid(
        self,
        uid: str,
        bid: str,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> UserInfo:
        logger.debug("GetUserInfo uid={} bid={}", uid, bid)
        resp = self._stub.GetUserInfo(
            protocol.GetUserInfoReq(uid=uid, bid=bid),
            **self._call_options(timeout, metadata),
        )
        return _to_user_info(resp)

    def lookup_archive_user_by_did(
        self,
        did: str,
        bid: str,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> UserInfo:
        logger.debug("GetUserInfoDid did={} bid={}", did, bid)
        resp = self._stub.GetUserInfoDid(
            protocol.GetUserInfoDidReq(did=did, bid=bid),
            **self._call_options(timeout, metadata),
        )
        return _to_user_info(resp)

    def update_archive(
        self,
        uid: str,
        bid: str,
        key: str,
        value: str,
        aid: int,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> None:
        logger.debug("ModifyArchive uid={} bid={} aid={} key={}", uid, bid, aid, key)
        self._stub.ModifyArchive(
            protocol.ModifyArchiveReq(uid=uid, bid=bid, aid=aid, key=key, value=value),
            **self._call_options(timeout, metadata),
        )

    def lookup_archive_key_by_key(
        self,
        key: str,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> UserKey:
        logger.debug("GetUserInfoByKey key={}", key)
        resp = self._stub.GetUserInfoByKey(
            protocol.GetUserInfoByKeyReq(key=key),
            **self._call_options(timeout, metadata),
        )
        return UserKey(uid=resp.uid, bid=resp.bid, aid=int(resp.aid))

    def query_ip_forbidden_user(
        self,
        bid: str,
        uid: str,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> protocol.QueryIPForbidUserResp:
        logger.debug("QueryIPForbidUser bid={} uid={}", bid, uid)
        return self._stub.QueryIPForbidUser(
            protocol.QueryIPForbidUserReq(bid=bid, uid=uid),
            **self._call_options(timeout, metadata),
        )

    def clear_archive(
        self,
        bid: str,
        uid: str,
        aid: int,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> None:
        target = self._base_info(bid, uid, aid, "ClearArchive")
        logger.debug("ClearArchive bid={} uid={} aid={}", bid, uid, aid)
        self._stub.ClearArchive(
            protocol.ClearArchiveReq(user_info=target),
            **self._call_options(timeout, metadata),
        )

    def delete_archive(
        self,
        bid: str,
        uid: str,
        aid: int,
        *,
        timeout: float | None = None,
        metadata: Metadata | None = None,
    ) -> None:
        target = self._base_info(bid, uid, aid, "DeleteArchive")
        logger.debug("DeleteArchive bid={} uid={} aid={}", bid, uid, aid)
        self._stub.DeleteArchive(
            protocol.DeleteArchiveReq(user_info=target),
            **self._call_options(timeout, metadata),
        )

    @staticmethod
    def _base_info(bid: str, uid: str, aid: int, operation: str) -> protocol.BaseInfo:
        try:
            info = build_base_info(bid, uid, aid)
        except InvalidArgumentError as exc:
            logger.warning("{} rejected: {}", operation, exc)
            raise
        return protocol.BaseInfo(bid=info.bid, uid=info.uid, aid=info.aid)
