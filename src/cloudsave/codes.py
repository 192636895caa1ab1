from __future__ import annotations

from google.protobuf.message import DecodeError
from google.rpc import status_pb2
import grpc
from grpc_status import rpc_status
from loguru import logger

from cloudsave.protocol import Code

DESTROY_OK = 200
DESTROY_FAILED = -1

BATCH_OK = "200"
BATCH_USER_NOT_EXIST = "-2"
BATCH_INVALID = "-1"
BATCH_FAILED = "500"

_DESTROY_RESULTS = {
    Code.WEB_DESTROY_CODE_EXPIRED_ERR: 1,
    Code.WEB_DESTROY_CODE_ERR: 2,
    Code.WEB_DESTROY_CODE_NOT_FOUND_ERR: 0,
}

_BATCH_RESULTS = {
    Code.SUCCESS: BATCH_OK,
    Code.USER_NOT_EXIST_ERR: BATCH_USER_NOT_EXIST,
    Code.PARAMS_ERR: BATCH_INVALID,
}


def rich_status(exc: grpc.RpcError) -> status_pb2.Status | None:
    # rpc_status.from_call rejects a rich status whose code differs from the
    # transport code, which is always the case for business codes: grpc reports
    # them as UNKNOWN.
    metadata_fn = getattr(exc, "trailing_metadata", None)
    metadata = metadata_fn() if callable(metadata_fn) else None
    for key, value in metadata or ():
        if key != rpc_status.GRPC_DETAILS_METADATA_KEY:
            continue
        try:
            return status_pb2.Status.FromString(value)
        except DecodeError as err:
            logger.warning("Ignoring malformed {} trailer: {}", key, err)
            return None
    return None


def remote_code(exc: grpc.RpcError) -> int | None:
    """Numeric status of a failed call.

    The business code travels in the ``grpc-status-details-bin`` trailer
    (``google.rpc.Status.code``); without it the transport status code is used.
    """
    status = rich_status(exc)
    if status is not None:
        return status.code

    code_fn = getattr(exc, "code", None)
    code = code_fn() if callable(code_fn) else None
    if isinstance(code, grpc.StatusCode):
        return code.value[0]
    return None


def destroy_result(exc: grpc.RpcError | None) -> int:
    """Flatten a WebDestroy outcome into the legacy integer contract.

    ``None`` means the call succeeded (200). Expired, invalid and missing
    verification codes map to 1, 2 and 0; every other failure is -1.
    """
    if exc is None:
        return DESTROY_OK
    return _DESTROY_RESULTS.get(remote_code(exc), DESTROY_FAILED)


def batch_result(code: int) -> str:
    return _BATCH_RESULTS.get(code, BATCH_FAILED)
