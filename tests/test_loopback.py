from concurrent import futures

from google.rpc import status_pb2
import grpc
from grpc_status import rpc_status
import pytest

from cloudsave import protocol
from cloudsave.client import ArchiveClient
from cloudsave.models import AbnormalUser
from cloudsave.protocol import Code

DESTROY_OUTCOMES = {
    "expired": Code.WEB_DESTROY_CODE_EXPIRED_ERR,
    "invalid": Code.WEB_DESTROY_CODE_ERR,
    "missing": Code.WEB_DESTROY_CODE_NOT_FOUND_ERR,
    "unmapped": Code.USER_NOT_EXIST_ERR,
}

BATCH_OUTCOMES = {
    "ok": Code.SUCCESS,
    "gone": Code.USER_NOT_EXIST_ERR,
}


def _abort_with_business_code(context, value: int, message: str) -> None:
    # Sends the business code in grpc-status-details-bin, as a server using
    # status.WithDetails does; the transport code itself cannot carry it.
    status = status_pb2.Status(code=int(value), message=message)
    context.set_trailing_metadata(
        ((rpc_status.GRPC_DETAILS_METADATA_KEY, status.SerializeToString()),)
    )
    context.abort(grpc.StatusCode.UNKNOWN, message)


def _web_destroy(request, context):
    if request.code == "plain":
        context.abort(grpc.StatusCode.UNKNOWN, "code expired")
    if request.code in DESTROY_OUTCOMES:
        _abort_with_business_code(context, DESTROY_OUTCOMES[request.code], request.code)
    return protocol.Empty()


def _batch_abnuser(requests, context):
    for request in requests:
        if request.uid == "drop":
            context.abort(grpc.StatusCode.UNAVAILABLE, "stream dropped")
        yield protocol.BatchAbnuserResp(code=BATCH_OUTCOMES.get(request.uid, Code.SUCCESS))


@pytest.fixture
def loopback_client():
    handler = grpc.method_handlers_generic_handler(
        protocol.SERVICE,
        {
            "WebDestroy": grpc.unary_unary_rpc_method_handler(
                _web_destroy,
                request_deserializer=protocol.WebDestroyReq.FromString,
                response_serializer=protocol.Empty.SerializeToString,
            ),
            "BatchAbnuser": grpc.stream_stream_rpc_method_handler(
                _batch_abnuser,
                request_deserializer=protocol.BatchAbnuserReq.FromString,
                response_serializer=protocol.BatchAbnuserResp.SerializeToString,
            ),
        },
    )
    server = grpc.server(futures.ThreadPoolExecutor(max_workers=4))
    server.add_generic_rpc_handlers((handler,))
    port = server.add_insecure_port("127.0.0.1:0")
    server.start()
    client = ArchiveClient(f"127.0.0.1:{port}", default_timeout=5.0)
    try:
        yield client
    finally:
        client.close()
        server.stop(None)


@pytest.mark.parametrize(
    ("code", "expected"),
    [
        ("123456", 200),
        ("expired", 1),
        ("invalid", 2),
        ("missing", 0),
        ("unmapped", -1),
        ("plain", -1),
    ],
)
def test_destroy_over_real_channel(loopback_client, code, expected) -> None:
    assert loopback_client.destroy_by_verification_code("u1", "3", "b1", code) == expected


def test_batch_over_real_channel(loopback_client) -> None:
    users = [
        AbnormalUser(uid="ok", bid="b", aid="1"),
        AbnormalUser(uid="bad", bid="b", aid="x"),
        AbnormalUser(uid="gone", bid="b", aid="2"),
        AbnormalUser(uid="drop", bid="b", aid="3"),
        AbnormalUser(uid="ok", bid="b", aid="4"),
    ]

    assert loopback_client.batch_mark_abnormal(users) == ["200", "-1", "-2", "500", "500"]
