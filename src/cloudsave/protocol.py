"""Wire contract of the ``ass_grpc.ArchiveInner`` service.

Message classes are built at import time from a ``FileDescriptorProto`` held in
a private descriptor pool, so there are no generated ``_pb2`` modules to keep
in sync. Field numbers follow declaration order below and must match the
server's ``archive_inner.proto``.
"""

from __future__ import annotations

from enum import IntEnum

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PACKAGE = "ass_grpc"
SERVICE = f"{PACKAGE}.ArchiveInner"

_F = descriptor_pb2.FieldDescriptorProto

STRING = _F.TYPE_STRING
INT32 = _F.TYPE_INT32
INT64 = _F.TYPE_INT64
BOOL = _F.TYPE_BOOL
MESSAGE = _F.TYPE_MESSAGE


class Code(IntEnum):
    """Business status values shared by error statuses and stream responses."""

    SUCCESS = 0
    PARAMS_ERR = 10001
    USER_NOT_EXIST_ERR = 10002
    WEB_DESTROY_CODE_ERR = 10101
    WEB_DESTROY_CODE_EXPIRED_ERR = 10102
    WEB_DESTROY_CODE_NOT_FOUND_ERR = 10103


# message name -> [(field name, type, nested message name, repeated)]
_MESSAGES: dict[str, list[tuple[str, int, str | None, bool]]] = {
    "Empty": [],
    "DisAbnormalReq": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
        ("aid", INT32, None, False),
        ("action", INT32, None, False),
    ],
    "WebDestroyReq": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
        ("aid", INT32, None, False),
        ("code", STRING, None, False),
    ],
    "BatchAbnuserReq": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
        ("aid", INT32, None, False),
        ("reason", INT32, None, False),
    ],
    "BatchAbnuserResp": [
        ("code", INT32, None, False),
        ("msg", STRING, None, False),
    ],
    "GetUserInfoReq": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
    ],
    "GetUserInfoDidReq": [
        ("did", STRING, None, False),
        ("bid", STRING, None, False),
    ],
    "SocialInfo": [
        ("sid", STRING, None, False),
        ("aid", INT32, None, False),
    ],
    "GetUserInfoResp": [
        ("did", STRING, None, False),
        ("uid", STRING, None, False),
        ("reg_time", INT64, None, False),
        ("list", MESSAGE, "SocialInfo", True),
    ],
    "ModifyArchiveReq": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
        ("aid", INT32, None, False),
        ("key", STRING, None, False),
        ("value", STRING, None, False),
    ],
    "GetUserInfoByKeyReq": [
        ("key", STRING, None, False),
    ],
    "GetUserInfoByKeyResp": [
        ("uid", STRING, None, False),
        ("bid", STRING, None, False),
        ("aid", INT32, None, False),
    ],
    "QueryIPForbidUserReq": [
        ("bid", STRING, None, False),
        ("uid", STRING, None, False),
    ],
    "QueryIPForbidUserResp": [
        ("forbid", BOOL, None, False),
        ("ip", STRING, None, False),
        ("reason", STRING, None, False),
        ("expire_time", INT64, None, False),
    ],
    "BaseInfo": [
        ("bid", STRING, None, False),
        ("uid", STRING, None, False),
        ("aid", INT32, None, False),
    ],
    "ClearArchiveReq": [
        ("user_info", MESSAGE, "BaseInfo", False),
    ],
    "DeleteArchiveReq": [
        ("user_info", MESSAGE, "BaseInfo", False),
    ],
}


def _build_file() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto(
        name=f"{PACKAGE}/archive_inner.proto",
        package=PACKAGE,
        syntax="proto3",
    )
    for name, fields in _MESSAGES.items():
        message = proto.message_type.add(name=name)
        for number, (field_name, kind, type_name, repeated) in enumerate(fields, start=1):
            field = message.field.add(
                name=field_name,
                number=number,
                type=kind,
                label=_F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL,
            )
            if type_name:
                field.type_name = f".{PACKAGE}.{type_name}"
    return proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_build_file().SerializeToString())


def _message(name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(f"{PACKAGE}.{name}"))


Empty = _message("Empty")
DisAbnormalReq = _message("DisAbnormalReq")
WebDestroyReq = _message("WebDestroyReq")
BatchAbnuserReq = _message("BatchAbnuserReq")
BatchAbnuserResp = _message("BatchAbnuserResp")
GetUserInfoReq = _message("GetUserInfoReq")
GetUserInfoDidReq = _message("GetUserInfoDidReq")
SocialInfo = _message("SocialInfo")
GetUserInfoResp = _message("GetUserInfoResp")
ModifyArchiveReq = _message("ModifyArchiveReq")
GetUserInfoByKeyReq = _message("GetUserInfoByKeyReq")
GetUserInfoByKeyResp = _message("GetUserInfoByKeyResp")
QueryIPForbidUserReq = _message("QueryIPForbidUserReq")
QueryIPForbidUserResp = _message("QueryIPForbidUserResp")
BaseInfo = _message("BaseInfo")
ClearArchiveReq = _message("ClearArchiveReq")
DeleteArchiveReq = _message("DeleteArchiveReq")


def method_path(name: str) -> str:
    return f"/{SERVICE}/{name}"


class ArchiveInnerStub:
    """Client stub with one multi-callable per remote method."""

    def __init__(self, channel) -> None:
        self.DisAbnormal = channel.unary_unary(
            method_path("DisAbnormal"),
            request_serializer=DisAbnormalReq.SerializeToString,
            response_deserializer=Empty.FromString,
        )
        self.WebDestroy = channel.unary_unary(
            method_path("WebDestroy"),
            request_serializer=WebDestroyReq.SerializeToString,
            response_deserializer=Empty.FromString,
        )
        self.BatchAbnuser = channel.stream_stream(
            method_path("BatchAbnuser"),
            request_serializer=BatchAbnuserReq.SerializeToString,
            response_deserializer=BatchAbnuserResp.FromString,
        )
        self.GetUserInfo = channel.unary_unary(
            method_path("GetUserInfo"),
            request_serializer=GetUserInfoReq.SerializeToString,
            response_deserializer=GetUserInfoResp.FromString,
        )
        self.GetUserInfoDid = channel.unary_unary(
            method_path("GetUserInfoDid"),
            request_serializer=GetUserInfoDidReq.SerializeToString,
            response_deserializer=GetUserInfoResp.FromString,
        )
        self.ModifyArchive = channel.unary_unary(
            method_path("ModifyArchive"),
            request_serializer=ModifyArchiveReq.SerializeToString,
            response_deserializer=Empty.FromString,
        )
        self.GetUserInfoByKey = channel.unary_unary(
            method_path("GetUserInfoByKey"),
            request_serializer=GetUserInfoByKeyReq.SerializeToString,
            response_deserializer=GetUserInfoByKeyResp.FromString,
        )
        self.QueryIPForbidUser = channel.unary_unary(
            method_path("QueryIPForbidUser"),
            request_serializer=QueryIPForbidUserReq.SerializeToString,
            response_deserializer=QueryIPForbidUserResp.FromString,
        )
        self.ClearArchive = channel.unary_unary(
            method_path("ClearArchive"),
            request_serializer=ClearArchiveReq.SerializeToString,
            response_deserializer=Empty.FromString,
        )
        self.DeleteArchive = channel.unary_unary(
            method_path("DeleteArchive"),
            request_serializer=DeleteArchiveReq.SerializeToString,
            response_deserializer=Empty.FromString,
        )
