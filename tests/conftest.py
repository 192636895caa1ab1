import pytest

from cloudsave.client import ArchiveClient
from fakes import FakeChannel


@pytest.fixture
def channel() -> FakeChannel:
    return FakeChannel()


@pytest.fixture
def client(channel: FakeChannel) -> ArchiveClient:
    return ArchiveClient("fake:9000", channel=channel)
