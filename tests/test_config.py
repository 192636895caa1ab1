import pytest
from pydantic import ValidationError

from cloudsave.client import ArchiveClient
from cloudsave.config import Settings


def test_read_settings_from_env_file(tmp_path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text(
        "CLOUDSAVE_ADDR=archive.internal:9100\nCLOUDSAVE_TIMEOUT=2.5\n",
        encoding="utf-8",
    )

    settings = Settings(_env_file=env_path)
    assert settings.addr == "archive.internal:9100"
    assert settings.timeout == 2.5
    assert settings.secure is False


def test_blank_timeout_means_no_deadline(tmp_path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("CLOUDSAVE_TIMEOUT=\n", encoding="utf-8")

    settings = Settings(_env_file=env_path)
    assert settings.timeout is None


def test_non_positive_timeout_rejected(tmp_path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("CLOUDSAVE_TIMEOUT=0\n", encoding="utf-8")

    with pytest.raises(ValidationError):
        Settings(_env_file=env_path)


def test_client_from_settings_opens_lazy_channel(tmp_path) -> None:
    env_path = tmp_path / ".env"
    env_path.write_text("CLOUDSAVE_ADDR=127.0.0.1:1\nCLOUDSAVE_TIMEOUT=1\n", encoding="utf-8")

    # Nothing listens on port 1; construction must still succeed.
    with ArchiveClient.from_settings(Settings(_env_file=env_path)) as client:
        assert client.addr == "127.0.0.1:1"
        assert client.default_timeout == 1.0
