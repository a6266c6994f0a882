"""Tests for signed temporary URL generation."""

from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlsplit

import pytest

from azure_blob_adapter import (
    InvalidArgumentError,
    SignedUrlGenerator,
    SigningError,
    StorageConfig,
    generate_temporary_url,
    resolve_url,
)
from tests.conftest import ACCOUNT_KEY, ACCOUNT_NAME, CONTAINER_NAME


def _config(**overrides) -> StorageConfig:
    values = {
        "account_name": ACCOUNT_NAME,
        "account_key": ACCOUNT_KEY,
        "container_name": CONTAINER_NAME,
    }
    values.update(overrides)
    return StorageConfig(**values)


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


def test_temporary_url_starts_with_object_url_and_is_signed():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    url = generate_temporary_url(_config(), "test_path/test.txt", expires_at)

    assert url.startswith(
        "https://azure_account.blob.core.windows.net/azure_container/test_path/test.txt"
    )
    assert "sig=" in url


def test_temporary_url_carries_read_only_blob_parameters():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=5)

    query = _query(generate_temporary_url(_config(), "test.txt", expires_at))

    assert query["se"] == [expires_at.strftime("%Y-%m-%dT%H:%M:%SZ")]
    assert query["sp"] == ["r"]
    assert query["sr"] == ["b"]
    assert query["sig"][0]


def test_temporary_url_uses_prefix():
    config = _config(key_prefix="test_path")
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    url = generate_temporary_url(config, "/test.txt", expires_at)

    assert url.startswith(resolve_url(config, "test.txt") + "?")


def test_temporary_url_for_root_container():
    config = _config(container_name="$root")
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    url = generate_temporary_url(config, "test.txt", expires_at)

    assert url.startswith("https://azure_account.blob.core.windows.net/test.txt?")


def test_temporary_url_uses_custom_url():
    config = _config(custom_base_url="https://example.com")
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    url = generate_temporary_url(config, "test.txt", expires_at)

    assert url.startswith("https://example.com/azure_container/test.txt?")


def test_empty_key_signs_the_container():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    query = _query(generate_temporary_url(_config(), "", expires_at))

    assert query["sr"] == ["c"]
    assert query["sp"] == ["r"]


def test_naive_expiry_is_treated_as_utc():
    expires_at = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(hours=1)

    query = _query(generate_temporary_url(_config(), "test.txt", expires_at))

    assert query["se"] == [expires_at.strftime("%Y-%m-%dT%H:%M:%SZ")]


def test_aware_expiry_is_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    expires_at = datetime.now(plus_two) + timedelta(hours=1)

    query = _query(generate_temporary_url(_config(), "test.txt", expires_at))

    expected = expires_at.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")
    assert query["se"] == [expected]


def test_expiry_in_the_past_is_rejected():
    expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)

    with pytest.raises(InvalidArgumentError) as exc_info:
        generate_temporary_url(_config(), "test.txt", expires_at)

    assert exc_info.value.argument == "expires_at"


def test_missing_account_key_raises_signing_error():
    config = StorageConfig(
        container_name=CONTAINER_NAME,
        endpoint="https://azure_account.blob.core.windows.net",
        sas_token="sv=2021-08-06&sig=abc",
    )
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    with pytest.raises(SigningError) as exc_info:
        SignedUrlGenerator(config).generate("test.txt", expires_at)

    assert exc_info.value.object_name == "test.txt"


def test_malformed_account_key_raises_signing_error():
    config = _config(account_key="abc")
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    with pytest.raises(SigningError) as exc_info:
        generate_temporary_url(config, "test.txt", expires_at)

    assert exc_info.value.cause is not None


def test_signature_depends_on_key():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)
    other_key = "b3RoZXJfa2V5"  # base64 of "other_key"

    first = _query(generate_temporary_url(_config(), "test.txt", expires_at))
    second = _query(generate_temporary_url(_config(account_key=other_key), "test.txt", expires_at))

    assert first["sig"] != second["sig"]


@pytest.mark.parametrize(
    ("key", "encoded"),
    [
        ("report #1.pdf", "report%20%231.pdf"),
        ("a?b.txt", "a%3Fb.txt"),
    ],
)
def test_signature_lands_in_query_for_keys_with_reserved_characters(key, encoded):
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=5)

    parts = urlsplit(generate_temporary_url(_config(), key, expires_at))

    assert parts.path == f"/azure_container/{encoded}"
    assert parts.fragment == ""
    query = parse_qs(parts.query)
    assert query["sr"] == ["b"]
    assert query["sig"][0]


def test_empty_key_url_has_no_trailing_slash():
    expires_at = datetime.now(timezone.utc) + timedelta(minutes=1)

    url = generate_temporary_url(_config(), "", expires_at)

    assert url.startswith("https://azure_account.blob.core.windows.net/azure_container?")
