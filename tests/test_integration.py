"""
Tests for the requests integration

Requests are only prepared, never sent.
"""

import base64
import hashlib
import json

import pytest
import requests

from oci_signer import (
    ErrorCodes,
    InvalidBodyError,
    MissingCredentialsError,
    SignerAuth,
    StaticKeyProvider,
    create_signing_session,
)
from oci_signer.signing import verify_signature


@pytest.fixture
def auth(signer_config):
    return SignerAuth(signer_config)


def _signature_params(authorization):
    params = {}
    for item in authorization[len("Signature "):].split(","):
        name, _, value = item.partition("=")
        params[name] = value.strip('"')
    return params


class TestSignerAuth:
    """Test signing of prepared requests"""

    def test_get_request(self, auth, rsa_private_key):
        prepared = requests.Request(
            "GET", "https://iaas.example.com/20160918/instances", params={"limit": "10"}, auth=auth
        ).prepare()

        assert prepared.headers["host"] == "iaas.example.com"
        params = _signature_params(prepared.headers["Authorization"])
        assert params["headers"] == "date (request-target) host"

        signing_string = "\n".join([
            f"date: {prepared.headers['date']}",
            "(request-target): get /20160918/instances?limit=10",
            "host: iaas.example.com",
        ])
        signature = base64.b64decode(params["signature"])
        assert verify_signature(signing_string, signature, rsa_private_key.public_key())

    def test_post_json_request(self, auth):
        payload = {"displayName": "test"}
        prepared = requests.Request("POST", "https://iaas.example.com/v1/items", json=payload, auth=auth).prepare()

        body = prepared.body if isinstance(prepared.body, bytes) else prepared.body.encode("utf-8")
        assert json.loads(body) == payload
        assert prepared.headers["content-length"] == str(len(body))
        assert prepared.headers["content-type"] == "application/json"
        assert "x-content-sha256" in prepared.headers
        assert "(request-target)" not in prepared.headers

    def test_non_ascii_text_body_is_sent_as_signed_bytes(self, auth):
        prepared = requests.Request(
            "POST", "https://example.com/a", data="héllo", headers={"Content-Type": "text/plain"}, auth=auth
        ).prepare()

        expected = "héllo".encode("utf-8")
        assert prepared.body == expected
        assert prepared.headers["content-length"] == str(len(expected))
        assert prepared.headers["x-content-sha256"] == base64.b64encode(hashlib.sha256(expected).digest()).decode()

    def test_streaming_body_rejected(self, auth):
        def chunks():
            yield b"part"

        with pytest.raises(InvalidBodyError) as exc_info:
            requests.Request("POST", "https://example.com/a", data=chunks(), auth=auth).prepare()
        assert exc_info.value.error_code == ErrorCodes.INVALID_BODY

    def test_explicit_content_type_and_date(self, auth):
        prepared = requests.Request(
            "PUT",
            "https://objectstorage.example.com/n/ns/b/bucket/o/name",
            data=b"raw bytes",
            headers={"Content-Type": "application/octet-stream", "Date": "Tue, 01 Jan 2024 00:00:00 GMT"},
            auth=auth,
        ).prepare()

        assert prepared.headers["content-type"] == "application/octet-stream"
        assert prepared.headers["date"] == "Tue, 01 Jan 2024 00:00:00 GMT"

    def test_each_request_gets_a_fresh_signer(self, auth):
        first = requests.Request("GET", "https://a.example.com/x", auth=auth).prepare()
        second = requests.Request("GET", "https://b.example.com/y", auth=auth).prepare()
        assert first.headers["host"] == "a.example.com"
        assert second.headers["host"] == "b.example.com"

    def test_key_provider(self, private_key_pem):
        auth = SignerAuth(key_provider=StaticKeyProvider("provider/key", private_key_pem))
        prepared = requests.Request("GET", "https://example.com/a", auth=auth).prepare()
        assert _signature_params(prepared.headers["Authorization"])["keyId"] == "provider/key"

    def test_missing_credentials(self, clean_env):
        with pytest.raises(MissingCredentialsError):
            requests.Request("GET", "https://example.com/a", auth=SignerAuth()).prepare()


class TestSigningSession:
    """Test session helper"""

    def test_session_has_auth(self, signer_config):
        session = create_signing_session(signer_config)
        assert isinstance(session.auth, SignerAuth)
        assert session.auth.config is signer_config

    def test_wraps_existing_session(self, signer_config):
        existing = requests.Session()
        assert create_signing_session(signer_config, session=existing) is existing
        assert isinstance(existing.auth, SignerAuth)
