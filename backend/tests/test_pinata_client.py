from __future__ import annotations

import io
import json

import httpx
import pytest

from utils_pin import CREDS, PIN_URL, mock_client
from pinbox.exceptions import PinResponseError, PinServiceError, PinTransportError, UpstreamError
from pinbox.storage.pinata import RemotePinClient


def test_upload_posts_multipart_with_credentials():
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        request.read()
        seen.append(request)
        return httpx.Response(200, json={"IpfsHash": "QmABC", "PinSize": 5})

    client = RemotePinClient(CREDS, PIN_URL, client=mock_client(handler))
    cid = client.upload("../secret/report.csv", io.BytesIO(b"a,b\n1"))

    assert cid == "QmABC"
    assert len(seen) == 1
    req = seen[0]
    assert req.method == "POST"
    assert str(req.url) == PIN_URL
    assert req.headers["pinata_api_key"] == "key-123"
    assert req.headers["pinata_secret_api_key"] == "secret-456"
    assert req.headers["content-type"].startswith("multipart/form-data; boundary=")
    body = req.content
    assert b'name="file"; filename="report.csv"' in body
    assert b"a,b\n1" in body
    assert b"secret" not in body


def test_non_2xx_is_upstream_error_with_body():
    client = RemotePinClient(CREDS, PIN_URL, client=mock_client(lambda r: httpx.Response(500, text="rate limited")))
    with pytest.raises(UpstreamError) as ei:
        client.upload("a.txt", io.BytesIO(b"x"))
    assert ei.value.status_code == 500
    assert ei.value.body == "rate limited"
    assert "rate limited" in ei.value.message


def test_timeout_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    client = RemotePinClient(CREDS, PIN_URL, client=mock_client(handler))
    with pytest.raises(PinTransportError) as ei:
        client.upload("a.txt", io.BytesIO(b"x"))
    assert not isinstance(ei.value, UpstreamError)


def test_connection_failure_is_transport_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = RemotePinClient(CREDS, PIN_URL, client=mock_client(handler))
    with pytest.raises(PinTransportError):
        client.upload("a.txt", io.BytesIO(b"x"))


@pytest.mark.parametrize(
    "body",
    [
        "not json",
        json.dumps(["QmABC"]),
        json.dumps({"cid": "QmABC"}),
        json.dumps({"IpfsHash": ""}),
        json.dumps({"IpfsHash": 42}),
    ],
)
def test_malformed_success_body_is_response_error(body):
    client = RemotePinClient(CREDS, PIN_URL, client=mock_client(lambda r: httpx.Response(200, text=body)))
    with pytest.raises(PinResponseError) as ei:
        client.upload("a.txt", io.BytesIO(b"x"))
    assert isinstance(ei.value, PinServiceError)
    assert not isinstance(ei.value, (UpstreamError, PinTransportError))


def test_close_leaves_injected_client_open():
    shared = mock_client(lambda r: httpx.Response(200, json={"IpfsHash": "Qm1"}))
    RemotePinClient(CREDS, PIN_URL, client=shared).close()
    assert not shared.is_closed


def test_close_owned_client():
    client = RemotePinClient(CREDS, PIN_URL, timeout_s=1.0)
    client.close()
    assert client.client.is_closed
