from __future__ import annotations

import json
import logging
from typing import IO

import httpx

from pinbox.config import Credentials
from pinbox.exceptions import PinResponseError, PinTransportError, UpstreamError
from pinbox.storage.base import safe_basename

log = logging.getLogger("pinbox")

HASH_FIELD = "IpfsHash"


class RemotePinClient:
    """
    Pins a single file through Pinata's ``pinFileToIPFS`` endpoint.

    The multipart body carries one ``file`` field; httpx streams file objects
    instead of reading them into memory, and sets the boundary header itself.
    Pass ``client`` to share a pooled ``httpx.Client`` (or a mock transport in tests).
    """

    def __init__(
        self,
        credentials: Credentials,
        pin_url: str,
        timeout_s: float = 60.0,
        client: httpx.Client | None = None,
    ):
        self.credentials = credentials
        self.pin_url = pin_url
        self._owns_client = client is None
        self.client = client or httpx.Client(timeout=float(timeout_s))

    def upload(self, filename: str, fileobj: IO[bytes]) -> str:
        headers = {
            "pinata_api_key": self.credentials.api_key,
            "pinata_secret_api_key": self.credentials.api_secret,
        }
        files = {"file": (safe_basename(filename), fileobj, "application/octet-stream")}

        try:
            resp = self.client.post(self.pin_url, headers=headers, files=files)
        except httpx.RequestError as e:
            raise PinTransportError(
                f"pinning request failed: {type(e).__name__}", {"url": self.pin_url, "error": str(e)}
            ) from e

        if not resp.is_success:
            raise UpstreamError(resp.status_code, resp.text)

        return _parse_hash(resp.text)

    def close(self) -> None:
        if self._owns_client:
            self.client.close()


def _parse_hash(body: str) -> str:
    try:
        data = json.loads(body)
    except ValueError as e:
        raise PinResponseError("pinning response is not JSON", {"body": body[:500]}) from e
    if not isinstance(data, dict):
        raise PinResponseError("pinning response is not an object", {"body": body[:500]})
    cid = data.get(HASH_FIELD)
    if not isinstance(cid, str) or not cid.strip():
        raise PinResponseError(f"pinning response has no {HASH_FIELD}", {"body": body[:500]})
    return cid.strip()
