from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import IO, Callable

import httpx

from pinbox.config import Credentials, Settings
from pinbox.exceptions import NotFoundError
from pinbox.storage.address import (
    GatewayRedirect,
    LocalAddress,
    LocalFile,
    RemoteAddress,
    ResolvedLocation,
    StorageAddress,
    parse_address,
)
from pinbox.storage.base import FileStore, PinningBackend
from pinbox.storage.local import LocalFallbackStore
from pinbox.storage.pinata import RemotePinClient

log = logging.getLogger("pinbox")

RemoteFactory = Callable[[Credentials], PinningBackend]


class PinningGateway:
    """
    Entry point for the HTTP handlers.

    ``store`` pins remotely when credentials are present and writes to the local
    fallback store otherwise; the choice is made on every call from
    ``self.credentials``. ``resolve`` never contacts the pinning service: remote
    hashes are turned into gateway links unchecked, local paths must exist on disk
    (and sit under ``local_root`` when one is given).
    """

    def __init__(
        self,
        credentials: Credentials | None,
        local: FileStore,
        remote_factory: RemoteFactory,
        gateway_base: str = "https://gateway.pinata.cloud",
        http_client: httpx.Client | None = None,
        local_root: str | Path | None = None,
    ):
        self.credentials = credentials
        self.local = local
        self.remote_factory = remote_factory
        self.gateway_base = gateway_base.rstrip("/")
        self._http_client = http_client
        self.local_root = Path(local_root).resolve() if local_root is not None else None
        self._remotes: dict[Credentials, PinningBackend] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "PinningGateway":
        client = httpx.Client(timeout=float(settings.pinata_timeout_s))

        def _remote(creds: Credentials) -> PinningBackend:
            return RemotePinClient(creds, settings.pinata_pin_url, client=client)

        return cls(
            credentials=settings.credentials(),
            local=LocalFallbackStore(settings.upload_dir),
            remote_factory=_remote,
            gateway_base=settings.pinata_gateway_url,
            http_client=client,
            local_root=settings.upload_dir,
        )

    @property
    def backend_name(self) -> str:
        return "pinata" if self.credentials is not None else "local"

    def store(self, filename: str, fileobj: IO[bytes]) -> StorageAddress:
        creds = self.credentials
        if creds is not None:
            cid = self._remote(creds).upload(filename, fileobj)
            return RemoteAddress(cid)
        path = self.local.store(filename, fileobj)
        return LocalAddress(path)

    def resolve(self, address: str | StorageAddress) -> ResolvedLocation:
        addr = parse_address(address) if isinstance(address, str) else address
        if isinstance(addr, LocalAddress):
            if not self._servable(addr.path):
                raise NotFoundError("local file not found", {"path": addr.path})
            return LocalFile(addr.path)
        return GatewayRedirect(self.gateway_url(addr.cid))

    def _servable(self, path: str) -> bool:
        if self.local_root is not None and not Path(path).resolve().is_relative_to(self.local_root):
            return False
        return os.path.isfile(path)

    def gateway_url(self, cid: str) -> str:
        return f"{self.gateway_base}/ipfs/{cid}"

    def close(self) -> None:
        if self._http_client is not None:
            self._http_client.close()

    def _remote(self, creds: Credentials) -> PinningBackend:
        backend = self._remotes.get(creds)
        if backend is None:
            backend = self.remote_factory(creds)
            self._remotes[creds] = backend
        return backend
