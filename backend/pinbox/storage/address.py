"""
Storage addresses and resolved locations.

An address is either a bare content hash (pinned remotely) or ``local:<path>``
(written by the local fallback store). ``parse_address`` is the only place that
looks at the prefix.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from pinbox.exceptions import ValidationError

LOCAL_PREFIX = "local:"


@dataclass(frozen=True)
class RemoteAddress:
    cid: str

    def __str__(self) -> str:
        return self.cid


@dataclass(frozen=True)
class LocalAddress:
    path: str

    def __str__(self) -> str:
        return LOCAL_PREFIX + self.path


StorageAddress = Union[RemoteAddress, LocalAddress]


@dataclass(frozen=True)
class LocalFile:
    path: str


@dataclass(frozen=True)
class GatewayRedirect:
    url: str


ResolvedLocation = Union[LocalFile, GatewayRedirect]


def parse_address(raw: str) -> StorageAddress:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("hash is required")
    if value.startswith(LOCAL_PREFIX):
        path = value[len(LOCAL_PREFIX):]
        if not path:
            raise ValidationError("invalid address")
        return LocalAddress(path)
    return RemoteAddress(value)
