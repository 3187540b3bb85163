from __future__ import annotations

from pinbox.storage import get_gateway
from pinbox.storage.gateway import PinningGateway


def get_pinning_gateway() -> PinningGateway:
    return get_gateway()
