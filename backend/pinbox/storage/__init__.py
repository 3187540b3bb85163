from __future__ import annotations

from functools import lru_cache

from pinbox.config import get_settings
from pinbox.storage.gateway import PinningGateway


@lru_cache
def get_gateway() -> PinningGateway:
    # Credentials are read once per process; tests override this dependency.
    return PinningGateway.from_settings(get_settings())
