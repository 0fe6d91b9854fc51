from __future__ import annotations

from importlib import metadata

from novurest.adapters.novu import DeviceTokenBatchError, NovuAPIError, NovuClient
from novurest.domain.types import ChatProviderId, PushProviderId

try:
    __version__ = metadata.version("novurest")
except metadata.PackageNotFoundError:
    __version__ = "0.0.0+local"

__all__ = [
    "ChatProviderId",
    "DeviceTokenBatchError",
    "NovuAPIError",
    "NovuClient",
    "PushProviderId",
    "__version__",
]
