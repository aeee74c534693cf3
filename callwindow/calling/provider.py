from __future__ import annotations
from typing import Protocol, Optional, Dict, Any
import structlog
from callwindow.core.config import settings

log = structlog.get_logger()


class ICallProvider(Protocol):
    def start_call(self, to: str, tenant_id: str, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...


_provider_singleton: Optional[ICallProvider] = None


def get_provider() -> ICallProvider:
    global _provider_singleton
    if _provider_singleton is not None:
        return _provider_singleton

    provider_name = (settings.CALL_PROVIDER or "noop").lower()
    if provider_name != "noop":
        # Only the no-op provider ships with this service; real voice providers plug in here
        log.warning("call_provider_unknown", provider=provider_name, fallback="noop")

    from .noop import NoopCallProvider

    _provider_singleton = NoopCallProvider()
    return _provider_singleton
