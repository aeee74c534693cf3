from __future__ import annotations
from typing import Optional, Dict, Any
from uuid import uuid4
import structlog

log = structlog.get_logger()


class NoopCallProvider:
    """Provider that dials nobody (dev/tests). Only logs the call it would have placed."""

    def start_call(self, to: str, tenant_id: str, metadata: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        call_id = f"noop-{uuid4().hex[:12]}"
        log.info("noop_start_call", to=to, tenant_id=tenant_id, call_id=call_id, metadata=metadata or {})
        return {"provider": "noop", "call_id": call_id, "to": to, "ok": True}
