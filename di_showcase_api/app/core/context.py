"""
Per‑request context.

``RequestContext`` is a scoped service: every request gets its own
instance (bound by ``core.wiring.open_request_scope``) and every
service resolved within that request sees the same one.  Outside of
HTTP handling a context with a fresh id is created for the scope.
"""

import uuid
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RequestContext:
    """Identifies the unit of work a scoped service belongs to."""

    method: Optional[str] = None
    path: Optional[str] = None
    request_id: str = field(default_factory=lambda: uuid.uuid4().hex)
