from datetime import datetime
from typing import Any, Dict, Optional

from schemas.common import ORMBase


class LogResponse(ORMBase):
    id: int
    created_at: datetime
    action: str
    resource: str
    entity_id: Optional[int] = None
    status: str
    ip: Optional[str] = None
    meta: Optional[Dict[str, Any]] = None
