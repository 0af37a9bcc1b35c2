import logging
from typing import Any, Dict, Optional

from fastapi import Request
from sqlalchemy.orm import Session

from models.log import Log

logger = logging.getLogger(__name__)


def client_ip(request: Optional[Request]) -> Optional[str]:
    if request is None or request.client is None:
        return None
    return request.client.host


def write_log(
    db: Session,
    *,
    action: str,
    resource: str,
    entity_id: Optional[int] = None,
    status: str = "SUCCESS",
    ip: Optional[str] = None,
    meta: Optional[Dict[str, Any]] = None,
) -> Log:
    """Persist an audit entry in its own commit, after the change it describes."""
    entry = Log(action=action, resource=resource, entity_id=entity_id, status=status, ip=ip, meta=meta or {})
    db.add(entry)
    db.commit()
    logger.info("%s %s/%s from %s", action, resource, entity_id, ip or "-")
    return entry
