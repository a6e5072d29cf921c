import logging
from typing import Optional
from sqlalchemy.orm import Session


class BaseService:
    """
    Request-scoped service: built from the request's session and the tenant
    resolved from the bearer token. Nothing here outlives the request.
    """

    def __init__(self, db: Session, tenant_id: Optional[str] = None):
        self.db = db
        self.tenant_id = tenant_id
        self._logger = logging.getLogger(self.__class__.__module__)

    def commit(self, *instances):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        for instance in instances:
            self.db.refresh(instance)

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra={"tenant_id": self.tenant_id, **extra})

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra={"tenant_id": self.tenant_id, **extra})
