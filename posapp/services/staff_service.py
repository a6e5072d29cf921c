from typing import List

from sqlalchemy.exc import IntegrityError

from posapp.core.exceptions import ConflictError
from posapp.models.staff import Staff
from posapp.schemas.staff import StaffCreate
from posapp.services.base import BaseService
from posapp.services.subscription_limit import enforce_limit


class StaffService(BaseService):

    def create(self, data: StaffCreate) -> Staff:
        enforce_limit(self.db, self.tenant_id, "staff")

        staff = Staff(
            tenant_id=self.tenant_id,
            username=data.username,
            full_name=data.full_name,
            role=data.role,
        )
        self.db.add(staff)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Username already exists", details={"username": data.username})
        self.db.refresh(staff)
        return staff

    def list(self) -> List[Staff]:
        return self.db.query(Staff).filter(Staff.tenant_id == self.tenant_id).order_by(Staff.username).all()
