# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import (
    tenant, staff, attendance, payroll,
    expense, catalog, message_template
)

# Explicit class exports for cleaner imports
from .tenant import Tenant, SubscriptionPlan, TenantSubscription
from .staff import Staff, Salary
from .attendance import Attendance
from .payroll import PayrollSetting, PayrollPeriod, PayrollDetail
from .expense import Expense, ExpenseCategory
from .catalog import Product, Order
from .message_template import MessageTemplate, MessageEvent

__all__ = [
    "Tenant",
    "SubscriptionPlan",
    "TenantSubscription",
    "Staff",
    "Salary",
    "Attendance",
    "PayrollSetting",
    "PayrollPeriod",
    "PayrollDetail",
    "Expense",
    "ExpenseCategory",
    "Product",
    "Order",
    "MessageTemplate",
    "MessageEvent",
]
