from fastapi import APIRouter
from posapp.routers import attendance, notifications, payroll, staffs

# Centralized API router hub: main.py only imports this.
api_router = APIRouter()

api_router.include_router(payroll.router, tags=["Payroll"])
api_router.include_router(attendance.router, tags=["Attendance"])
api_router.include_router(staffs.router, tags=["Staffs"])
api_router.include_router(notifications.router, tags=["Notifications"])
