from fastapi import APIRouter

from hr_portal.api.balances import balance_calculator_router, employee_balance_router
from hr_portal.api.employees import employees_router
from hr_portal.api.holidays import holidays_router
from hr_portal.api.leave_requests import leave_requests_router
from hr_portal.api.severance import employee_severance_router, severance_router

api_router = APIRouter()
api_router.include_router(employees_router)
api_router.include_router(leave_requests_router)
api_router.include_router(employee_balance_router)
api_router.include_router(balance_calculator_router)
api_router.include_router(severance_router)
api_router.include_router(employee_severance_router)
api_router.include_router(holidays_router)
