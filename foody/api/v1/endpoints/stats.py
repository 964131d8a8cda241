"""
Dashboard statistics endpoint
"""
from fastapi import APIRouter
from foody.core.dependencies import DbDependency, StaffUser
from foody.schemas.stats import DashboardStatsResponse, DashboardStats
from foody.services.stats_service import StatsService

router = APIRouter(tags=["Stats"])


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def dashboard_stats(staff: StaffUser, db: DbDependency):
    stats = await StatsService.dashboard(db)
    return DashboardStatsResponse(stats=DashboardStats(**stats))
