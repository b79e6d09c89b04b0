"""Dashboard figures."""
from typing import Dict, List

from fastapi import APIRouter, Depends, Query

from medshop.api.deps import get_current_user, get_store
from medshop.schemas.dashboard import DailySales, DashboardHighlights
from medshop.schemas.entities import User
from medshop.services import dashboard_service
from medshop.services.formatting import format_currency
from medshop.storage.store import PharmacyStore

router = APIRouter()


@router.get("/summary")
def summary(store: PharmacyStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    stats = dashboard_service.get_dashboard_stats(store)
    body = stats.model_dump(by_alias=True)
    body["todaySalesFormatted"] = format_currency(stats.today_sales)
    body["monthlySalesFormatted"] = format_currency(stats.monthly_sales)
    return body


@router.get("/daily-sales", response_model=List[DailySales])
def daily_sales(
    days: int = Query(7, ge=1, le=90),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return dashboard_service.daily_sales(store.sales.list(), store.today(), days=days)


@router.get("/categories", response_model=Dict[str, int])
def categories(store: PharmacyStore = Depends(get_store), current_user: User = Depends(get_current_user)):
    return dashboard_service.category_breakdown(store.medicines.list())


@router.get("/highlights", response_model=DashboardHighlights)
def highlights(
    limit: int = Query(5, ge=1, le=50),
    store: PharmacyStore = Depends(get_store),
    current_user: User = Depends(get_current_user),
):
    return dashboard_service.dashboard_highlights(store, limit=limit)
