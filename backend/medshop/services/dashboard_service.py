"""
Dashboard figures, computed on demand from the current collections.

Cutoffs are local: "today" starts at midnight, "this month" on the 1st.
Nothing here is persisted.
"""
from collections import Counter
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional, Sequence

from medshop.core.config import settings
from medshop.schemas.dashboard import DailySales, DashboardHighlights, DashboardStats
from medshop.schemas.entities import Medicine, PurchaseOrder, Sale
from medshop.services.alert_service import days_until_expiry
from medshop.services.purchase_order_service import OPEN_STATUSES
from medshop.storage.store import PharmacyStore

DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def _local(value: datetime) -> datetime:
    """Naive local time, so aware and naive timestamps compare."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def is_low_stock(medicine: Medicine) -> bool:
    return medicine.quantity <= medicine.min_stock_level


def is_expiring(medicine: Medicine, today: date, warning_days: int) -> bool:
    return 0 < days_until_expiry(medicine.expiry_date, today) <= warning_days


def is_expired(medicine: Medicine, today: date) -> bool:
    return days_until_expiry(medicine.expiry_date, today) <= 0


def compute_dashboard_stats(
    medicines: Sequence[Medicine],
    sales: Sequence[Sale],
    orders: Sequence[PurchaseOrder],
    now: datetime,
    warning_days: Optional[int] = None,
) -> DashboardStats:
    warning_days = settings.EXPIRY_WARNING_DAYS if warning_days is None else warning_days
    today = now.date()
    start_of_day = datetime.combine(today, time.min)
    start_of_month = start_of_day.replace(day=1)

    return DashboardStats(
        total_medicines=len(medicines),
        low_stock_count=sum(1 for m in medicines if is_low_stock(m)),
        expiring_count=sum(1 for m in medicines if is_expiring(m, today, warning_days)),
        expired_count=sum(1 for m in medicines if is_expired(m, today)),
        today_sales=sum(s.total for s in sales if _local(s.sale_date) >= start_of_day),
        monthly_sales=sum(s.total for s in sales if _local(s.sale_date) >= start_of_month),
        pending_orders=sum(1 for o in orders if o.status in OPEN_STATUSES),
    )


def get_dashboard_stats(store: PharmacyStore) -> DashboardStats:
    return compute_dashboard_stats(
        store.medicines.list(),
        store.sales.list(),
        store.purchase_orders.list(),
        store.now(),
    )


def daily_sales(sales: Sequence[Sale], today: date, days: int = 7) -> List[DailySales]:
    """Sales totals per day for the last `days` days, oldest first, zero-filled."""
    start = today - timedelta(days=days - 1)
    totals: Dict[date, float] = {}
    counts: Counter = Counter()
    for sale in sales:
        day = _local(sale.sale_date).date()
        if start <= day <= today:
            totals[day] = totals.get(day, 0.0) + sale.total
            counts[day] += 1

    result = []
    for i in range(days):
        day = start + timedelta(days=i)
        result.append(DailySales(
            date=day.isoformat(),
            day=DAY_NAMES[day.weekday()],
            total=totals.get(day, 0.0),
            count=counts[day],
        ))
    return result


def category_breakdown(medicines: Sequence[Medicine]) -> Dict[str, int]:
    """Number of medicine records per category, in first-seen order."""
    return dict(Counter(m.category for m in medicines))


def dashboard_highlights(store: PharmacyStore, limit: int = 5) -> DashboardHighlights:
    medicines = store.medicines.list()
    today = store.today()

    low_stock = sorted((m for m in medicines if is_low_stock(m)), key=lambda m: m.quantity)
    expiring = sorted(
        (m for m in medicines if is_expiring(m, today, settings.EXPIRY_WARNING_DAYS)),
        key=lambda m: m.expiry_date,
    )
    recent_sales = sorted(store.sales.list(), key=lambda s: _local(s.sale_date), reverse=True)
    open_orders = sorted(
        (o for o in store.purchase_orders.list() if o.status in OPEN_STATUSES),
        key=lambda o: _local(o.order_date),
        reverse=True,
    )

    return DashboardHighlights(
        low_stock=low_stock[:limit],
        expiring=expiring[:limit],
        recent_sales=recent_sales[:limit],
        open_orders=open_orders[:limit],
    )
