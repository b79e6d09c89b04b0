from typing import List

from medshop.schemas.entities import Medicine, PurchaseOrder, Record, Sale


class DashboardStats(Record):
    total_medicines: int
    low_stock_count: int
    expiring_count: int
    expired_count: int
    today_sales: float
    monthly_sales: float
    pending_orders: int


class DailySales(Record):
    date: str  # ISO date
    day: str  # short weekday name
    total: float
    count: int


class DashboardHighlights(Record):
    low_stock: List[Medicine]
    expiring: List[Medicine]
    recent_sales: List[Sale]
    open_orders: List[PurchaseOrder]
