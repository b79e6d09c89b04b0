"""Display labels and currency formatting shared by the API and invoices."""
from medshop.core.config import settings


def stock_status(quantity: int, min_stock_level: int) -> str:
    if quantity <= 0:
        return "out_of_stock"
    if quantity <= min_stock_level:
        return "low_stock"
    return "in_stock"


def expiry_status(days: int) -> str:
    if days <= 0:
        return "expired"
    if days <= settings.EXPIRY_WARNING_DAYS:
        return "expiring"
    if days <= 90:
        return "warning"
    return "ok"


def format_currency(amount: float, symbol: str = "₹") -> str:
    """Rupees with Indian digit grouping, e.g. ₹12,34,567.50."""
    sign = "-" if amount < 0 else ""
    whole, fraction = f"{abs(amount):.2f}".split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}{symbol}{whole}.{fraction}"
