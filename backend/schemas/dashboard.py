# backend/schemas/dashboard.py
from schemas.common import ORMBase


class DashboardStats(ORMBase):
    total_products: int
    total_product_types: int
    low_stock_products: int
    today_purchases: int
    today_sales: int
    today_balance: int
    today_purchases_value: float
    today_sales_value: float
    today_profit: float
    today_profit_margin: float


class StockTrendPoint(ORMBase):
    date: str
    entries: int
    exits: int
    balance: int


class TypeDistribution(ORMBase):
    type_id: int
    name: str
    count: int
    percentage: float
