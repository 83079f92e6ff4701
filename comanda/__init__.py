"""Terminal order register for restaurants: menu file, table orders, coupons and daily report."""

__version__ = "0.1.0"