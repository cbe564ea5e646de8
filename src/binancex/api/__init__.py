"""
Product line clients.
"""

from .base import ProductClient, symbols_param
from .delivery_futures import BinanceDeliveryFutures
from .perpetual_futures import BinancePerpFutures
from .spot import BinanceSpot

__all__ = [
    "ProductClient",
    "symbols_param",
    "BinanceSpot",
    "BinancePerpFutures",
    "BinanceDeliveryFutures",
]
