from .base import ExchangeRateSource
from .cnb import CnbClient

__all__ = ['ExchangeRateSource', 'CnbClient']
