"""
Execution - delivery of buy/sell commands to the trading bot.
"""

from .channel import TradeChannel, LoggingTradeChannel, HttpTradeChannel, command_payload
from .executor import TradeExecutor

__all__ = [
    'TradeChannel',
    'LoggingTradeChannel',
    'HttpTradeChannel',
    'command_payload',
    'TradeExecutor',
]
