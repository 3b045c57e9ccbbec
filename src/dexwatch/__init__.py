"""
dexwatch - DEX token monitor and naive rug/pump trading bot.

Polls a market-data feed, runs every token through a risk filter chain,
keeps a bounded observation window per token, detects rug/pump patterns
and drives a single-entry/single-exit trading state machine.
"""

__version__ = '0.1.0'
