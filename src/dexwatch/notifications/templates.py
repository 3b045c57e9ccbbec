"""
Plain text message templates for alerts, trades and cycle summaries.
"""

from dexwatch.core.events import CycleSummary, PatternDetected, PatternEvent, TradeIntent


def format_command(intent: TradeIntent) -> str:
    """Bot command for a trade intent, e.g. '/buy TKN 0xabc... 0.1 BNB'."""
    return f"/{intent.action.value} {intent.symbol} {intent.address} {intent.amount}"


def render_pattern_alert(event: PatternDetected) -> str:
    if event.pattern == PatternEvent.RUGGED:
        return f"[ALERT] {event.symbol} possibly RUGGED. Price: {event.price}"
    return f"[ALERT] {event.symbol} PUMPED. Price: {event.price}"


def render_trade(intent: TradeIntent, bot_username: str = "BonkBot") -> str:
    return f"[Bot] Executing trade via {bot_username}: {format_command(intent)}"


def render_summary(summary: CycleSummary) -> str:
    return "\n".join([
        "=== PATTERN SUMMARY ===",
        f"Tracked tokens: {summary.tracked_count}",
        f"Rugged: {summary.rugged_count}, Pumped: {summary.pumped_count}",
        "=======================",
    ])
