"""
Decision Engine - per-asset trading state machine.

    NONE   --trend > 0-->  BOUGHT  (buy intent)
    BOUGHT --trend < 0-->  SOLD    (sell intent)
    SOLD is terminal: the asset is never traded again.

Every other combination (flat trend, falling price with no position, rising
price while holding) leaves the state unchanged and emits nothing.
"""

from typing import Optional
import logging

from dexwatch.core.events import TradeAction, TradeIntent, TradeState
from dexwatch.storage.observation_store import AssetRecord

logger = logging.getLogger(__name__)


class DecisionEngine:
    """
    Turns the latest price trend of an asset into at most one trade intent.

    Amounts are fixed: `buy_amount` is sent with every buy and `sell_amount`
    (a sell-all marker by default) with every sell.
    """

    def __init__(self, buy_amount: str = "0.1 BNB", sell_amount: str = "ALL"):
        self.buy_amount = buy_amount
        self.sell_amount = sell_amount
        self.intents_emitted = 0

    def step(self, record: AssetRecord) -> Optional[TradeIntent]:
        """
        Evaluate one transition for the asset.

        Args:
            record: Asset record with its updated window

        Returns:
            TradeIntent on a buy/sell transition, None otherwise
        """
        pair = record.window.latest_pair()
        if pair is None:
            return None

        prev, last = pair
        trend = last.price - prev.price

        if trend > 0 and record.last_action == TradeState.NONE:
            record.last_action = TradeState.BOUGHT
            intent = self._intent(record, TradeAction.BUY, self.buy_amount, last.price)
        elif trend < 0 and record.last_action == TradeState.BOUGHT:
            record.last_action = TradeState.SOLD
            intent = self._intent(record, TradeAction.SELL, self.sell_amount, last.price)
        else:
            return None

        self.intents_emitted += 1
        logger.info(
            f"TRADE INTENT: {intent.action.value.upper()} {intent.symbol} ({intent.address}) "
            f"amount={intent.amount} @ {last.price} -> state {record.last_action.value}"
        )
        return intent

    @staticmethod
    def _intent(record: AssetRecord, action: TradeAction, amount: str, price: float) -> TradeIntent:
        return TradeIntent(
            action=action,
            symbol=record.symbol,
            address=record.address,
            amount=amount,
            price=price,
        )
