"""
Main entry point for dexwatch.

Wires the configured feed, oracles, risk chain, store, detector, decision
engine, notification sinks and execution channel together, then runs poll
cycles on a timer (or a single cycle with --once).
"""

import argparse
import asyncio
import logging
import signal
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from dexwatch import __version__
from dexwatch.config.loader import ConfigLoader
from dexwatch.config.settings import AppConfig
from dexwatch.core.event_bus import EventBus
from dexwatch.decision.engine import DecisionEngine
from dexwatch.decision.patterns import PatternDetector
from dexwatch.execution.channel import HttpTradeChannel, LoggingTradeChannel, TradeChannel
from dexwatch.execution.executor import TradeExecutor
from dexwatch.market_data.feed import DexScreenerFeed
from dexwatch.notifications.base import NotificationSink
from dexwatch.notifications.sendgrid_client import SendGridNotifier
from dexwatch.notifications.service import NotificationService
from dexwatch.notifications.telegram import TelegramNotifier
from dexwatch.pipeline.orchestrator import CycleOrchestrator
from dexwatch.pipeline.scheduler import CycleScheduler
from dexwatch.risk.blacklist import BlacklistSets, DeveloperMap
from dexwatch.risk.chain import build_risk_chain
from dexwatch.risk.oracles import (
    BundlingOracle,
    HttpBundlingOracle,
    PocketUniverseOracle,
    RugCheckOracle,
    StaticBundlingOracle,
)
from dexwatch.storage.observation_store import ObservationStore
from dexwatch.utils.logger import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class Application:
    """Fully wired monitor."""
    config: AppConfig
    event_bus: EventBus
    orchestrator: CycleOrchestrator
    scheduler: CycleScheduler
    notifications: NotificationService
    executor: TradeExecutor
    closables: List[object] = field(default_factory=list)

    async def close(self) -> None:
        self.notifications.stop()
        self.executor.stop()
        for closable in self.closables:
            await closable.close()


def build_sinks(config: AppConfig) -> List[NotificationSink]:
    notification = config.notification
    token = notification.telegram_bot_token.get_secret_value() if notification.telegram_bot_token else None
    sinks: List[NotificationSink] = [
        TelegramNotifier(token, notification.telegram_chat_id, config.endpoints.request_timeout_seconds)
    ]
    if notification.sendgrid is not None:
        sendgrid = notification.sendgrid
        sinks.append(SendGridNotifier(
            from_email=sendgrid.from_email,
            to_emails=sendgrid.to_emails,
            api_key_env=sendgrid.api_key_env,
            mock_mode=sendgrid.mock_mode,
        ))
    return sinks


def build_application(config: AppConfig) -> Application:
    """
    Factory function creating every component from configuration.

    Returns:
        Application ready to run cycles
    """
    endpoints = config.endpoints
    timeout = endpoints.request_timeout_seconds

    blacklist = BlacklistSets(config.blacklist.tokens, config.blacklist.developers)
    developers = DeveloperMap(config.blacklist.developer_map)

    bundling: BundlingOracle
    if endpoints.bundling_api_url:
        bundling = HttpBundlingOracle(endpoints.bundling_api_url, timeout)
    else:
        bundling = StaticBundlingOracle(endpoints.known_bundled_tokens)
    integrity = RugCheckOracle(endpoints.rugcheck_api_url, timeout)
    fake_volume = PocketUniverseOracle(endpoints.pocket_universe_api_url, timeout)

    risk_chain = build_risk_chain(config.filters, blacklist, developers, bundling, integrity, fake_volume)
    feed = DexScreenerFeed(endpoints.dexscreener_api_url, timeout)

    event_bus = EventBus()
    orchestrator = CycleOrchestrator(
        feed=feed,
        risk_chain=risk_chain,
        store=ObservationStore(config.monitor.observation_window),
        detector=PatternDetector(config.monitor.price_drop_threshold, config.monitor.price_pump_threshold),
        engine=DecisionEngine(config.trading.buy_amount, config.trading.sell_amount),
        event_bus=event_bus,
    )

    channel: TradeChannel
    if endpoints.execution_api_url:
        channel = HttpTradeChannel(endpoints.execution_api_url, timeout)
    else:
        channel = LoggingTradeChannel(config.trading.bot_username)

    sinks = build_sinks(config)
    notifications = NotificationService(
        event_bus,
        sinks,
        bot_username=config.trading.bot_username,
        notify_summary=config.notification.notify_summary,
    )
    executor = TradeExecutor(event_bus, channel)
    notifications.start()
    executor.start()

    closables = [feed, integrity, fake_volume, channel]
    closables += [oracle for oracle in (bundling,) if isinstance(oracle, HttpBundlingOracle)]
    closables += [sink for sink in sinks if isinstance(sink, TelegramNotifier)]

    return Application(
        config=config,
        event_bus=event_bus,
        orchestrator=orchestrator,
        scheduler=CycleScheduler(orchestrator, config.monitor.poll_interval_ms / 1000.0),
        notifications=notifications,
        executor=executor,
        closables=closables,
    )


async def run(config: AppConfig, once: bool = False) -> None:
    app = build_application(config)
    logger.info("=" * 70)
    logger.info(f"Starting dexwatch {__version__}")
    logger.info("=" * 70)

    try:
        if once:
            await app.scheduler.run_once()
            return

        loop = asyncio.get_running_loop()
        stop_event = asyncio.Event()
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, stop_event.set)
            except NotImplementedError:
                pass

        app.scheduler.start()
        await stop_event.wait()
        logger.info("Shutting down dexwatch...")
        await app.scheduler.stop()
    finally:
        await app.close()
        logger.info("dexwatch stopped")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="dexwatch", description="DEX rug/pump monitor and trading bot")
    parser.add_argument("--config-dir", type=Path, default=None, help="Directory holding config.yaml")
    parser.add_argument("--config-name", default="config", help="Config file name without .yaml")
    parser.add_argument("--once", action="store_true", help="Run a single cycle and exit")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    parser.add_argument("--json-logs", action="store_true", help="Emit JSON log lines")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the application."""
    args = parse_args(argv)
    config = ConfigLoader(args.config_dir, args.config_name).load_app_config(use_cache=False)

    setup_logging(
        log_level=args.log_level or config.system.log_level,
        log_file=str(config.system.log_file) if config.system.log_file else None,
        json_format=args.json_logs or config.system.json_logs,
    )

    try:
        asyncio.run(run(config, once=args.once))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
