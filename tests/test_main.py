"""
Application wiring tests.
"""

from dexwatch.config.settings import AppConfig
from dexwatch.core.events import CycleSummary, PatternDetected, TradeIntent
from dexwatch.execution.channel import HttpTradeChannel, LoggingTradeChannel
from dexwatch.main import build_application, parse_args
from dexwatch.risk.oracles import HttpBundlingOracle, StaticBundlingOracle


async def test_build_application_defaults():
    app = build_application(AppConfig())
    try:
        assert app.event_bus.subscriber_count(TradeIntent) == 2
        assert app.event_bus.subscriber_count(PatternDetected) == 1
        assert app.event_bus.subscriber_count(CycleSummary) == 1
        assert isinstance(app.executor.channel, LoggingTradeChannel)
        assert app.scheduler.interval_seconds == 60.0
        assert app.orchestrator.risk_chain.describe() == (
            "blacklist -> bundling -> integrity -> fake_volume -> threshold"
        )
        bundling = app.orchestrator.risk_chain.checks[1].oracle
        assert isinstance(bundling, StaticBundlingOracle)
    finally:
        await app.close()

    assert app.event_bus.subscriber_count(TradeIntent) == 0


async def test_build_application_with_endpoints():
    config = AppConfig(
        monitor={"observation_window": 8},
        endpoints={
            "bundling_api_url": "http://bundling.local/check",
            "execution_api_url": "http://exec.local/trade",
        },
    )
    app = build_application(config)
    try:
        assert isinstance(app.executor.channel, HttpTradeChannel)
        assert isinstance(app.orchestrator.risk_chain.checks[1].oracle, HttpBundlingOracle)
        assert app.orchestrator.store.window_size == 8
    finally:
        await app.close()


def test_parse_args():
    args = parse_args(["--once", "--config-dir", "/tmp/conf", "--log-level", "DEBUG"])

    assert args.once
    assert str(args.config_dir) == "/tmp/conf"
    assert args.log_level == "DEBUG"
    assert args.config_name == "config"
    assert not args.json_logs


async def test_summary_notifications_follow_config():
    app = build_application(AppConfig(notification={"notify_summary": True}))
    try:
        assert app.notifications.notify_summary is True
    finally:
        await app.close()

    app = build_application(AppConfig())
    try:
        assert app.notifications.notify_summary is False
    finally:
        await app.close()
