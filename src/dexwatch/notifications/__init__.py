"""
Notification System

Plain text alerts about rug/pump patterns and trades, delivered to
Telegram and/or email (SendGrid). Unconfigured sinks are silent no-ops.

Usage:
    from dexwatch.notifications import NotificationService, TelegramNotifier

    telegram = TelegramNotifier(bot_token, chat_id)
    service = NotificationService(event_bus, [telegram])
    service.start()
"""

from .base import NotificationSink
from .telegram import TelegramNotifier
from .sendgrid_client import SendGridNotifier, MockSendGridClient
from .service import NotificationService
from . import templates

__all__ = [
    'NotificationSink',
    'TelegramNotifier',
    'SendGridNotifier',
    'MockSendGridClient',
    'NotificationService',
    'templates',
]
