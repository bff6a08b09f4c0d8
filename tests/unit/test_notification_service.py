import logging

import pytest
from unittest.mock import AsyncMock

from moviehub.schemas.common import ShareTargets
from moviehub.services.notification_service import LoggingNotifier, Notifier, dispatch_share


@pytest.mark.asyncio
async def test_dispatch_uses_only_filled_channels():
    notifier = AsyncMock(spec=Notifier)
    targets = ShareTargets(email="a@example.com", whatsapp="+15550101", sms="+15550102")

    channels = await dispatch_share(notifier, targets, "Subject", "Body")

    assert channels == ["email", "whatsapp", "sms"]
    notifier.send_email.assert_awaited_once_with("a@example.com", "Subject", "Body")
    notifier.send_whatsapp.assert_awaited_once_with("+15550101", "Body")
    notifier.send_sms.assert_awaited_once_with("+15550102", "Body")


@pytest.mark.asyncio
async def test_dispatch_without_targets_sends_nothing():
    notifier = AsyncMock(spec=Notifier)

    assert await dispatch_share(notifier, ShareTargets(), "Subject", "Body") == []
    notifier.send_email.assert_not_called()


@pytest.mark.asyncio
async def test_logging_notifier_records_messages(caplog):
    with caplog.at_level(logging.INFO, logger="moviehub.services.notification_service"):
        await LoggingNotifier().send_sms("+15550100", "Hello")

    assert "SMS queued" in caplog.text
