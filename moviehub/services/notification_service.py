import logging
from abc import ABC, abstractmethod
from typing import List

from ..schemas.common import ShareTargets

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Outbound delivery channels used when a list or trailer is shared."""

    @abstractmethod
    async def send_email(self, to: str, subject: str, body: str) -> None:
        ...

    @abstractmethod
    async def send_sms(self, to: str, body: str) -> None:
        ...

    @abstractmethod
    async def send_whatsapp(self, to: str, body: str) -> None:
        ...


class LoggingNotifier(Notifier):
    """Records every outbound message in the log instead of delivering it."""

    async def send_email(self, to: str, subject: str, body: str) -> None:
        logger.info("Email queued", extra={"detail": {"to": to, "subject": subject, "body": body}})

    async def send_sms(self, to: str, body: str) -> None:
        logger.info("SMS queued", extra={"detail": {"to": to, "body": body}})

    async def send_whatsapp(self, to: str, body: str) -> None:
        logger.info("WhatsApp message queued", extra={"detail": {"to": to, "body": body}})


async def dispatch_share(notifier: Notifier, targets: ShareTargets, subject: str, body: str) -> List[str]:
    """Send ``body`` on every channel the caller filled in; returns the channels used."""
    channels = []
    if targets.email:
        await notifier.send_email(str(targets.email), subject, body)
        channels.append("email")
    if targets.whatsapp:
        await notifier.send_whatsapp(targets.whatsapp, body)
        channels.append("whatsapp")
    if targets.sms:
        await notifier.send_sms(targets.sms, body)
        channels.append("sms")
    return channels
