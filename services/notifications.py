import logging
from concurrent.futures import ThreadPoolExecutor

from utils.email_templates import booking_emails, cancellation_emails
from utils.emailer import send_email

logger = logging.getLogger(__name__)

SETTING_KEYS = (
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USERNAME",
    "SMTP_PASSWORD",
    "SMTP_FROM_EMAIL",
    "SMTP_USE_TLS",
    "ADMIN_EMAIL",
    "REPLY_TO_EMAIL",
    "BRAND_NAME",
)


class Notifier:
    """
    Fire-and-forget email dispatch.

    Request handlers only call ``booking_created`` / ``booking_canceled``; the
    actual SMTP work runs on a small thread pool. Delivery is best effort:
    failures are logged and never reach the caller, nothing is retried.
    """

    def __init__(self, settings: dict, max_workers: int = 2, sender=send_email):
        self.settings = {k: settings.get(k) for k in SETTING_KEYS}
        self._sender = sender
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="notify")

    @classmethod
    def from_config(cls, config):
        return cls(config, max_workers=int(config.get("NOTIFY_WORKERS", 2)))

    @property
    def brand(self) -> str:
        return self.settings.get("BRAND_NAME") or "MyDienst"

    def booking_created(self, data: dict):
        mails = booking_emails(self.brand, data)
        return [
            self._submit(data.get("email"), mails["subject"], mails["html_customer"]),
            self._submit(self.settings.get("ADMIN_EMAIL"), mails["admin_subject"], mails["html_admin"]),
        ]

    def booking_canceled(self, data: dict):
        mails = cancellation_emails(self.brand, data)
        return [
            self._submit(data.get("email"), mails["subject"], mails["html_customer"]),
            self._submit(self.settings.get("ADMIN_EMAIL"), mails["admin_subject"], mails["html_admin"]),
        ]

    def _submit(self, to_email, subject, html):
        return self._executor.submit(self._deliver, to_email, subject, html)

    def _deliver(self, to_email, subject, html) -> bool:
        try:
            sent, error = self._sender(
                self.settings,
                to_email,
                subject,
                html,
                reply_to=self.settings.get("REPLY_TO_EMAIL"),
            )
        except Exception:
            logger.exception("Email to %s failed (%s)", to_email, subject)
            return False
        if not sent:
            logger.warning("Email to %s not sent (%s): %s", to_email, subject, error)
        return sent

    def shutdown(self, wait: bool = True):
        self._executor.shutdown(wait=wait)
