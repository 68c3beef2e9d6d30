# wordguard/services/mailer_service.py
"""
Почтовые уведомления о нарушениях.
"""
import asyncio
import smtplib
from datetime import datetime, timedelta
from email.message import EmailMessage
from email.utils import formataddr
from typing import Callable, List, Optional

from loguru import logger
from redis.exceptions import RedisError

from wordguard.config.models import SmtpConfig
from wordguard.services.audit_service import ViolationAuditLog
from wordguard.utils.models import ReportResult, ViolationAuditEntry, utcnow
from wordguard.utils.text_utils import escape_html


def render_violation_html(entry: ViolationAuditEntry) -> str:
    return (
        '<div style="font-family: sans-serif; max-width: 600px;">'
        '<h2 style="color: #d32f2f;">⚠️ Violation detected</h2>'
        f"<p><b>Group ID:</b> {entry.group_id}<br>"
        f"<b>User ID:</b> {entry.user_id}<br>"
        f"<b>Time:</b> {entry.timestamp:%Y-%m-%d %H:%M:%S} UTC</p>"
        f"<h3>Detected words</h3><p>{escape_html(', '.join(entry.words))}</p>"
        f"<h3>Original content</h3><p><i>{escape_html(entry.content)}</i></p>"
        "</div>"
    )


def render_summary_html(entries: List[ViolationAuditEntry], hours: float) -> str:
    rows = "".join(
        "<tr>"
        f"<td>{entry.timestamp:%Y-%m-%d %H:%M:%S}</td>"
        f"<td>{entry.group_id}</td>"
        f"<td>{entry.user_id}</td>"
        f"<td>{escape_html(', '.join(entry.words))}</td>"
        f"<td>{escape_html(entry.content)}</td>"
        "</tr>"
        for entry in entries
    )
    return (
        '<div style="font-family: sans-serif; max-width: 900px;">'
        f"<h2>📊 Violation summary: last {hours:g} h</h2>"
        f"<p>Total violations: <b>{len(entries)}</b></p>"
        '<table border="1" cellpadding="6" cellspacing="0" style="border-collapse: collapse;">'
        "<tr><th>Time (UTC)</th><th>Group</th><th>User</th><th>Words</th><th>Content</th></tr>"
        f"{rows}</table></div>"
    )


class MailerService:
    """
    Отправка писем о нарушениях.

    При summary_interval_days == 0 каждое нарушение отправляется сразу,
    иначе нарушения собираются в журнал и отправляются сводкой по расписанию.
    """

    def __init__(
        self,
        config: Optional[SmtpConfig],
        audit_log: ViolationAuditLog,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.config = config
        self.audit_log = audit_log
        self._clock = clock

    @property
    def is_configured(self) -> bool:
        return self.config is not None and self.config.is_configured

    @property
    def immediate(self) -> bool:
        return self.is_configured and self.config.summary_interval_days == 0

    def _build_message(self, subject: str, text: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = formataddr((self.config.sender_name, self.config.sender_email))
        message["To"] = ", ".join(self.config.receivers)
        message.set_content(text)
        message.add_alternative(html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        smtp_class = smtplib.SMTP_SSL if self.config.secure else smtplib.SMTP
        with smtp_class(self.config.host, self.config.port, timeout=30) as client:
            if not self.config.secure:
                client.starttls()
            if self.config.user:
                client.login(self.config.user, self.config.password.get_secret_value())
            client.send_message(message)

    async def send(self, message: EmailMessage) -> None:
        await asyncio.to_thread(self._deliver, message)

    async def notify_violation(self, entry: ViolationAuditEntry) -> None:
        """Немедленное письмо о нарушении. Ошибки логируются."""
        if not self.immediate:
            return

        message = self._build_message(
            subject=f"[wordguard] Violation detected in group {entry.group_id}",
            text=(
                f"User {entry.user_id} triggered forbidden words in group {entry.group_id}.\n\n"
                f"Detected words: {', '.join(entry.words)}"
            ),
            html=render_violation_html(entry),
        )
        try:
            await self.send(message)
            logger.info(f"📧 Письмо о нарушении user={entry.user_id} отправлено")
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Не удалось отправить письмо о нарушении: {e}")

    async def send_summary(self, hours: float) -> ReportResult:
        """
        Отправляет сводку нарушений за последние `hours` часов.

        Returns:
            ReportResult: success, количество нарушений, количество получателей, код ошибки
        """
        if not self.is_configured:
            return ReportResult(success=False, error="smtp_not_configured")

        cutoff = self._clock() - timedelta(hours=hours)
        try:
            entries = await self.audit_log.since(cutoff)
        except RedisError as e:
            logger.error(f"❌ Не удалось прочитать журнал нарушений: {e}")
            return ReportResult(success=False, error="db_error")

        if not entries:
            return ReportResult(success=True, count=0)

        message = self._build_message(
            subject=f"[wordguard] Violation summary ({len(entries)})",
            text=f"{len(entries)} violations in the last {hours:g} hours.",
            html=render_summary_html(entries, hours),
        )
        try:
            await self.send(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"❌ Не удалось отправить сводку: {e}")
            return ReportResult(success=False, count=len(entries), error=str(e))

        receivers = len(self.config.receivers)
        logger.success(f"📧 Сводка отправлена: {len(entries)} нарушений, {receivers} получателей")
        return ReportResult(success=True, count=len(entries), receivers=receivers)

    async def send_scheduled_summary(self) -> ReportResult:
        """Сводка за интервал расписания с последующей очисткой старых записей журнала."""
        result = await self.send_summary(hours=self.config.summary_interval_days * 24)
        if result.success:
            retention = timedelta(days=self.config.audit_retention_days)
            await self.audit_log.prune(self._clock() - retention)
        return result
