from utils.logger import get_logger
from config.email_config import SMTP_CONFIG, EMAIL_THREAD, ERROR_EMAIL_TEMPLATE
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from datetime import datetime
import html
import smtplib

logger = get_logger("send_except_email")


def notifications_enabled(smtp_config=SMTP_CONFIG, email_thread=EMAIL_THREAD) -> bool:
    return bool(smtp_config.get('host')) and bool(email_thread.get('TO'))


def send_error_notification(error_message: str, error_type: str = "Migration Error",
                            exception: Exception = None, context: dict = None,
                            smtp_config=SMTP_CONFIG, email_thread=EMAIL_THREAD) -> bool:
    """
    Sends an HTML e-mail describing a failed migration run.
    Does nothing when no SMTP host or recipient is configured.
    A failure to send is logged and never raised, so the original
    migration error keeps propagating to the caller.

    Args:
        error_message: Brief description of the error
        error_type: Type of error (e.g., "Transactional Load Error")
        exception: The exception object (optional)
        context: Additional context dict (e.g., {'state': 'ROLLED_BACK', 'cutoff': '2008-01-01'})
        smtp_config: SMTP configuration (uses default if not provided)
        email_thread: Email recipients (uses default if not provided)
    Returns:
        bool: True if an e-mail was sent.
    """
    if not notifications_enabled(smtp_config, email_thread):
        logger.debug("Error notifications disabled; no SMTP host or recipients configured.")
        return False

    try:
        exception_block = ""
        if exception is not None:
            cause = exception.__cause__
            exception_block = (
                "<h3>Exception Details:</h3>"
                '<pre style="background-color: #f5f5f5; padding: 10px; overflow-x: auto;">'
                f"{html.escape(exception.__class__.__name__)}: {html.escape(str(exception))}"
            )
            if cause is not None:
                exception_block += f"\nCaused by {html.escape(cause.__class__.__name__)}: {html.escape(str(cause))}"
            exception_block += "</pre>"

        context_block = ""
        if context:
            context_block = "<h3>Context:</h3><ul>"
            for key, value in context.items():
                context_block += f"<li><strong>{html.escape(str(key))}:</strong> {html.escape(str(value))}</li>"
            context_block += "</ul>"

        body = ERROR_EMAIL_TEMPLATE.format(
            error_type=html.escape(error_type),
            error_message=html.escape(error_message),
            exception_block=exception_block,
            context_block=context_block,
            timestamp=datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        )

        msg = MIMEMultipart()
        msg['Subject'] = f"{email_thread.get('SUBJECT', 'Employee Migration')}: {error_type}"
        msg['From'] = smtp_config['from_email']
        msg['To'] = ", ".join(email_thread['TO'])
        if email_thread.get('CC'):
            msg['Cc'] = ", ".join(email_thread['CC'])
        msg.attach(MIMEText(body, 'html'))

        recipients = email_thread['TO'] + email_thread.get('CC', [])

        with smtplib.SMTP(smtp_config['host'], smtp_config['port']) as server:
            if smtp_config.get('use_tls'):
                server.starttls()
            server.sendmail(smtp_config['from_email'], recipients, msg.as_string())

        logger.info(f"Error notification sent: {error_type}")
        return True
    except Exception as e:
        logger.error(f"Failed to send error notification: {e}")
        return False
