import os

SMTP_CONFIG = {
    "host": os.environ.get("MIGRATION_SMTP_HOST"),
    "port": int(os.environ.get("MIGRATION_SMTP_PORT", "25")),
    "use_tls": os.environ.get("MIGRATION_SMTP_USE_TLS", "false").lower() == "true",
    "from_email": os.environ.get("MIGRATION_SMTP_FROM", "employee-migration@localhost"),
}

EMAIL_THREAD = {
    "TO": [addr for addr in os.environ.get("MIGRATION_NOTIFY_TO", "").split(",") if addr],
    "CC": [addr for addr in os.environ.get("MIGRATION_NOTIFY_CC", "").split(",") if addr],
    "SUBJECT": "Employee Migration Notification",
}

ERROR_EMAIL_TEMPLATE = """\
<div style="font-family: Arial, sans-serif; max-width: 800px;">
    <h2 style="color: #d32f2f;">{error_type}</h2>
    <p style="background-color: #ffebee; padding: 15px; border-left: 4px solid #d32f2f;">
        <strong>Error:</strong> {error_message}
    </p>
    {exception_block}
    {context_block}
    <p style="color: #666; font-size: 12px; margin-top: 30px;">
        Timestamp: {timestamp}
    </p>
</div>
"""
