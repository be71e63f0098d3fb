import smtplib
from email.message import EmailMessage


def send_email(settings: dict, to_email: str, subject: str, html: str, reply_to: str = None):
    """
    Sends one HTML email. Returns (sent, error).
    ``settings`` is a plain dict so this can run outside an app context.
    """
    host = settings.get("SMTP_HOST")
    port = settings.get("SMTP_PORT", 587)
    username = settings.get("SMTP_USERNAME")
    password = settings.get("SMTP_PASSWORD")
    from_email = settings.get("SMTP_FROM_EMAIL") or username
    use_tls = settings.get("SMTP_USE_TLS", True)

    if not host or not from_email:
        return False, "Email not configured"
    if not to_email:
        return False, "No recipient"

    msg = EmailMessage()
    msg["From"] = from_email
    msg["To"] = to_email
    msg["Subject"] = subject
    if reply_to:
        msg["Reply-To"] = reply_to
    msg.set_content("Bitte verwenden Sie einen HTML-fähigen E-Mail-Client.")
    msg.add_alternative(html, subtype="html")

    try:
        with smtplib.SMTP(host, port, timeout=10) as server:
            if use_tls:
                server.starttls()
            if username and password:
                server.login(username, password)
            server.send_message(msg)
        return True, None
    except (smtplib.SMTPException, OSError) as exc:
        return False, str(exc)
