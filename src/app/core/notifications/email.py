"""Transactional mail for EasyPM (password resets and invitations), sent via Resend."""

import html
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError

import resend

from src.app.core.config import get_settings
from src.app.core.logging import get_logger

logger = get_logger(__name__)

# resend is synchronous; calls run here so a slow provider can be timed out
_sender_pool = ThreadPoolExecutor(max_workers=4, thread_name_prefix="easypm-mail")

_ACCENT = "#2563eb"
_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><meta name="viewport" content="width=device-width, initial-scale=1.0"></head>
<body style="font-family: system-ui, sans-serif; line-height: 1.6; color: #333; max-width: 600px; margin: 0 auto; padding: 20px;">
  <h1 style="color: {accent};">{heading}</h1>
  <p>Hi {name},</p>
  {intro}
  <p style="margin: 32px 0;">
    <a href="{url}" style="background: {accent}; color: #fff; padding: 12px 24px; border-radius: 6px; text-decoration: none;">{button}</a>
  </p>
  <p style="color: #666; font-size: 14px;">If the button does not work, open this link:<br>
    <a href="{url}" style="color: {accent}; word-break: break-all;">{url}</a></p>
  <p style="color: #666; font-size: 14px;">{footer}</p>
</body>
</html>"""


def _render(*, heading: str, name: str, intro: str, url: str, button: str, footer: str) -> str:
    """Fill the shared layout. ``intro`` is trusted markup; ``name`` is escaped here."""
    return _PAGE.format(
        accent=_ACCENT,
        heading=heading,
        name=html.escape(name),
        intro=intro,
        url=html.escape(url, quote=True),
        button=button,
        footer=footer,
    )


def _send(to: str, subject: str, body: str, kind: str) -> bool:
    """Deliver one message.

    Returns:
        False when Resend failed or did not answer within
        ``email_send_timeout_seconds``. Without an API key the message is only
        logged and the call counts as delivered.
    """
    settings = get_settings()
    if not settings.resend_api_key:
        logger.warning("Email not sent, RESEND_API_KEY is not configured", to=to, kind=kind)
        return True

    resend.api_key = settings.resend_api_key
    payload: resend.Emails.SendParams = {
        "from": settings.email_from,
        "to": [to],
        "subject": subject,
        "html": body,
    }
    timeout = settings.email_send_timeout_seconds
    try:
        _sender_pool.submit(resend.Emails.send, payload).result(timeout=timeout)
    except FuturesTimeoutError:
        logger.error("Email provider timed out", to=to, kind=kind, timeout=timeout)
        return False
    except Exception as e:
        logger.error("Email provider rejected message", to=to, kind=kind, error=str(e))
        return False

    logger.info("Email sent", to=to, kind=kind)
    return True


def send_password_reset_email(to: str, token: str, user_name: str) -> bool:
    """Mail a reset link carrying the plaintext ``token``."""
    settings = get_settings()
    body = _render(
        heading="Reset your password",
        name=user_name,
        intro="<p>Someone asked to reset the password for your account. Choose a new one here:</p>",
        url=f"{settings.app_url}/reset-password?token={token}",
        button="Reset password",
        footer=(
            f"The link expires in {settings.password_reset_expire_minutes} minutes. "
            "If you did not request it, ignore this email."
        ),
    )
    return _send(to, "Reset your password", body, "password_reset")


def send_invite_email(to: str, token: str, user_name: str, inviter_name: str) -> bool:
    """Mail a freshly invited user the link that sets their first password."""
    settings = get_settings()
    app_name = html.escape(settings.app_name)
    body = _render(
        heading="You're invited",
        name=user_name,
        intro=(
            f"<p>{html.escape(inviter_name)} added you to <strong>{app_name}</strong>. "
            "Set a password to sign in:</p>"
        ),
        url=f"{settings.app_url}/reset-password?token={token}&invite=1",
        button="Set password",
        footer=f"The invitation expires in {settings.invite_expire_hours} hours.",
    )
    return _send(to, f"You've been invited to {settings.app_name}", body, "invite")
