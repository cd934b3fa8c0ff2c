"""Built-in function that sends an e-mail through Gmail's SMTP service."""

from __future__ import annotations

import smtplib
import ssl
from typing import Optional

from zumbra.objects import Dict, Object, String, new_error

_HOST = "smtp.gmail.com"
_PORT = 587
_FIELDS = ("subject", "body", "sender", "to", "app_password")


class _MailError(smtplib.SMTPException):
    pass


def send_email_builtin(*args: Object) -> Optional[Object]:
    """Send the message described by a dict of subject, body, sender, to and app_password.

    Returns a string saying whether the message was sent or what went wrong.
    """
    if len(args) != 1:
        return new_error(f"wrong number of arguments. got={len(args)}, want=1")
    message = args[0]
    if not isinstance(message, Dict):
        return new_error(
            "argument to `sendEmail` must be DICT, with the fields "
            f"{{subject, body, sender, to}}, got {message.type}"
        )

    values = {}
    for name in _FIELDS:
        pair = message.pairs.get(String(name).dict_key())
        if pair is None:
            return new_error("missing 'subject' or 'body'")
        values[name] = pair.value

    if not all(isinstance(value, String) for value in values.values()):
        return new_error("'subject' or 'body' must be strings")

    return send_email(
        values["to"].value,
        values["sender"].value,
        values["subject"].value,
        values["body"].value,
        values["app_password"].value.replace(" ", ""),
    )


def _deliver(sender: str, password: str, recipients: list[str], payload: bytes) -> None:
    client = smtplib.SMTP(_HOST, _PORT)
    try:
        client.ehlo()
        if client.has_extn("starttls"):
            client.starttls(context=ssl.create_default_context())
            client.ehlo()
        elif _HOST not in ("localhost", "127.0.0.1", "::1"):
            raise _MailError("unencrypted connection")
        if not client.has_extn("auth"):
            raise _MailError("smtp: server doesn't support AUTH")
        client.login(sender, password)
        client.sendmail(sender, recipients, payload)
    finally:
        try:
            client.quit()
        except (smtplib.SMTPException, OSError):
            pass


def send_email(to: str, sender: str, subject: str, body: str, password: str) -> String:
    """Send a plain message; the result text is the outcome or the failure reason."""
    payload = f"Subject: {subject}\r\n\r\n{body}\r\n".encode("utf-8")
    try:
        _deliver(sender, password, [to], payload)
    except (smtplib.SMTPException, OSError, ValueError) as exc:
        return String(str(exc))
    return String("Email sent successfully !")