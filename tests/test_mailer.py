from unittest import mock

from zumbra.builtins.mailer import send_email, send_email_builtin
from zumbra.objects import Dict, DictPair, Error, Integer, String


def _dict(**fields):
    pairs = {}
    for name, value in fields.items():
        key = String(name)
        pairs[key.dict_key()] = DictPair(key, value)
    return Dict(pairs)


def _message(**overrides):
    fields = {
        "subject": String("Hi"),
        "body": String("Hello"),
        "sender": String("sender@example.com"),
        "to": String("to@example.com"),
        "app_password": String("password"),
    }
    fields.update(overrides)
    return _dict(**fields)


def test_wrong_argument_count():
    assert send_email_builtin() == Error("wrong number of arguments. got=0, want=1")


def test_rejects_non_dict():
    assert send_email_builtin(Integer(1)) == Error(
        "argument to `sendEmail` must be DICT, with the fields {subject, body, sender, to}, "
        "got INTEGER"
    )


def test_missing_field():
    message = _dict(subject=String("Hi"), body=String("Hello"))
    assert send_email_builtin(message) == Error("missing 'subject' or 'body'")


def test_non_string_field():
    assert send_email_builtin(_message(body=Integer(1))) == Error(
        "'subject' or 'body' must be strings"
    )


def test_sends_message_through_smtp():
    with mock.patch("smtplib.SMTP") as smtp_class:
        result = send_email_builtin(_message())
    client = smtp_class.return_value
    assert result == String("Email sent successfully !")
    smtp_class.assert_called_once_with("smtp.gmail.com", 587)
    client.login.assert_called_once_with("sender@example.com", "password")
    client.sendmail.assert_called_once_with(
        "sender@example.com", ["to@example.com"], b"Subject: Hi\r\n\r\nHello\r\n"
    )


def test_failure_text_is_returned():
    with mock.patch("smtplib.SMTP", side_effect=OSError("connection refused")):
        password = "password"
        result = send_email(
            "to@example.com", "sender@example.com", "Hi", "Hello", password
        )
    assert result == String("connection refused")


def test_server_without_auth_is_reported():
    with mock.patch("smtplib.SMTP") as smtp_class:
        smtp_class.return_value.has_extn.side_effect = lambda name: name == "starttls"
        result = send_email_builtin(_message())
    assert result == String("smtp: server doesn't support AUTH")
    smtp_class.return_value.sendmail.assert_not_called()