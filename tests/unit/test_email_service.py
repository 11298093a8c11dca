"""
Unit tests for receipt email delivery.
"""

from restock.services import email_service


class TestSendEmail:

    def test_skipped_when_mail_disabled(self, app, monkeypatch):
        sent = []
        monkeypatch.setattr(email_service.mail, 'send', sent.append)

        assert email_service.send_email('a@example.com', 'Hola', '<p>Hola</p>') is True
        assert sent == []

    def test_sends_when_configured(self, app, monkeypatch):
        sent = []
        monkeypatch.setattr(email_service.mail, 'send', sent.append)
        app.config.update(MAIL_SUPPRESS_SEND=False, MAIL_SERVER='smtp.test', MAIL_USERNAME='bot@test')

        assert email_service.send_email('a@example.com', 'Hola', '<p>Hola</p>') is True
        assert sent[0].recipients == ['a@example.com']
        assert sent[0].html == '<p>Hola</p>'

    def test_smtp_failure_returns_false(self, app, monkeypatch):
        def boom(msg):
            raise OSError('connection refused')

        monkeypatch.setattr(email_service.mail, 'send', boom)
        app.config.update(MAIL_SUPPRESS_SEND=False, MAIL_SERVER='smtp.test', MAIL_USERNAME='bot@test')

        assert email_service.send_email('a@example.com', 'Hola', '<p>Hola</p>') is False

    def test_default_notifier_is_send_email(self, app):
        assert email_service.get_notifier() is email_service.send_email
