"""Tests for alcateia_auth/services/email_service.py"""

from __future__ import annotations

import pytest
import resend

from alcateia_auth.core.config import Settings
from alcateia_auth.services.email_service import (
    EmailService,
    create_password_recovery_template,
    create_verification_template,
    create_welcome_template,
)


@pytest.fixture
def captured(monkeypatch):
    calls = []

    def fake_send(params):
        calls.append(params)
        return {"id": "email_123"}

    monkeypatch.setattr(resend.Emails, "send", fake_send)
    return calls


class TestTemplates:
    def test_verification_template(self):
        template = create_verification_template("482913", "user@example.com")
        assert template.subject == "Código de Verificação - Alcateia Hits"
        assert "482913" in template.html
        assert "482913" in template.text
        assert "10 minutos" in template.text

    def test_password_recovery_template(self):
        template = create_password_recovery_template("765432", "user@example.com")
        assert template.subject == "Recuperação de Senha - Alcateia Hits"
        assert "765432" in template.html
        assert "15 minutos" in template.html
        assert "765432" in template.text

    def test_welcome_template(self):
        template = create_welcome_template("user@example.com")
        assert template.subject == "Bem-vindo à Alcateia Hits! 🎵"
        assert "Sessões de produção" in template.html
        assert "Registro de domínio" in template.text

    def test_templates_are_pure(self):
        assert create_verification_template("1", "a@b.c") == create_verification_template("1", "a@b.c")


class TestSendEmail:
    def test_sends_through_resend(self, captured):
        service = EmailService(api_key="re_live", from_email="Alcateia Hits <noreply@alcateiahits.org>")
        template = create_welcome_template("user@example.com")

        assert service.send_email("user@example.com", template) is True
        assert captured == [{
            "from": "Alcateia Hits <noreply@alcateiahits.org>",
            "to": ["user@example.com"],
            "subject": template.subject,
            "html": template.html,
            "text": template.text,
        }]

    def test_missing_api_key_skips_send(self, captured):
        service = EmailService(api_key="", from_email="noreply@alcateiahits.org")
        assert service.send_email("user@example.com", create_welcome_template("user@example.com")) is False
        assert captured == []

    def test_transport_error_returns_false(self, monkeypatch):
        def boom(params):
            raise RuntimeError("connection reset")

        monkeypatch.setattr(resend.Emails, "send", boom)
        service = EmailService(api_key="re_live", from_email="noreply@alcateiahits.org")
        assert service.send_email("user@example.com", create_welcome_template("user@example.com")) is False

    def test_response_without_id_returns_false(self, monkeypatch):
        monkeypatch.setattr(resend.Emails, "send", lambda params: {})
        service = EmailService(api_key="re_live", from_email="noreply@alcateiahits.org")
        assert service.send_email("user@example.com", create_welcome_template("user@example.com")) is False

    def test_from_settings(self):
        settings = Settings(
            frontend_domain="https://alcateiahits.org",
            allowed_origins=("https://alcateiahits.org",),
            resend_api_key="re_abc",
            email_from="Equipe <equipe@alcateiahits.org>",
        )
        service = EmailService.from_settings(settings)
        assert service.api_key == "re_abc"
        assert service.from_email == "Equipe <equipe@alcateiahits.org>"
