"""
Transactional email for Alcateia Hits (verification, password reset, welcome).
Uses Resend; send_email never raises so callers only see True/False.
"""
import logging
from dataclasses import dataclass

import resend

from alcateia_auth.core.config import Settings
from alcateia_auth.services.verification import (
    VERIFICATION_EXPIRY_MINUTES,
    PASSWORD_RESET_EXPIRY_MINUTES,
)

logger = logging.getLogger(__name__)

BRAND = "Alcateia Hits"
FOOTER = f"© 2024 {BRAND}. Todos os direitos reservados."

_BASE_STYLE = """
    body { font-family: Arial, sans-serif; line-height: 1.6; color: #333; }
    .container { max-width: 600px; margin: 0 auto; padding: 20px; }
    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); color: white; padding: 30px; text-align: center; border-radius: 10px 10px 0 0; }
    .content { background: #f9f9f9; padding: 30px; border-radius: 0 0 10px 10px; }
    .code { background: #fff; border: 2px dashed #667eea; padding: 20px; text-align: center; font-size: 32px; font-weight: bold; color: #667eea; margin: 20px 0; border-radius: 8px; }
    .feature { background: #fff; padding: 15px; margin: 10px 0; border-radius: 5px; border-left: 4px solid #667eea; }
    .warning { background: #fff3cd; border: 1px solid #ffeaa7; padding: 15px; border-radius: 5px; margin: 20px 0; }
    .footer { text-align: center; margin-top: 20px; color: #666; font-size: 14px; }
"""


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    html: str
    text: str


def _wrap_html(title: str, icon: str, tagline: str, body: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
  <style>{_BASE_STYLE}</style>
</head>
<body>
  <div class="container">
    <div class="header">
      <h1>{icon} {BRAND}</h1>
      <p>{tagline}</p>
    </div>
    <div class="content">
{body}
    </div>
    <div class="footer">
      <p>{FOOTER}</p>
    </div>
  </div>
</body>
</html>"""


def create_verification_template(code: str, email: str) -> EmailTemplate:
    html_body = f"""      <h2>Olá!</h2>
      <p>Você está quase lá! Use o código abaixo para verificar sua conta:</p>
      <div class="code">{code}</div>
      <p><strong>Este código expira em {VERIFICATION_EXPIRY_MINUTES} minutos.</strong></p>
      <p>Se você não solicitou esta verificação, pode ignorar este email.</p>"""
    text = f"""Código de Verificação - {BRAND}

Olá!

Você está quase lá! Use o código abaixo para verificar sua conta:

{code}

Este código expira em {VERIFICATION_EXPIRY_MINUTES} minutos.

Se você não solicitou esta verificação, pode ignorar este email.

{FOOTER}
"""
    return EmailTemplate(
        subject=f"Código de Verificação - {BRAND}",
        html=_wrap_html("Código de Verificação", "🎵", "Verificação de Conta", html_body),
        text=text,
    )


def create_password_recovery_template(code: str, email: str) -> EmailTemplate:
    html_body = f"""      <h2>Recuperação de Senha</h2>
      <p>Recebemos uma solicitação para redefinir a senha da sua conta.</p>
      <p>Use o código abaixo para continuar:</p>
      <div class="code">{code}</div>
      <div class="warning">
        <strong>⚠️ Importante:</strong> Este código expira em {PASSWORD_RESET_EXPIRY_MINUTES} minutos. Se você não solicitou esta recuperação, ignore este email e sua senha permanecerá inalterada.
      </div>
      <p>Se você não fez esta solicitação, recomendamos que verifique a segurança da sua conta.</p>"""
    text = f"""Recuperação de Senha - {BRAND}

Recebemos uma solicitação para redefinir a senha da sua conta.

Use o código abaixo para continuar:

{code}

⚠️ IMPORTANTE: Este código expira em {PASSWORD_RESET_EXPIRY_MINUTES} minutos. Se você não solicitou esta recuperação, ignore este email e sua senha permanecerá inalterada.

Se você não fez esta solicitação, recomendamos que verifique a segurança da sua conta.

{FOOTER}
"""
    return EmailTemplate(
        subject=f"Recuperação de Senha - {BRAND}",
        html=_wrap_html("Recuperação de Senha", "🔐", "Recuperação de Senha", html_body),
        text=text,
    )


def create_welcome_template(email: str) -> EmailTemplate:
    html_body = f"""      <h2>Parabéns! Sua conta foi criada com sucesso!</h2>
      <p>Bem-vindo à {BRAND}! Estamos muito felizes em tê-lo como parte da nossa comunidade de produtores musicais.</p>
      <h3>O que você pode fazer agora:</h3>
      <div class="feature">
        <strong>🎼 Acessar conteúdo exclusivo</strong><br>
        Explore nossa biblioteca de beats, samples e tutoriais.
      </div>
      <div class="feature">
        <strong>🎧 Sessões de produção</strong><br>
        Agende sessões com nossos produtores especializados.
      </div>
      <div class="feature">
        <strong>🌐 Registro de domínio</strong><br>
        Para planos Premium, registre seu domínio personalizado.
      </div>
      <p>Se você tiver alguma dúvida, não hesite em entrar em contato conosco!</p>"""
    text = f"""Bem-vindo à {BRAND}! 🎵

Parabéns! Sua conta foi criada com sucesso!

Bem-vindo à {BRAND}! Estamos muito felizes em tê-lo como parte da nossa comunidade de produtores musicais.

O que você pode fazer agora:

🎼 Acessar conteúdo exclusivo
Explore nossa biblioteca de beats, samples e tutoriais.

🎧 Sessões de produção
Agende sessões com nossos produtores especializados.

🌐 Registro de domínio
Para planos Premium, registre seu domínio personalizado.

Se você tiver alguma dúvida, não hesite em entrar em contato conosco!

{FOOTER}
"""
    return EmailTemplate(
        subject=f"Bem-vindo à {BRAND}! 🎵",
        html=_wrap_html("Bem-vindo!", "🎵", "Bem-vindo à nossa comunidade!", html_body),
        text=text,
    )


class EmailService:
    """Thin wrapper around the Resend API with a boolean success contract."""

    def __init__(self, api_key: str, from_email: str):
        self.api_key = api_key
        self.from_email = from_email

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailService":
        return cls(api_key=settings.resend_api_key, from_email=settings.email_from)

    def send_email(self, to: str, template: EmailTemplate) -> bool:
        if not self.api_key:
            logger.warning("RESEND_API_KEY not set; skipping '%s' email to %s", template.subject, to)
            return False
        if not to:
            return False

        params = {
            "from": self.from_email,
            "to": [to],
            "subject": template.subject,
            "html": template.html,
            "text": template.text,
        }
        try:
            resend.api_key = self.api_key
            response = resend.Emails.send(params)
        except Exception as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return False

        if not response or not response.get("id"):
            logger.error("Email provider returned no message id for %s: %r", to, response)
            return False

        logger.info("Email sent successfully to %s", to)
        return True
