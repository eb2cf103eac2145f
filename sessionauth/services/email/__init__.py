from sessionauth.services.email.email_service import EmailService

__all__ = ["EmailService"]
