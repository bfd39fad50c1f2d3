import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./saas_auth.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_EXPIRATION_MINUTES = int(data.get("JWT_ACCESS_EXPIRATION_MINUTES", 30))
    JWT_REFRESH_EXPIRATION_DAYS = int(data.get("JWT_REFRESH_EXPIRATION_DAYS", 30))
    JWT_RESET_PASSWORD_EXPIRATION_MINUTES = int(
        data.get("JWT_RESET_PASSWORD_EXPIRATION_MINUTES", 10)
    )
    JWT_VERIFY_EMAIL_EXPIRATION_MINUTES = int(
        data.get("JWT_VERIFY_EMAIL_EXPIRATION_MINUTES", 10)
    )

    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))
    TOTP_DIGITS = int(data.get("TOTP_DIGITS", 4))
    TOTP_INTERVAL_SECONDS = int(data.get("TOTP_INTERVAL_SECONDS", 30))
    TOTP_VALID_WINDOW = int(data.get("TOTP_VALID_WINDOW", 2))

    TEAM_INVITATION_EXPIRATION_HOURS = int(
        data.get("TEAM_INVITATION_EXPIRATION_HOURS", 24)
    )
    TEAM_INVITATION_URL = data.get(
        "TEAM_INVITATION_URL", "http://localhost:3000/team/invitation"
    )
    RESET_PASSWORD_URL = data.get(
        "RESET_PASSWORD_URL", "http://localhost:3000/reset-password"
    )

    # Mail is logged instead of sent when SMTP_HOST is empty
    SMTP_HOST = data.get("SMTP_HOST", "")
    SMTP_PORT = int(data.get("SMTP_PORT", 587))
    SMTP_USERNAME = data.get("SMTP_USERNAME", "")
    SMTP_PASSWORD = data.get("SMTP_PASSWORD", "")
    SMTP_USE_TLS = bool(data.get("SMTP_USE_TLS", True))
    EMAIL_FROM = data.get("EMAIL_FROM", "no-reply@localhost")

    GOOGLE_CLIENT_ID = data.get("GOOGLE_CLIENT_ID", "")
    GOOGLE_CLIENT_SECRET = data.get("GOOGLE_CLIENT_SECRET", "")
    GOOGLE_REDIRECT_URI = data.get("GOOGLE_REDIRECT_URI", "postmessage")
