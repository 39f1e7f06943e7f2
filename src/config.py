"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: SQLAlchemy connection string for the identity and note tables
        secret_key: Secret key for JWT token signing
        algorithm: Algorithm used for JWT signing (HS256)
        access_token_expire_minutes: Access token lifetime in minutes (3 days)

        # Email settings
        mail_username: SMTP server username
        mail_password: SMTP server password
        mail_from: Sender email address
        mail_port: SMTP server port
        mail_server: SMTP server hostname
        mail_starttls: Whether to use STARTTLS

        # Frontend settings
        frontend_url: URL of the frontend application

        # Google sign-in settings
        google_client_id: OAuth client id issued by Google
        google_client_secret: OAuth client secret issued by Google
        google_redirect_uri: Callback URL registered with Google
    """
    # Database settings
    database_url: str

    # JWT settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 3

    # Email settings (empty values disable note notifications)
    mail_username: str = ""
    mail_password: str = ""
    mail_from: str = ""
    mail_port: int = 587
    mail_server: str = ""
    mail_starttls: bool = True

    # Frontend settings
    frontend_url: str = "http://localhost:3000"

    # Google sign-in settings
    google_client_id: str = ""
    google_client_secret: str = ""
    google_redirect_uri: str = "http://localhost:4000/auth/google/callback"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
