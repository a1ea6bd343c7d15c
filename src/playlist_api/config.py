"""Application configuration via environment variables.

Uses pydantic-settings to load config from env vars (and an optional .env file).
The two secrets, DB_PASS and JWT_SECRET, have no defaults: constructing
Settings without them fails, and the CLI turns that failure into a
diagnostic plus a non-zero exit.

Learn: Settings is built once at startup and handed to create_app(),
which passes the secret and cost factor into TokenService and
PasswordHasher. Nothing else reads os.environ.
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Fields that must be supplied through the environment.
REQUIRED_SECRETS = ("db_pass", "jwt_secret")


class Settings(BaseSettings):
    """All app configuration. Set via env vars (DB_PASS, JWT_SECRET, ...)."""

    # Database
    db_pass: str
    db_user: str = "postgres"
    db_host: str = "localhost"
    db_port: int = 5432
    db_name: str = "spotify"
    create_tables: bool = True

    # Auth
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    token_expire_minutes: int = 120
    bcrypt_rounds: int = 10

    # Server
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @field_validator("db_pass", "jwt_secret")
    @classmethod
    def require_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("must not be empty")
        return value

    @property
    def database_url(self) -> str:
        return (
            f"postgresql+asyncpg://{self.db_user}:{self.db_pass}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )


def load_settings(**overrides) -> Settings:
    """Build Settings from the environment, with optional explicit overrides."""
    return Settings(**overrides)


def missing_secrets(error) -> list[str]:
    """Env var names of the required secrets a ValidationError complains about."""
    names = []
    for item in error.errors():
        field = item["loc"][0] if item["loc"] else None
        if field in REQUIRED_SECRETS and field.upper() not in names:
            names.append(field.upper())
    return names
