from typing import Optional
from pydantic_settings import BaseSettings
from urllib.parse import quote_plus

class Settings(BaseSettings):
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_db: str = "storefront"
    postgres_host: str = "localhost"
    postgres_port: str = "5432"

    # Full SQLAlchemy URL, wins over the postgres_* pieces when set
    sqlalchemy_database_url: Optional[str] = None

    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24

    env: str = "local"
    log_level: str = "INFO"

    default_page_limit: int = 20
    max_page_limit: int = 100

    # When on, COMPLETED and CANCELLED are terminal for admin status updates
    enforce_status_transitions: bool = False

    @property
    def database_url(self):
        if self.sqlalchemy_database_url:
            return self.sqlalchemy_database_url

        encoded_password = quote_plus(self.postgres_password)
        return (
            f"postgresql+psycopg2://{self.postgres_user}:"
            f"{encoded_password}@{self.postgres_host}:"
            f"{self.postgres_port}/{self.postgres_db}"
        )

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "allow"

settings = Settings()
