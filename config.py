# config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    DATABASE_HOST: str = ""
    DATABASE_PORT: int = 5432
    DATABASE_USER: str = ""
    DATABASE_PASSWORD: str = ""
    DATABASE_NAME: str = ""
    DATABASE_URL: str = ""

    SECRET_KEY: str = "dev"
    APP_PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    PROMOTIONS_URL_PREFIX: str = "/api/promotions"
    CORS_ORIGINS: str = "*"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @property
    def constructed_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        if self.DATABASE_HOST:
            return f"postgresql+psycopg2://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"
        return "sqlite:///salon.db"

settings = Settings()

class Config:
    SQLALCHEMY_DATABASE_URI = settings.constructed_database_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = settings.SECRET_KEY
    LOG_LEVEL = settings.LOG_LEVEL
    DEFAULT_PAGE_SIZE = settings.DEFAULT_PAGE_SIZE
    MAX_PAGE_SIZE = settings.MAX_PAGE_SIZE
    PROMOTIONS_URL_PREFIX = settings.PROMOTIONS_URL_PREFIX
    CORS_ORIGINS = settings.CORS_ORIGINS

class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
