from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./estimates.db"
    APP_NAME: str = "Material Estimator"
    LOG_LEVEL: str = "INFO"

    # Account used when a request carries no X-Account-Id header
    DEFAULT_ACCOUNT_ID: str = "default"
    # "default" or "custom"
    DEFAULT_PRICING_MODE: str = "default"

    class Config:
        env_file = ".env"


settings = Settings()
