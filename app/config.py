from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Fee computation
    FEE_PERCENTAGE: Decimal = Decimal("10")   # flat 10% of the amount
    REPORTING_CURRENCY: str = "EUR"           # attached to every FeeResult

    # Applied to payloads that omit "currency" before validation runs
    DEFAULT_CURRENCY: str = "EUR"

    LOG_LEVEL: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
