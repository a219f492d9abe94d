from pydantic_settings import BaseSettings, SettingsConfigDict

from storefront.application.utils.slots import DEFAULT_SLOT_CATALOG


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    STORE_PROVIDER: str = "memory"  # "memory" | "json"
    DATA_DIR: str = "./data"
    SEED_DEMO_DATA: bool = True

    SLOT_CATALOG: list[str] = list(DEFAULT_SLOT_CATALOG)
    ENFORCE_STATUS_TRANSITIONS: bool = True

    CART_STORAGE_KEY: str = "storefront-cart"

    NOTIFICATIONS_ENABLED: bool = True


settings = Settings()
