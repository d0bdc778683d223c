from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origin: str = "http://localhost:3000"

    # JSON document holding the whole collection
    db_file: str = "./data/db.json"

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)


settings = Settings()
