from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    data_dir: str = "./data"
    max_upload_bytes: int = 10 * 1024 * 1024
    allowed_extensions: tuple[str, ...] = (".pdf", ".txt", ".md")

    # Word counts, not characters
    chunk_size: int = 500
    chunk_overlap: int = 50
    max_chunks: int = 3


settings = Settings()
