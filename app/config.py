from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Resume Extraction Service"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    database_name: str = "resume_extractor"
    uploads_dir: str = "uploads"

    mongodb_connection_string: str = "mongodb://localhost:27017"

    max_upload_files: int = 500
    max_file_size_mb: int = 10
    batch_concurrency: int = 8

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024


settings = Settings()
