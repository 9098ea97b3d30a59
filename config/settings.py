from pydantic_settings import BaseSettings
from typing import Optional

class Settings(BaseSettings):
    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Cross-validation defaults
    n_folds: int = 10
    random_seed: int = 1
    n_jobs: int = 1

    # Data cleaning
    strict_validation: bool = False

    # Output
    output_format: str = "human"

    class Config:
        env_file = ".env"


settings = Settings()
