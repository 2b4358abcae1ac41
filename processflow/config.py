
from typing import List

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PROCESSFLOW_")

    app_env: str = "dev"
    log_level: str = "INFO"
    # "Process Flow 1", "Process Flow 2", ...
    default_flow_name: str = "Process Flow"
    max_import_bytes: int = 1024 * 1024
    cors_origins: List[str] = ["http://localhost:5173", "http://localhost:3000"]

settings = Settings()  # reads from env
