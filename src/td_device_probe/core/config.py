from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    td_email: str = ""
    td_password: str = ""
    td_company_name: str = ""
    td_totp_code: str | None = None
    td_api_base_url: str = "https://api2.timedoctor.com"
    td_api_version: str = "1.0"

    request_timeout: int = 30
    explore_delay_seconds: float = 0.1
    search_delay_seconds: float = 0.2
    search_max_depth: int = 10

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

settings = Settings()
