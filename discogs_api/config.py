from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    host: str = "api.discogs.com"
    port: int = 443
    user_agent: str = "DiscogsAPIPythonClient/0.1"
    user_name: str = ""
    per_page: int = 50
    api_token: str = ""
    api_key: str = ""
    api_secret: str = ""
    timeout: float = 30.0
    throttle_threshold: int = 2
    throttle_cooldown: float = 60.0
    throttle_grace: float = 1.0
    log_format: str = "text"
    log_level: str = "INFO"

    model_config = {
        "env_prefix": "DISCOGS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
