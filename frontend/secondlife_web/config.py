"""Web front settings"""

from pydantic_settings import BaseSettings


class WebSettings(BaseSettings):
    """Settings of the web front"""

    BACKEND_URL: str = "http://backend:8000/api/v1"
    BACKEND_TIMEOUT: float = 10.0
    TOKEN_COOKIE_NAME: str = "access_token"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


web_settings = WebSettings()
