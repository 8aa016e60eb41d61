from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    env: str = "development"

    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_database: str = "clipvault"
    store_backend: str = "mongo"  # "mongo" or "memory"

    # Auth0
    auth0_domain: str = ""
    auth0_audience: str = ""
    auth0_algorithms: list[str] = ["RS256"]

    # Development identity, used only when no bearer token is sent.
    # Never enable outside local development.
    allow_dev_identity: bool = False
    dev_user_id: str = "dev-user"

    # Object storage (Wasabi / any S3 compatible endpoint)
    s3_endpoint_url: str = ""
    s3_region: str = "us-east-1"
    s3_access_key_id: str = ""
    s3_secret_access_key: str = ""
    s3_bucket: str = ""

    # Uploads
    max_upload_bytes: int = 500 * 1024 * 1024  # 500MB
    allowed_mime_types: list[str] = [
        "video/mp4",
        "video/quicktime",
        "video/x-matroska",
        "video/webm",
        "video/avi",
        "video/mov",
    ]
    upload_url_expiration: int = 300  # 5 minutes
    playback_url_expiration: int = 3600  # 1 hour

    # Search
    default_search_limit: int = 20

    # CORS
    frontend_url: str = "http://localhost:3000"

    class Config:
        env_file = ".env"
        extra = "ignore"  # Ignore extra env variables not defined here


@lru_cache()
def get_settings() -> Settings:
    return Settings()
