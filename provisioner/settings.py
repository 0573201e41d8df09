import os
from pydantic_settings import BaseSettings

from .errors import ConfigurationError

ENV_PATH = os.path.join(os.path.dirname(__file__), ".env")

class Settings(BaseSettings):
    EXPECTED_SECRET: str = "change-me"
    GITHUB_USERNAME: str = ""
    GITHUB_TOKEN: str = ""
    GITHUB_API_BASE: str = "https://api.github.com"
    GITHUB_HOST: str = "github.com"
    PAGES_HOST: str = "github.io"
    DEFAULT_BRANCH: str = "main"
    PAGES_BUILD_PATH: str = "/"
    PROVIDER_TIMEOUT: float = 30
    NOTIFY_MAX_ATTEMPTS: int = 5
    NOTIFY_BASE_DELAY: float = 1.0
    NOTIFY_TIMEOUT: float = 20
    LOG_FILE_PATH: str = "/tmp/provisioner.log"
    PORT: int = 7860

    class Config:
        env_file = ENV_PATH  # <- always read provisioner/.env
        extra = "ignore"
        frozen = True

    def require_provider_credentials(self) -> None:
        if not self.GITHUB_TOKEN:
            raise ConfigurationError("GITHUB_TOKEN is required. Set it in the environment or provisioner/.env")
        if not self.GITHUB_USERNAME:
            raise ConfigurationError("GITHUB_USERNAME is required")

    def repo_url(self, project: str) -> str:
        return f"https://{self.GITHUB_HOST}/{self.GITHUB_USERNAME}/{project}"

    def pages_url(self, project: str) -> str:
        return f"https://{self.GITHUB_USERNAME}.{self.PAGES_HOST}/{project}/"
