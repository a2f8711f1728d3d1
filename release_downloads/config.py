import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path

from dotenv import dotenv_values

# =============================
# CONFIG
# =============================
REST_URL = "https://api.github.com"
TIMEOUT_SECONDS = 30
PAUSE_SECONDS = 0.2
DEFAULT_PER_PAGE = 100
MAX_PER_PAGE = 100
USER_AGENT = "release-downloads/0.1"
TOKEN_ENV_VAR = "GITHUB_TOKEN"

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s"
LOG_DATEFMT = "%y%m%d-%H:%M:%S"

_PROJECT_RE = re.compile(r"^[^/\s]+/[^/\s]+$")


class ConfigError(ValueError):
    """Required settings are missing or invalid."""


@dataclass(frozen=True)
class CollectConfig:
    project: str
    token: str
    per_page: int = DEFAULT_PER_PAGE
    output: Path = Path("releases.json")
    api_url: str = REST_URL
    timeout: float = TIMEOUT_SECONDS
    pause_seconds: float = PAUSE_SECONDS

    def validate(self) -> "CollectConfig":
        if not self.project:
            raise ConfigError("Project is required. Use -p or --project to specify the repository.")
        if not _PROJECT_RE.match(self.project):
            raise ConfigError(f"Project must look like owner/repo, got {self.project!r}.")
        if not self.token:
            raise ConfigError(
                f"Authentication token is required. Use -t or --token, or set {TOKEN_ENV_VAR} in the environment or a .env file."
            )
        if not 1 <= self.per_page <= MAX_PER_PAGE:
            raise ConfigError(f"--per-page must be between 1 and {MAX_PER_PAGE}, got {self.per_page}.")
        return self

    @property
    def releases_url(self) -> str:
        return f"{self.api_url.rstrip('/')}/repos/{self.project}/releases"

    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.token}",
            "Accept": "application/vnd.github+json",
            "User-Agent": USER_AGENT,
        }


def default_env_files():
    return (Path.home() / ".env", Path.cwd() / ".env")


def resolve_token(cli_token, environ=None, env_files=None):
    """First non-empty GITHUB_TOKEN from: the CLI, the environment, ~/.env, ./.env.

    Empty means missing.
    """
    if cli_token and cli_token.strip():
        return cli_token.strip()
    environ = os.environ if environ is None else environ
    token = (environ.get(TOKEN_ENV_VAR) or "").strip()
    if token:
        return token
    for path in default_env_files() if env_files is None else env_files:
        if Path(path).is_file():
            token = (dotenv_values(path).get(TOKEN_ENV_VAR) or "").strip()
            if token:
                return token
    return ""


def configure_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )
