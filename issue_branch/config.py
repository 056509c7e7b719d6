"""Per-repository configuration read from a dotenv-style file.

The file lives in the directory the command runs from::

    OWNER=acme
    REPO=widgets
    TOKEN=ghp_...
    API_URL=https://github.example.com/api/v3   # optional, for GHES

Only the file is read; process environment variables are ignored so a
stray ``TOKEN`` in the shell cannot leak into another repository's calls.
"""

from pathlib import Path

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

CONFIG_FILENAME = ".issue-branch"
DEFAULT_API_URL = "https://api.github.com"


class ConfigError(Exception):
    """Raised when the configuration file exists but cannot be used."""
    pass


class BranchConfig(BaseSettings):
    """GitHub coordinates and credentials for one repository."""

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    owner: str = Field(min_length=1)
    repo: str = Field(min_length=1)
    token: SecretStr
    api_url: str = DEFAULT_API_URL

    @field_validator("token")
    @classmethod
    def _token_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("token must not be empty")
        return value

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, dotenv_settings)


def default_config_path() -> Path:
    return Path.cwd() / CONFIG_FILENAME


def load_config(path: Path | None = None) -> BranchConfig | None:
    """Load the configuration file.

    Parameters
    ----------
    path : Path | None
        Explicit file to read. Defaults to ``.issue-branch`` in the
        current directory.

    Returns
    -------
    BranchConfig | None
        The validated configuration, or None when no explicit path was
        given and the default file does not exist.

    Raises
    ------
    ConfigError
        When an explicit path does not exist, or the file is missing
        required values.
    """
    if path is None:
        config_path = default_config_path()
        if not config_path.is_file():
            return None
    else:
        config_path = Path(path).expanduser()
        if not config_path.is_file():
            raise ConfigError(f"Config file not found: {config_path}")

    try:
        return BranchConfig(_env_file=config_path)
    except ValidationError as e:
        fields = sorted({str(error["loc"][0]).upper() for error in e.errors() if error["loc"]})
        raise ConfigError(
            f"Invalid config file {config_path}: missing or invalid {', '.join(fields)}"
        ) from e
