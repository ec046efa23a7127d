"""Configuration for talking to TestRail."""

from pathlib import Path

import yaml
from pydantic import BaseModel, SecretStr, ValidationError

from testrail_import.errors import ConfigError
from testrail_import.models.base import Model

DEFAULT_TESTRAIL_URL = "https://testrail.ops.puppetlabs.net/index.php"
DEFAULT_CREDENTIALS_FILE = Path("credentials.yaml")


class StatusCodes(Model):
    """TestRail status IDs used for each outcome."""

    passed: int = 1
    blocked: int = 2
    failed: int = 5


class TestRailConfig(BaseModel):
    """Connection settings for the TestRail API."""

    __test__ = False

    url: str = DEFAULT_TESTRAIL_URL
    username: str
    password: SecretStr
    timeout: float = 60


def load_credentials(
    credentials_file: Path = DEFAULT_CREDENTIALS_FILE,
    url: str | None = None,
) -> TestRailConfig:
    """Build a TestRail configuration from a YAML credentials file.

    The file holds ``testrail_username`` and ``testrail_password`` and may
    set ``testrail_url``. An explicit ``url`` argument wins over the file.

    Raises:
        ConfigError: If the file is missing, unreadable or incomplete

    """
    try:
        with credentials_file.open() as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"Could not load {credentials_file}: {e}\n"
            "Have you copied credentials_template.yaml and filled in your info?"
        ) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {credentials_file}")

    settings = {
        "username": data.get("testrail_username"),
        "password": data.get("testrail_password"),
    }
    if resolved_url := url or data.get("testrail_url"):
        settings["url"] = resolved_url

    try:
        return TestRailConfig.model_validate(settings)
    except ValidationError as e:
        raise ConfigError(f"Invalid credentials in {credentials_file}: {e}") from e
