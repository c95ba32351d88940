from pathlib import Path
from pydantic import BaseModel, Field, field_validator
import os
from trex_loader import __version__
# Optionally load a repo-level config.env file so local setups can pin the
# base directory without exporting variables in every shell.
try:
    from dotenv import load_dotenv
    # Allow explicit override of config file path
    cfg_override = os.getenv('TREX_CONFIG_FILE')
    candidates = []
    if cfg_override:
        candidates.append(Path(cfg_override))
    candidates.append(Path.cwd() / 'config.env')

    for p in candidates:
        try:
            if p and p.exists():
                load_dotenv(str(p))
                break
        except Exception:
            continue
except Exception:
    # If python-dotenv isn't available or load fails, fall back to env vars
    pass

"""Central configuration.

Class resolution is relative to a single project root (the base directory).
Every path handed out by the registry and the resolver starts with it.

Env vars:
  TREX_BASE_DIR       - project root used for resolution (defaults to CWD)
  TREX_SOURCE_SUFFIX  - file suffix appended to resolved class paths
  TREX_LOG_LEVEL      - logging level name
  TREX_CONFIG_FILE    - explicit path to a dotenv file
"""


def _with_trailing_sep(path: str) -> str:
    if not path.endswith(os.sep):
        path += os.sep
    return path


def _default_vendors() -> dict[str, str]:
    # Production and test trees share the `trex` package root.
    return {
        'TRex': f'trex{os.sep}src{os.sep}',
        'TRexTests': f'trex{os.sep}tests{os.sep}',
    }


class Settings(BaseModel):
    app_name: str = 'TRex class loader'
    version: str = os.getenv('TREX_VERSION', __version__)
    base_dir: str = Field(default=os.getenv('TREX_BASE_DIR') or str(Path.cwd()), validate_default=True)
    source_suffix: str = os.getenv('TREX_SOURCE_SUFFIX', '.py')
    default_vendors: dict[str, str] = Field(default_factory=_default_vendors)
    # Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = os.getenv('TREX_LOG_LEVEL', 'INFO')

    @field_validator('base_dir')
    @classmethod
    def normalize_base_dir(cls, value: str) -> str:
        return _with_trailing_sep(os.path.abspath(value))


settings = Settings()


def get_base_dir() -> str:
    """Current base directory, always ending with the host path separator.

    Tests and embedding hosts reassign ``settings.base_dir`` directly, so the
    value is normalized again on every read.
    """
    return _with_trailing_sep(str(settings.base_dir))
