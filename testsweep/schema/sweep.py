# std libs
from typing import Annotated, Dict, List, Literal, Optional
import json
import re

# pydantic libs
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from testsweep.lib.artifacts import DEFAULT_TIMESTAMP_FORMAT
from testsweep.lib.errors import ConfigError
from testsweep.lib.seed import DEFAULT_SEED_ENV_VAR

PositiveInt = Annotated[int, Field(gt=0)]
NonNegativeInt = Annotated[int, Field(ge=0)]
Naming = Literal['indexed', 'timestamp']

_ENV_VAR_RE = re.compile(r'^[A-Za-z_][A-Za-z0-9_]*$')
_CORE_DIMENSIONS = ('category', 'mode', 'flag')


def _check_tokens(name: str, tokens: List[str]) -> List[str]:
    """Tokens end up in artifact file names, so they must be usable as path components."""
    if not tokens:
        raise ValueError(f'{name} must contain at least one value')
    for token in tokens:
        if not token or not token.strip():
            raise ValueError(f'{name} contains an empty value')
        if '/' in token or '\\' in token or '\x00' in token or token in ('.', '..'):
            raise ValueError(f"{name} value '{token}' is not a valid file name component")
    return tokens


class SweepConfig(BaseModel):
    """Sweep configuration file (JSON)."""

    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = None
    executable: str = './run_test'
    working_dir: Optional[str] = None
    output_dir: str = '../test_out'
    repetitions: PositiveInt = 1
    categories: List[str]
    modes: List[str]
    flags: List[str]
    extra_dimensions: Dict[str, List[str]] = Field(default_factory=dict)
    seed: Optional[NonNegativeInt] = None
    seed_env_var: str = DEFAULT_SEED_ENV_VAR
    naming: Naming = 'indexed'
    timestamp_format: str = DEFAULT_TIMESTAMP_FORMAT

    @field_validator('categories', 'modes', 'flags')
    @classmethod
    def validate_tokens(cls, v, info):
        return _check_tokens(info.field_name, v)

    @field_validator('extra_dimensions')
    @classmethod
    def validate_extra_dimensions(cls, v):
        for dim_name, tokens in v.items():
            if dim_name in _CORE_DIMENSIONS:
                raise ValueError(f"extra dimension '{dim_name}' clashes with a built-in dimension")
            _check_tokens(f'extra_dimensions.{dim_name}', tokens)
        return v

    @field_validator('seed_env_var')
    @classmethod
    def validate_seed_env_var(cls, v: str) -> str:
        if not _ENV_VAR_RE.match(v):
            raise ValueError(f"'{v}' is not a valid environment variable name")
        return v

    @field_validator('executable')
    @classmethod
    def validate_executable(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('executable must not be empty')
        return v

    @model_validator(mode='after')
    def validate_timestamp_format(self):
        if '/' in self.timestamp_format or '\x00' in self.timestamp_format:
            raise ValueError('timestamp_format must not produce path separators or NUL bytes')
        return self

    @property
    def total_runs(self) -> int:
        total = self.repetitions * len(self.categories) * len(self.modes) * len(self.flags)
        for tokens in self.extra_dimensions.values():
            total *= len(tokens)
        return total


def parse_sweep_config(data, source='<config>') -> SweepConfig:
    """Validate a config mapping, wrapping pydantic errors in ConfigError."""
    try:
        return SweepConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f'Invalid sweep config {source}:\n{e}') from e


def load_sweep_config(path, overrides=None) -> SweepConfig:
    """
    Load and validate a sweep config file.

    ``overrides`` holds values from the command line; keys whose value is None
    are ignored so that unset options keep the file's value.
    """
    try:
        with open(path, 'r') as f:
            data = json.load(f)
    except OSError as e:
        raise ConfigError(f'Cannot read sweep config {path}: {e}') from e
    except json.JSONDecodeError as e:
        raise ConfigError(f'Sweep config {path} is not valid JSON: {e}') from e

    if not isinstance(data, dict):
        raise ConfigError(f'Sweep config {path} must contain a JSON object')

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return parse_sweep_config(data, source=str(path))
