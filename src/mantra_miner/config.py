"""Configuration loader for the mantra miner."""

from __future__ import annotations

import tomllib
from typing import TYPE_CHECKING, Any

import tomlkit
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from mantra_miner.atomic import atomic_write
from mantra_miner.errors import ConfigurationError
from mantra_miner.limits import DEFAULT_RATE_MS, DEFAULT_SEPARATOR
from mantra_miner.paths import get_config_path

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path


class MantraConfig(BaseModel):
    """A mantra and how many times it is recited within one recitation."""

    text: str = Field(default="", description="Mantra text, split into words")
    syllables: list[str] = Field(
        default_factory=list,
        description="Explicit units, recited as given (takes precedence over text)",
    )
    repeats: int = Field(default=1, ge=1, description="Times the mantra is recited in a row")

    @field_validator("syllables")
    @classmethod
    def validate_syllables(cls, value: list[str]) -> list[str]:
        stripped = [syllable.strip() for syllable in value]
        if any(not syllable for syllable in stripped):
            raise ValueError("syllables must not be blank")
        return stripped

    @model_validator(mode="after")
    def require_content(self) -> MantraConfig:
        if not self.syllables and not self.text.strip():
            raise ValueError("a mantra needs text or syllables")
        return self


class MinerConfig(BaseModel):
    """Root configuration model: one session of the miner.

    A recitation is the preparation, then each mantra its own number of times,
    then the conclusion. The session runs ``repeats`` recitations, or keeps
    going until stopped when ``repeats`` is unset.
    """

    preparation: str | None = Field(default=None, description="Recited before the mantras")
    mantras: list[MantraConfig] = Field(..., min_length=1, description="Mantras, in order")
    conclusion: str | None = Field(default=None, description="Recited after the mantras")
    repeats: int | None = Field(
        default=None, ge=1, description="Recitations per session (None = until stopped)"
    )
    rate_ms: int = Field(default=DEFAULT_RATE_MS, ge=1, description="Milliseconds between units")
    separator: str = Field(default=DEFAULT_SEPARATOR, description="Text placed between units")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], *, source: str = "configuration") -> MinerConfig:
        """Validate raw data, reporting failures as ConfigurationError."""
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid {source}: {exc}") from exc

    @classmethod
    def load(cls, config_path: Path | None = None) -> MinerConfig:
        """Load configuration from a TOML file.

        There is no built-in mantra, so a missing file is an error.
        """
        if config_path is None:
            config_path = get_config_path()

        if not config_path.exists():
            raise ConfigurationError(f"No configuration file at {config_path}")

        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigurationError(f"Invalid TOML in {config_path}: {exc}") from exc
        except OSError as exc:
            raise ConfigurationError(f"Cannot read {config_path}: {exc}") from exc
        return cls.from_mapping(data, source=str(config_path))

    def to_toml(self) -> str:
        """Render as TOML, omitting unset values."""
        doc = tomlkit.document()
        for key in ("preparation", "conclusion", "repeats"):
            value = getattr(self, key)
            if value is not None:
                doc[key] = value
        doc["rate_ms"] = self.rate_ms
        doc["separator"] = self.separator

        mantras = tomlkit.aot()
        for mantra in self.mantras:
            table = tomlkit.table()
            for key, value in mantra.model_dump().items():
                if value not in ("", []):
                    table[key] = value
            mantras.append(table)
        doc["mantras"] = mantras

        return tomlkit.dumps(doc)

    def save(self, path: Path) -> None:
        """Serialize current config to a TOML file (created if missing)."""
        atomic_write(path, self.to_toml())


def get_example_config() -> MinerConfig:
    """Configuration written by ``mantra-miner config init``."""
    return MinerConfig(
        preparation="I take refuge in the Buddha the Dharma and the Sangha",
        mantras=[MantraConfig(text="om mani padme hum", repeats=108)],
        conclusion="May all beings benefit",
    )


__all__ = ["MantraConfig", "MinerConfig", "get_example_config"]
