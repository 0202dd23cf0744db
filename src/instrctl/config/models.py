"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, ``instrctl.toml`` only
contains overrides.  A project with the conventional
``.github/instructions`` layout needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from instrctl.domain.placeholders import DEFAULT_PLACEHOLDER_PATTERNS

# --- instrctl.toml sections ---


class CorpusConfig(BaseModel):
    """[corpus] section."""

    model_config = {"frozen": True}

    directory: str = ".github/instructions"
    pattern: str = "*.instructions.md"
    recursive: bool = False


class CheckConfig(BaseModel):
    """[check] section."""

    model_config = {"frozen": True}

    allowed_keys: list[str] = Field(default_factory=lambda: ["description", "applyTo"])
    quoted_keys: list[str] = Field(default_factory=lambda: ["description", "applyTo"])
    template_files: list[str] = Field(default_factory=lambda: ["*brainstorm*"])
    placeholder_patterns: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PLACEHOLDER_PATTERNS)
    )
    disabled_rules: list[str] = Field(default_factory=list)
    require_body: bool = True


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    enabled: bool = True
