from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator

from stackvm.instructions import InstructionKind


def repo_root() -> Path:
    # Project root is the directory that contains the `stackvm/` package.
    return Path(__file__).resolve().parents[1]


def load_env() -> None:
    # Prefer a project-local `.env`; fall back to searching from CWD.
    root_env = repo_root() / ".env"
    env_path = str(root_env) if root_env.exists() else (find_dotenv(usecwd=True) or str(root_env))
    load_dotenv(env_path)


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    prompt: str = "> "
    banner: bool = True
    reserved: list[InstructionKind] = []

    @field_validator("reserved", mode="before")
    @classmethod
    def _parse_reserved(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            v = [part for part in v.split(",") if part.strip()]
        if not isinstance(v, list):
            raise ValueError("reserved must be a list of instruction names")
        return [InstructionKind.lookup(x) if isinstance(x, str) else x for x in v]


def _env_overrides() -> dict[str, Any]:
    out: dict[str, Any] = {}
    prompt = os.getenv("STACKVM_PROMPT")
    if prompt is not None:
        out["prompt"] = prompt
    banner = (os.getenv("STACKVM_BANNER") or "").strip()
    if banner:
        out["banner"] = banner
    reserved = os.getenv("STACKVM_RESERVED")
    if reserved is not None:
        out["reserved"] = reserved
    return out


def _load_config_file(path: Path) -> dict[str, Any]:
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"config must be a YAML mapping: {path}")
    return data


def load_settings(path: Path | None = None) -> Settings:
    """Defaults, then the optional YAML file, then STACKVM_* environment variables."""
    load_env()
    raw: dict[str, Any] = {}
    if path is not None:
        raw.update(_load_config_file(path))
    raw.update(_env_overrides())
    return Settings.model_validate(raw)
