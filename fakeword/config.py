"""Runtime settings resolved from the environment."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from fakeword.core.cmudict_loader import DEFAULT_FREQUENCY_LIMIT

DEFAULT_DATA_DIR = Path("assets") / "resources"
DEFAULT_CACHE_DIR = Path("assets") / "internal"
DEFAULT_DICT_FILE = "cmudict.0.6-syl.txt"
DEFAULT_FREQUENCY_FILE = "word_frequency.txt"


def _env_int(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class FakeWordSettings:
    """Where the corpus lives and where derived snapshots are cached."""

    dict_path: Path = DEFAULT_DATA_DIR / DEFAULT_DICT_FILE
    frequency_path: Path = DEFAULT_DATA_DIR / DEFAULT_FREQUENCY_FILE
    cache_dir: Path = DEFAULT_CACHE_DIR
    frequency_limit: int = DEFAULT_FREQUENCY_LIMIT
    max_workers: Optional[int] = None

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "FakeWordSettings":
        env = os.environ if env is None else env
        data_dir = Path(env.get("FAKEWORD_DATA_DIR") or DEFAULT_DATA_DIR)
        return cls(
            dict_path=data_dir / (env.get("FAKEWORD_DICT_FILE") or DEFAULT_DICT_FILE),
            frequency_path=data_dir / (env.get("FAKEWORD_FREQUENCY_FILE") or DEFAULT_FREQUENCY_FILE),
            cache_dir=Path(env.get("FAKEWORD_CACHE_DIR") or DEFAULT_CACHE_DIR),
            frequency_limit=_env_int(env, "FAKEWORD_FREQUENCY_LIMIT", DEFAULT_FREQUENCY_LIMIT),
            max_workers=_env_int(env, "FAKEWORD_WORKERS", None),
        )

    def fingerprint(self) -> str:
        """Short digest of the settings that shape the derived models."""

        source = "\n".join(
            [
                str(Path(self.dict_path).resolve()),
                str(Path(self.frequency_path).resolve()),
                str(self.frequency_limit),
            ]
        )
        return hashlib.sha256(source.encode("utf-8")).hexdigest()[:16]


def share_interface(env: Optional[Mapping[str, str]] = None) -> bool:
    """Return whether the Gradio UI should request a public share link."""

    env = os.environ if env is None else env
    value = env.get("FAKEWORD_SHARE", "")
    return str(value).strip().lower() in {"1", "true", "yes", "on"}


__all__ = ["FakeWordSettings", "share_interface"]
