"""Runtime settings read from the environment.

``INVOICING_DATA_DIR``   directory holding the JSON data files
                         (default: ``<repo>/data``)
``INVOICING_LOG_LEVEL``  minimum log level (default: ``WARNING``)
``INVOICING_LOG_JSON``   ``1``/``true`` for JSON log lines
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path

from invoicing.domain.exceptions import ValidationError
from invoicing.rendering.company import CompanyProfile

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _as_bool(raw: str | None) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:

    data_dir: Path = _DEFAULT_DATA_DIR
    log_level: str = "WARNING"
    log_json: bool = False

    @staticmethod
    def from_env(environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        level = env.get("INVOICING_LOG_LEVEL", "WARNING").strip().upper()
        if level not in _LEVELS:
            raise ValidationError(
                f"INVOICING_LOG_LEVEL must be one of {', '.join(_LEVELS)}, got {level!r}"
            )
        data_dir = env.get("INVOICING_DATA_DIR")
        return Settings(
            data_dir=Path(data_dir).expanduser() if data_dir else _DEFAULT_DATA_DIR,
            log_level=level,
            log_json=_as_bool(env.get("INVOICING_LOG_JSON")),
        )

    @property
    def company_file(self) -> Path:
        return self.data_dir / "company.json"

    def company_profile(self) -> CompanyProfile:
        """Issuer details from ``company.json`` when present, else defaults."""
        if not self.company_file.exists():
            return CompanyProfile()
        raw = json.loads(self.company_file.read_text(encoding="utf-8"))
        return CompanyProfile.from_dict(raw)
