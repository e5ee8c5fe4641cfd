"""Tests for environment settings and the company profile file."""

import json
from pathlib import Path

import pytest

from invoicing.domain.exceptions import ValidationError
from invoicing.infrastructure.config import Settings
from invoicing.rendering.company import CompanyProfile


def test_defaults():
    cfg = Settings.from_env({})
    assert cfg.log_level == "WARNING"
    assert cfg.log_json is False
    assert cfg.data_dir.name == "data"


def test_values_from_environment(tmp_path):
    cfg = Settings.from_env(
        {
            "INVOICING_DATA_DIR": str(tmp_path),
            "INVOICING_LOG_LEVEL": " info ",
            "INVOICING_LOG_JSON": "true",
        }
    )
    assert cfg.data_dir == Path(tmp_path)
    assert cfg.log_level == "INFO"
    assert cfg.log_json is True


def test_invalid_log_level_rejected():
    with pytest.raises(ValidationError, match="INVOICING_LOG_LEVEL"):
        Settings.from_env({"INVOICING_LOG_LEVEL": "LOUD"})


def test_company_defaults_without_file(tmp_path):
    assert Settings(data_dir=tmp_path).company_profile() == CompanyProfile()


def test_company_file_overrides_some_fields(tmp_path):
    (tmp_path / "company.json").write_text(
        json.dumps({"name": "PT CONTOH", "address_lines": ["Jl. Satu"], "account_holder": "Ibu Sari"})
    )
    company = Settings(data_dir=tmp_path).company_profile()
    assert company.name == "PT CONTOH"
    assert company.address_lines == ("Jl. Satu",)
    assert company.holder == "Ibu Sari"
    assert company.bank_name == CompanyProfile().bank_name


def test_holder_defaults_to_company_name():
    assert CompanyProfile(name="PT X").holder == "PT X"
