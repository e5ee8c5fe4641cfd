"""Issuer details printed in the header of every half-invoice."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CompanyProfile:

    name: str = "PT. SHUNHUI ZHIYE INDONESIA"
    address_lines: tuple[str, ...] = field(
        default=(
            "Jl. Cibaligo No. 167, RT 001 RW 030, Desa Cibereum,",
            "Kecamatan Cimahi Selatan, Kota Cimahi, Jawa Barat",
        )
    )
    phone: str = "0813-89-167167"
    bank_name: str = "Bank Central Asia (BCA)"
    account_number: str = "7753-788-788"
    account_holder: str | None = None

    @property
    def holder(self) -> str:
        return self.account_holder or self.name

    @staticmethod
    def from_dict(raw: dict) -> CompanyProfile:
        defaults = CompanyProfile()
        return CompanyProfile(
            name=raw.get("name", defaults.name),
            address_lines=tuple(raw.get("address_lines", defaults.address_lines)),
            phone=raw.get("phone", defaults.phone),
            bank_name=raw.get("bank_name", defaults.bank_name),
            account_number=raw.get("account_number", defaults.account_number),
            account_holder=raw.get("account_holder"),
        )
