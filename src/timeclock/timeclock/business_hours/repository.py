from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import BusinessHours


class CompanySettingsRepository(Protocol):
    def list_company_ids(self) -> Sequence[str]:
        """Every tenant that has a company_settings row."""

        raise NotImplementedError

    def get_business_hours(self, company_id: str) -> Optional[BusinessHours]:
        """None when the tenant has no (or empty) business hours.

        Raises ConfigurationError when the stored value cannot be parsed.
        """

        raise NotImplementedError
