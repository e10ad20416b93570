"""Address value object used for billing and shipping."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields

from storefront.domain.exceptions import ValidationError

_REQUIRED = ("firstname", "lastname", "address1", "city", "zipcode", "country_iso", "phone")


@dataclass(frozen=True)
class Address:

    firstname: str
    lastname: str
    address1: str
    city: str
    zipcode: str
    country_iso: str
    phone: str
    address2: str = ""
    state_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.firstname} {self.lastname}".strip()

    def missing_fields(self) -> list[str]:
        return [name for name in _REQUIRED if not str(getattr(self, name) or "").strip()]

    def validate(self) -> None:
        missing = self.missing_fields()
        if missing:
            raise ValidationError(
                "Address is missing " + ", ".join(name.replace("_", " ") for name in missing)
            )

    def to_dict(self) -> dict:
        return asdict(self)

    @staticmethod
    def from_dict(raw: dict) -> Address:
        """Build an address from submitted attributes, ignoring unknown keys."""
        known = {f.name for f in fields(Address)}
        values = {key: ("" if value is None else str(value)) for key, value in raw.items() if key in known}
        for name in _REQUIRED:
            values.setdefault(name, "")
        values["country_iso"] = values["country_iso"].upper()
        return Address(**values)
