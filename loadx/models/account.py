from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, List, Optional

from ..db import ACCOUNTS


class Role(str, Enum):
    ATHLETE = "ATHLETE"
    COACH = "COACH"


@dataclass(frozen=True)
class Account:
    email: str
    name: str
    password: str
    role: Role
    serial_number: str
    last_name: Optional[str] = None
    cref: Optional[str] = None
    photo: Optional[str] = None

    @property
    def is_coach(self) -> bool:
        return self.role is Role.COACH

    def with_photo(self, photo: str) -> "Account":
        return replace(self, photo=photo)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "email": self.email,
            "name": self.name,
            "lastName": self.last_name,
            "password": self.password,
            "role": self.role.value,
            "cref": self.cref,
            "photo": self.photo,
            "serialNumber": self.serial_number,
        }

    def public_dict(self) -> Dict[str, Any]:
        """Account data without the password, for responses."""
        data = self.to_dict()
        data.pop("password")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Account":
        return cls(
            email=data["email"],
            name=data.get("name") or "",
            password=data.get("password") or "",
            role=Role(data["role"]),
            serial_number=data["serialNumber"],
            last_name=data.get("lastName"),
            cref=data.get("cref"),
            photo=data.get("photo"),
        )


class AccountRepository:
    """All accounts, in registration order."""

    def __init__(self, store) -> None:
        self._store = store
        self._accounts: List[Account] = [Account.from_dict(r) for r in store.load(ACCOUNTS, [])]

    def all(self) -> List[Account]:
        return list(self._accounts)

    def find_by_email(self, email: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.email == email), None)

    def find_by_serial(self, serial_number: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.serial_number == serial_number), None)

    def serial_taken(self, serial_number: str) -> bool:
        return self.find_by_serial(serial_number) is not None

    def add(self, account: Account) -> None:
        self._accounts.append(account)
        self._flush()

    def replace(self, account: Account) -> None:
        """Swaps the stored record with the same email for ``account``."""
        self._accounts = [account if a.email == account.email else a for a in self._accounts]
        self._flush()

    def _flush(self) -> None:
        self._store.save(ACCOUNTS, [a.to_dict() for a in self._accounts])
