"""
Accounts and coach-athlete linking.

Passwords are stored and compared in plain text; this mirrors the data the
app has always kept and is a known limitation.
"""

from __future__ import annotations

import logging
import re
import secrets
import string
from typing import List, Mapping, Optional, Tuple

from ..errors import (
    DuplicateEmail,
    DuplicateStudent,
    Forbidden,
    InvalidCredentials,
    MissingField,
    PasswordMismatch,
    StudentNotFound,
    WeakPassword,
)
from ..models.account import Account, AccountRepository, Role
from ..models.roster import RosterEntry, RosterRepository
from .images import encode_image

logger = logging.getLogger(__name__)

SERIAL_ALPHABET = string.ascii_uppercase + string.digits
SERIAL_LENGTH = 6
STRONG_PASSWORD = re.compile(
    r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[@$!%*?&])[A-Za-z\d@$!%*?&]{8,}$"
)

REQUIRED_FIELDS = {
    Role.ATHLETE: ("name", "email", "password"),
    Role.COACH: ("name", "lastName", "email", "cref", "password", "confirmPassword"),
}


def _field(fields: Mapping[str, object], key: str) -> str:
    return str(fields.get(key) or "")


def is_strong_password(password: str) -> bool:
    return bool(STRONG_PASSWORD.match(password))


def generate_serial_number(accounts: AccountRepository) -> str:
    """'#' plus six characters of [A-Z0-9], retried until no account uses it."""
    while True:
        serial = "#" + "".join(secrets.choice(SERIAL_ALPHABET) for _ in range(SERIAL_LENGTH))
        if not accounts.serial_taken(serial):
            return serial


def register(accounts: AccountRepository, role: Role, fields: Mapping[str, object]) -> Account:
    """
    Creates an account for ``role`` from form ``fields`` (camelCase keys).

    Checks, in order: required fields, coach password confirmation,
    password strength, email uniqueness.
    """
    if any(not _field(fields, key) for key in REQUIRED_FIELDS[role]):
        raise MissingField()

    password = _field(fields, "password")
    if role is Role.COACH and password != _field(fields, "confirmPassword"):
        raise PasswordMismatch()
    if not is_strong_password(password):
        raise WeakPassword()

    email = _field(fields, "email")
    if accounts.find_by_email(email) is not None:
        raise DuplicateEmail()

    is_coach = role is Role.COACH
    account = Account(
        email=email,
        name=_field(fields, "name"),
        password=password,
        role=role,
        serial_number=generate_serial_number(accounts),
        last_name=_field(fields, "lastName") if is_coach else None,
        cref=_field(fields, "cref") if is_coach else None,
    )
    accounts.add(account)
    logger.info("registered %s account %s (%s)", role.value, email, account.serial_number)
    return account


def login(accounts: AccountRepository, email: str, password: str) -> Account:
    account = accounts.find_by_email(email)
    if account is None or account.password != password:
        raise InvalidCredentials()
    return account


def update_photo(accounts: AccountRepository, account: Account, image: bytes, mimetype: str) -> Account:
    """
    Replaces the account photo. The stored record is the only copy a
    request reads the signed-in account from, so the returned account and
    the repository never disagree.
    """
    updated = account.with_photo(encode_image(image, mimetype))
    accounts.replace(updated)
    return updated


def add_roster_entry(
    accounts: AccountRepository,
    rosters: RosterRepository,
    coach: Account,
    display_name: str,
    serial_number: str,
) -> List[RosterEntry]:
    """Links the athlete with ``serial_number`` to ``coach`` and returns the roster."""
    if not coach.is_coach:
        raise Forbidden()
    display_name = (display_name or "").strip()
    serial_number = (serial_number or "").strip()
    if not display_name or not serial_number:
        raise MissingField("Preencha o nome e o número de série.")
    if accounts.find_by_serial(serial_number) is None:
        raise StudentNotFound()
    if rosters.contains(coach.email, serial_number):
        raise DuplicateStudent()

    rosters.append(coach.email, RosterEntry(display_name=display_name, serial_number=serial_number))
    logger.info("coach %s linked athlete %s", coach.email, serial_number)
    return rosters.entries(coach.email)


def roster_accounts(
    accounts: AccountRepository,
    rosters: RosterRepository,
    coach: Account,
) -> List[Tuple[RosterEntry, Optional[Account]]]:
    """
    Roster entries with the account each serial resolves to. Serials are not
    revalidated after linking, so the account may be ``None``.
    """
    return [(entry, accounts.find_by_serial(entry.serial_number)) for entry in rosters.entries(coach.email)]


def linked_athlete(
    accounts: AccountRepository,
    rosters: RosterRepository,
    coach: Account,
    serial_number: str,
) -> Account:
    """The account behind one of ``coach``'s roster entries."""
    if not coach.is_coach:
        raise Forbidden()
    if not rosters.contains(coach.email, serial_number):
        raise StudentNotFound()
    athlete = accounts.find_by_serial(serial_number)
    if athlete is None:
        raise StudentNotFound()
    return athlete
