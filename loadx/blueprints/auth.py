from flask import Blueprint, request, session

from ..db import get_accounts
from ..errors import MissingField
from ..models.account import Role
from ..services import identity
from ..web import current_account, form_data

bp = Blueprint("auth", __name__, url_prefix="/auth")

# Role names as the app's own forms send them
ROLE_ALIASES = {"ATLETA": Role.ATHLETE, "PROFESSOR": Role.COACH}


def _parse_role(raw) -> Role:
    value = str(raw or Role.ATHLETE.value).strip().upper()
    if value in ROLE_ALIASES:
        return ROLE_ALIASES[value]
    try:
        return Role(value)
    except ValueError:
        raise MissingField("Selecione um perfil válido.") from None


@bp.post("/register")
def register():
    """Registers an athlete or coach and signs them in."""
    data = form_data()
    account = identity.register(get_accounts(), _parse_role(data.get("role")), data)
    session.clear()
    session["email"] = account.email
    return {"account": account.public_dict()}, 201


@bp.post("/login")
def login():
    data = form_data()
    account = identity.login(get_accounts(), str(data.get("email") or ""), str(data.get("password") or ""))
    session.clear()
    session["email"] = account.email
    return {"account": account.public_dict()}


@bp.post("/logout")
def logout():
    session.clear()
    return {"status": "ok"}


@bp.get("/me")
def me():
    return {"account": current_account().public_dict()}


@bp.post("/photo")
def update_photo():
    """Replaces the profile photo with the uploaded file (field ``photo``)."""
    account = current_account()
    upload = request.files.get("photo")
    if upload is None:
        raise MissingField("Selecione uma imagem.")
    updated = identity.update_photo(get_accounts(), account, upload.read(), upload.mimetype)
    return {"account": updated.public_dict()}
