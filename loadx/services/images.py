import base64

from ..errors import MissingField

DEFAULT_MIMETYPE = "image/png"


def encode_image(data: bytes, mimetype: str = DEFAULT_MIMETYPE) -> str:
    """Encodes raw image bytes as a data URL that can be stored and rendered as-is."""
    if not data:
        raise MissingField("Selecione uma imagem.")
    payload = base64.b64encode(data).decode("ascii")
    return f"data:{mimetype or DEFAULT_MIMETYPE};base64,{payload}"
