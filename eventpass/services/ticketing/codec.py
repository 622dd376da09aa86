# eventpass/services/ticketing/codec.py
"""
Opaque ticket tokens and the QR images that encode them.

Tokens look like ``ticket_<unix ms>_<20 lowercase alphanumerics>``. The random
part comes from ``secrets`` so tokens cannot be guessed from one another.
"""
import base64
import io
import logging
import re
import secrets
import string
import time

import qrcode
from qrcode.constants import ERROR_CORRECT_M

from eventpass.core.exceptions import QRGenerationError

logger = logging.getLogger(__name__)

TOKEN_PREFIX = "ticket_"
TOKEN_RANDOM_LENGTH = 20
_TOKEN_ALPHABET = string.ascii_lowercase + string.digits
_TOKEN_PATTERN = re.compile(rf"^ticket_\d+_[a-z0-9]{{{TOKEN_RANDOM_LENGTH}}}$")


def generate_token() -> str:
    timestamp = int(time.time() * 1000)
    random_part = "".join(
        secrets.choice(_TOKEN_ALPHABET) for _ in range(TOKEN_RANDOM_LENGTH)
    )
    return f"{TOKEN_PREFIX}{timestamp}_{random_part}"


def validate_token_format(token: str) -> bool:
    """Cheap syntactic check, done before any database lookup."""
    if not token or not isinstance(token, str):
        return False
    return bool(_TOKEN_PATTERN.fullmatch(token))


def generate_qr_code(token: str) -> str:
    """Render the token as a PNG QR code and return it as a data URL."""
    try:
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, box_size=10, border=1)
        qr.add_data(token)
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
    except Exception as e:
        logger.error(f"QR code generation failed for token {token[:16]}...: {e}")
        raise QRGenerationError(f"Failed to generate QR code: {e}")

    encoded = base64.b64encode(buf.getvalue()).decode("utf-8")
    return f"data:image/png;base64,{encoded}"
