"""
Tests for ticket tokens and QR codes.
"""
import base64
from unittest.mock import patch

import pytest

from eventpass.core.exceptions import QRGenerationError
from eventpass.services.ticketing.codec import (
    generate_qr_code,
    generate_token,
    validate_token_format,
)


class TestTicketTokens:
    def test_generated_token_passes_validation(self):
        token = generate_token()
        assert token.startswith("ticket_")
        assert validate_token_format(token)

    def test_tokens_are_unique(self):
        tokens = {generate_token() for _ in range(500)}
        assert len(tokens) == 500

    def test_random_part_is_lowercase_alphanumeric(self):
        _, timestamp, random_part = generate_token().split("_")
        assert timestamp.isdigit()
        assert len(random_part) == 20
        assert random_part == random_part.lower()
        assert random_part.isalnum()

    @pytest.mark.parametrize(
        "token",
        [
            "",
            "ticket_",
            "ticket_123",
            "ticket_abc_0123456789abcdefghij",
            "ticket_123_ABCDEFGHIJ0123456789",
            "ticket_123_short",
            "TICKET_123_0123456789abcdefghij",
            "ticket_123_0123456789abcdefghij; DROP TABLE tickets",
        ],
    )
    def test_malformed_tokens_are_rejected(self, token):
        assert not validate_token_format(token)

    def test_none_is_rejected(self):
        assert not validate_token_format(None)


class TestQRCode:
    def test_returns_png_data_url(self):
        data_url = generate_qr_code(generate_token())

        prefix = "data:image/png;base64,"
        assert data_url.startswith(prefix)
        png = base64.b64decode(data_url[len(prefix):])
        assert png[:8] == b"\x89PNG\r\n\x1a\n"

    def test_failure_raises_qr_generation_error(self):
        with patch(
            "eventpass.services.ticketing.codec.qrcode.QRCode",
            side_effect=RuntimeError("boom"),
        ):
            with pytest.raises(QRGenerationError):
                generate_qr_code(generate_token())
