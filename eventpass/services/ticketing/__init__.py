from .codec import generate_token, validate_token_format, generate_qr_code

__all__ = ["generate_token", "validate_token_format", "generate_qr_code"]
