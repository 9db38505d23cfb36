"""base64url helpers for Gmail message bodies and attachments."""

import base64


def _pad(data: str) -> str:
    # base64 requires length divisible by 4; Gmail sometimes omits padding
    padding = 4 - len(data) % 4
    if padding != 4:
        data += "=" * padding
    return data


def decode_base64_bytes(data: str) -> bytes:
    """Decode Gmail's URL-safe base64 encoded data to raw bytes.

    Gmail uses URL-safe base64 encoding (RFC 4648) which replaces
    '+' with '-' and '/' with '_'. Unlike base64.urlsafe_b64decode this
    rejects characters outside the alphabet instead of discarding them,
    so corrupt payloads are detected rather than silently truncated.

    Args:
        data: Base64url encoded string, padded or not

    Returns:
        Decoded bytes

    Raises:
        ValueError: If data is not valid base64url
    """
    return base64.b64decode(_pad(data), altchars=b"-_", validate=True)


def decode_base64(data: str) -> str:
    """Decode Gmail's URL-safe base64 encoded data to text.

    Args:
        data: Base64url encoded string

    Returns:
        Decoded UTF-8 string (undecodable bytes replaced)
    """
    decoded_bytes = base64.urlsafe_b64decode(_pad(data))
    return decoded_bytes.decode("utf-8", errors="replace")
