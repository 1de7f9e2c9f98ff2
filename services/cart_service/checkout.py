from urllib.parse import quote

WHATSAPP_BASE_URL = "https://wa.me"

# Characters encodeURIComponent leaves untouched besides letters and digits
_URI_COMPONENT_SAFE = "-_.!~*'()"


def encode_uri_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_checkout_url(message: str, phone_number: str, base_url: str = WHATSAPP_BASE_URL) -> str:
    """Deep link that opens a chat with ``phone_number`` pre-filled with ``message``."""
    phone = "".join(ch for ch in phone_number if ch.isdigit())
    if not phone:
        raise ValueError("Checkout phone number must contain digits")
    return f"{base_url.rstrip('/')}/{phone}?text={encode_uri_component(message)}"
