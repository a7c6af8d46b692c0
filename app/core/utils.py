import re
import unicodedata
from typing import Callable, Optional


def slugify(text: Optional[str]) -> str:
    """'Dr. João Silva' -> 'dr-joao-silva'"""
    if not text:
        return ""
    normalized = unicodedata.normalize("NFKD", text)
    ascii_text = normalized.encode("ascii", "ignore").decode("ascii").lower()
    slug = re.sub(r"[^a-z0-9]+", "-", ascii_text)
    return slug.strip("-")


def unique_slug(base: str, exists: Callable[[str], bool], fallback: str = "item") -> str:
    """Acrescenta -1, -2, ... até `exists` devolver False."""
    base = base or fallback
    slug = base
    counter = 1
    while exists(slug):
        slug = f"{base}-{counter}"
        counter += 1
    return slug


def only_digits(value: Optional[str]) -> str:
    # telefone do paciente (somente dígitos) ex: 5534999999999
    return re.sub(r"\D", "", value or "")


def conversion_rate(leads: int, clicks: int) -> int:
    return round(leads / clicks * 100) if clicks > 0 else 0


def client_ip(headers) -> str:
    return headers.get("x-forwarded-for") or headers.get("x-real-ip") or "unknown"
