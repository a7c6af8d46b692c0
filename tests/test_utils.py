from app.core.utils import client_ip, conversion_rate, only_digits, slugify, unique_slug


def test_slugify_removes_accents_and_symbols():
    assert slugify("Dr. João Silva") == "dr-joao-silva"
    assert slugify("  Clínica   São Paulo!! ") == "clinica-sao-paulo"
    assert slugify("") == ""
    assert slugify(None) == ""


def test_unique_slug_appends_counter():
    taken = {"ana", "ana-1"}
    assert unique_slug("ana", lambda s: s in taken) == "ana-2"
    assert unique_slug("bia", lambda s: s in taken) == "bia"
    assert unique_slug("", lambda s: False, fallback="medico") == "medico"


def test_only_digits():
    assert only_digits("(34) 99999-0000") == "34999990000"
    assert only_digits(None) == ""


def test_conversion_rate():
    assert conversion_rate(1, 3) == 33
    assert conversion_rate(5, 0) == 0


def test_client_ip_prefers_forwarded_header():
    assert client_ip({"x-forwarded-for": "1.2.3.4", "x-real-ip": "5.6.7.8"}) == "1.2.3.4"
    assert client_ip({"x-real-ip": "5.6.7.8"}) == "5.6.7.8"
    assert client_ip({}) == "unknown"
