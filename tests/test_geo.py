from types import SimpleNamespace

from geoip2.errors import AddressNotFoundError

from shield_api.services import geo


class _StubReader:
    def __init__(self, iso_code=None, error=None):
        self.iso_code = iso_code
        self.error = error
        self.queried: list[str] = []

    def country(self, ip):
        self.queried.append(ip)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(country=SimpleNamespace(iso_code=self.iso_code))


def test_unparsable_address_is_unknown(monkeypatch):
    reader = _StubReader(iso_code="JP")
    monkeypatch.setattr(geo, "_open_reader", lambda path: reader)

    assert geo.ip_to_country("testclient") == geo.UNKNOWN_COUNTRY
    assert geo.ip_to_country("") == geo.UNKNOWN_COUNTRY
    assert reader.queried == []


def test_missing_database_is_unknown():
    assert geo.ip_to_country("8.8.8.8") == "ZZ"


def test_lookup_returns_iso_code(monkeypatch):
    reader = _StubReader(iso_code="JP")
    monkeypatch.setattr(geo, "_open_reader", lambda path: reader)

    assert geo.ip_to_country(" 203.0.113.7 ") == "JP"
    assert reader.queried == ["203.0.113.7"]


def test_address_not_in_database_is_unknown(monkeypatch):
    reader = _StubReader(error=AddressNotFoundError("not found"))
    monkeypatch.setattr(geo, "_open_reader", lambda path: reader)

    assert geo.ip_to_country("10.0.0.1") == "ZZ"


def test_record_without_country_is_unknown(monkeypatch):
    monkeypatch.setattr(geo, "_open_reader", lambda path: _StubReader(iso_code=None))

    assert geo.ip_to_country("2001:db8::1") == "ZZ"
