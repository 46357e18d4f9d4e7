import datetime as dt
import ipaddress
import json
import uuid

import pytest

from apigen import formats


def test_encode_duration_quoted():
    assert formats.encode_duration(4 * 60 * 10**9 + 5 * 10**9) == b'"4m5s"'
    assert formats.encode_duration(0) == b'"0s"'


def test_decode_duration():
    assert formats.decode_duration(b'"1.1us"') == 1100


def test_uuid_hex_matches_canonical():
    u = uuid.uuid1()
    assert formats.encode_uuid(u) == b'"' + str(u).encode() + b'"'
    assert formats.decode_uuid(formats.encode_uuid(u)) == u


def test_uuid_invalid():
    with pytest.raises(ValueError):
        formats.decode_uuid(b'"nope"')


def test_ip_round_trip():
    addr = ipaddress.ip_address("127.0.0.1")
    assert formats.encode_ip(addr) == b'"127.0.0.1"'
    assert formats.decode_ip(b'"2001:db8::1"') == ipaddress.ip_address("2001:db8::1")
    with pytest.raises(ValueError):
        formats.decode_ip(b'"300.1.1.1"')


def test_date_time_round_trips():
    d = dt.date(2011, 10, 10)
    assert formats.encode_date(d) == b'"2011-10-10"'
    assert formats.decode_date(formats.encode_date(d)) == d
    t = dt.time(7, 12, 34)
    assert formats.decode_time(formats.encode_time(t)) == t
    ts = dt.datetime(2011, 10, 10, 7, 12, 34, tzinfo=dt.timezone.utc)
    assert formats.encode_date_time(ts) == b'"2011-10-10T07:12:34Z"'
    assert formats.decode_date_time(formats.encode_date_time(ts)) == ts


def test_date_time_invalid():
    with pytest.raises(ValueError):
        formats.decode_date_time(b'"2011-10-10"')
    with pytest.raises(ValueError):
        formats.decode_date(b"10")


def test_uri():
    assert formats.decode_uri(b'"s3://foo/baz"') == "s3://foo/baz"
    assert json.loads(formats.encode_uri("https://example.com/a")) == "https://example.com/a"
    with pytest.raises(ValueError):
        formats.decode_uri(b'"relative/path"')


def test_marshal_round_trip():
    value = {"id": 10, "randomNumber": 12351, "message": "Hello, world!"}
    assert formats.unmarshal(formats.marshal(value)) == value