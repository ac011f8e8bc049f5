import pytest

from gomagw.netutil import (
    is_ip_or_cidr,
    is_websocket_request,
    real_ip,
    request_scheme,
    validate_cidr,
    validate_entrypoint,
    validate_ip_address,
)


@pytest.mark.parametrize("ip", ["192.168.1.100", "192.168.1.120"])
def test_validate_ip_address_source_cases(ip):
    assert validate_ip_address(ip) is True


@pytest.mark.parametrize("ip", ["invalid-input", "192.168.1.100/32", "", "fe80::1%eth0"])
def test_validate_ip_address_rejects(ip):
    assert validate_ip_address(ip) is False


def test_validate_ip_address_ipv6():
    assert validate_ip_address("::1") is True


@pytest.mark.parametrize(
    "value, expected",
    [
        ("192.168.1.100", (True, False)),
        ("192.168.1.100", (True, False)),
        ("192.168.1.100/32", (False, True)),
        ("invalid-input", (False, False)),
        ("192.168.1.100/33", (False, False)),
    ],
)
def test_is_ip_or_cidr_source_cases(value, expected):
    assert is_ip_or_cidr(value) == expected


@pytest.mark.parametrize("cidr", ["10.1.10.0/16", "192.168.1.100/32", "::1/128", "10.0.0.0/0"])
def test_validate_cidr_accepts(cidr):
    assert validate_cidr(cidr) is True


@pytest.mark.parametrize(
    "cidr",
    ["192.168.1.100/33", "192.168.1.100", "10.0.0.0/", "10.0.0.0/255.0.0.0", "::1/129",
     "192.168.1.25-192.168.1.100"],
)
def test_validate_cidr_rejects(cidr):
    assert validate_cidr(cidr) is False


@pytest.mark.parametrize("entry", [":8080", "127.0.0.1:80", "[::1]:443", ":1", ":65535"])
def test_validate_entrypoint_accepts(entry):
    assert validate_entrypoint(entry) is True


@pytest.mark.parametrize(
    "entry",
    ["8080", "localhost:80", ":0", ":65536", ":abc", ":", "::1:80", "[::1]80", ""],
)
def test_validate_entrypoint_rejects(entry):
    assert validate_entrypoint(entry) is False


def test_real_ip_prefers_forwarded_for():
    headers = {"X-Forwarded-For": " 203.0.113.1 , 10.0.0.1", "X-Real-IP": "198.51.100.2"}
    assert real_ip(headers, "10.0.0.9:5000") == "203.0.113.1"


def test_real_ip_header_lookup_ignores_case():
    assert real_ip({"x-real-ip": " 198.51.100.2 "}, "10.0.0.9:5000") == "198.51.100.2"


def test_real_ip_from_remote_addr():
    assert real_ip({}, "10.0.0.9:5000") == "10.0.0.9"
    assert real_ip({}, "[::1]:5000") == "::1"


def test_real_ip_raw_remote_addr_as_last_resort():
    assert real_ip({}, "unix-socket") == "unix-socket"


def test_request_scheme():
    assert request_scheme({"X-Forwarded-Proto": "HTTPS"}, False) == "https"
    assert request_scheme({}, True) == "https"
    assert request_scheme({}, False) == "http"


def test_is_websocket_request():
    assert is_websocket_request({"Upgrade": "websocket", "Connection": "Upgrade"}) is True
    assert is_websocket_request({"Upgrade": "websocket", "Connection": "keep-alive"}) is False
    assert is_websocket_request({}) is False