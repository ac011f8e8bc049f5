# gomagw

Building blocks for a lightweight API gateway: network address helpers,
entry point and CORS settings, middleware definitions read from YAML,
RSA public key loading, and backend health checks.

Install with `pip install .`; the tests run with `pip install .[test]`
and `pytest`.

## Network helpers (`gomagw.netutil`)

```python
from gomagw.netutil import (
    validate_ip_address,
    validate_cidr,
    is_ip_or_cidr,
    validate_entrypoint,
    real_ip,
    request_scheme,
    is_websocket_request,
)

validate_ip_address("192.168.1.100")     # True
validate_cidr("192.168.1.100/33")        # False
is_ip_or_cidr("192.168.1.100/32")        # (False, True)
is_ip_or_cidr("invalid-input")           # (False, False)
validate_entrypoint(":8080")             # True
validate_entrypoint("127.0.0.1:70000")   # False

real_ip({"X-Forwarded-For": "203.0.113.7, 10.0.0.1"}, "10.0.0.2:5555")  # "203.0.113.7"
request_scheme({"X-Forwarded-Proto": "HTTPS"}, False)                   # "https"
is_websocket_request({"Upgrade": "websocket", "Connection": "Upgrade"}) # True
```

Header lookups are case-insensitive. `real_ip` takes the first entry of
`X-Forwarded-For`, then `X-Real-IP`, then the host part of the remote
address, and finally the remote address as given. `request_scheme`
returns the lower-cased `X-Forwarded-Proto`, otherwise `"https"` when
`tls` is true and `"http"` when it is not. `validate_entrypoint` accepts
`:<port>` or `<ip>:<port>` with a port from 1 to 65535; failures are
logged through the `logging` module.

## Entry points (`gomagw.entrypoint`)

`parse_entrypoint(data)` reads the `entryPoints` mapping (with `web` and
`webSecure`, each holding an `address`) into an `EntryPoint` made of two
`EntryPointAddress` values. `EntryPoint.resolve(web_default,
web_secure_default)` returns the pair of listen addresses, keeping a
configured address only when it passes `validate_entrypoint` and using
the default otherwise.

```python
from gomagw.entrypoint import parse_entrypoint

ep = parse_entrypoint({"web": {"address": ":9080"}, "webSecure": {"address": "bad"}})
ep.resolve(":8080", ":8443")   # (":9080", ":8443")
```

## CORS (`gomagw.cors`)

`parse_cors(data)` builds a `Cors` with `origins` and `headers` from a
`cors` mapping. `allowed_origin(origins, origin)` is an exact match.
`Cors.response_headers(method, origin)` returns `(headers, preflight)`:
the configured headers in canonical form, plus
`Access-Control-Allow-Origin` set to the origin when it is allowed.
`preflight` is true only for an allowed origin with method `OPTIONS`,
meaning the request is to be answered with 204 No Content.

## Middlewares (`gomagw.middleware`)

```python
from gomagw.middleware import (
    parse_middleware,
    middleware_names,
    find_middleware,
    get_middleware,
    find_duplicate_middleware_names,
)

items = [
    parse_middleware({"name": "basic-auth", "type": "basic", "paths": ["/*"]}),
    parse_middleware({"name": "block-access", "type": "access", "paths": ["/admin/*"]}),
]
middleware_names(items)                          # ["basic-auth", "block-access"]
find_middleware(["block-access"], items).name    # "block-access"
get_middleware("use-basic-auth", items).name     # "basic-auth"
find_duplicate_middleware_names(items)           # []
```

`find_middleware` matches names exactly against a list; `get_middleware`
matches a name that occurs anywhere within the given string. Both raise
`MiddlewareNotFound` when nothing matches.
`find_duplicate_middleware_names` raises `ValueError` for a middleware
without a name. The `rule` of a `Middleware` is kept as it was read.

`load_extra_middlewares(directory)` collects the `middlewares` lists of
every YAML file under a directory and raises `MiddlewareNotFound` when
none are found. The files come from
`gomagw.extra_files.find_extra_files(directory)`, which returns the
`.yaml` and `.yml` files in lexical order, skips directories whose name
starts with a dot, and does not follow symbolic links.

## RSA public keys (`gomagw.keys`)

`load_rsa_public_key(source)` treats `source` as PEM text when it
contains `-----BEGIN`, and as a file path otherwise. A `PUBLIC KEY` or
`CERTIFICATE` block yields the RSA public key; an unreadable file, bad
PEM, a non-RSA key or any other block type raises `KeyLoadError`.

## Health checks (`gomagw.health`)

A `HealthCheck` has a `name`, a `url`, an optional `timeout` in seconds,
a list of `healthy_statuses` and `insecure_skip_verify`.
`HealthCheck.check()` sends a GET request and raises `HealthCheckError`
when the request fails or the status is not healthy.
`validate_status_code(status_code, healthy_statuses)` applies the rule
on its own: with healthy statuses given the code must be one of them,
otherwise any code below 400 is healthy.

`check_all(checks, hide_errors=False)` runs the checks concurrently and
returns one `HealthResult` (`name`, `status`, `error`, and the `healthy`
property) per check, in the order given. With `hide_errors` the reason
for a failure is replaced by a fixed notice.

## What this package does not do

It has no command line, does not run an HTTP server or proxy requests,
does not read or write a complete gateway configuration file, and does
not apply middlewares to requests or schedule health checks at
intervals. It provides the pieces listed above for a program that does.