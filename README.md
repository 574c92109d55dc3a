# svcutils

Building blocks for service-oriented Python applications. The package has
four modules:

- `svcutils.dep`: dependency specifications (`Dep`, `DepMode`) and helpers
  to build them.
- `svcutils.options`: registration options (`RegisterOption`) and helpers to
  build and merge them.
- `svcutils.container`: the protocols a dependency-injection container and
  its services follow (`Container`, `Scope`, `Service`, `HealthChecker`,
  `Configurable`, `Disposable`), the `Factory` type and the `ServiceInfo`
  dataclass.
- `svcutils.errors`: `StructuredError`, `HTTPError` and helpers that match
  errors along their cause chain.

It has no dependencies outside the standard library and needs Python 3.11 or
later.

## Installation

```
pip install svcutils
```

## Dependency specifications

A `Dep` is a frozen dataclass with a `name`, an optional expected `type` and a
`mode`. `DepMode` has four members:

| Member                  | `str()`           | `is_lazy()` | `is_optional()` |
|-------------------------|-------------------|-------------|-----------------|
| `DepMode.EAGER`         | `"eager"`         | False       | False           |
| `DepMode.LAZY`          | `"lazy"`          | True        | False           |
| `DepMode.OPTIONAL`      | `"optional"`      | False       | True            |
| `DepMode.LAZY_OPTIONAL` | `"lazy_optional"` | True        | True            |

Build specifications with `eager`, `lazy`, `optional` and `lazy_optional`.
The `_typed` versions (`eager_typed(name, type_)` and so on) also record the
expected type. `dep_names(deps)` returns the names in order.
`deps_from_names(names)` turns plain names into eager dependencies.

```python
from svcutils.dep import DepMode, eager, lazy_typed, dep_names, deps_from_names

dep = lazy_typed("cache", dict)
dep.mode is DepMode.LAZY       # True
dep.type is dict               # True
dep_names(deps_from_names(["a", "b"]))   # ["a", "b"]
```

A service can declare its own dependencies. It does so by having a
`dependencies()` method that returns a list of `Dep`. Such an object passes
`isinstance(obj, DependencyProvider)`.

## Registration options

Each helper returns one `RegisterOption`. These are `singleton()`,
`transient()`, `scoped()`, `with_dependencies(*names)`, `with_deps(*deps)`,
`with_di_metadata(key, value)` and `with_group(group)`.

`merge_options(opts)` combines a sequence of options:

- The lifecycle defaults to `"singleton"`, and the last non-empty lifecycle wins.
- Dependencies, deps and groups are concatenated.
- Metadata is merged, and the last value wins for a repeated key.

```python
from svcutils.dep import eager, lazy, optional
from svcutils.options import (
    scoped, with_deps, with_dependencies, with_di_metadata, with_group, merge_options,
)

opts = merge_options([
    scoped(),
    with_deps(eager("logger"), lazy("cache"), optional("metrics")),
    with_dependencies("config"),
    with_di_metadata("version", "1.0.0"),
    with_group("handlers"),
])

opts.lifecycle                          # "scoped"
[d.name for d in opts.all_deps()]       # ["logger", "cache", "metrics", "config"]
opts.all_dep_names()                    # ["logger", "cache", "metrics", "config"]
opts.metadata                           # {"version": "1.0.0"}
```

`all_deps()` lists the `deps` entries first and then turns each plain
dependency name into an eager `Dep`.

## Container and service protocols

`svcutils.container` defines the following contracts:

- `Container`: `register`, `resolve`, `resolve_ready`, `has`, `is_started`,
  `services`, `begin_scope`, `start`, `stop`, `health` and `inspect`.
- `Scope`: `resolve` and `end`.
- `Factory`: a callable that takes the container and returns a service.

A `ServiceInfo` dataclass holds diagnostic details about one service. These
are its name, type, lifecycle, dependencies, started and healthy flags, and
metadata.

The service-side protocols are `Service`, `HealthChecker`, `Configurable` and
`Disposable`. All are runtime-checkable, so `isinstance` tells you whether an
object provides those methods.

## Structured errors

`StructuredError` is an exception with these parts:

- `code` and `message`.
- An optional cause, stored as `__cause__` and exposed as `cause`.
- A `timestamp`.
- A `context` dict. `with_context(key, value)` adds to it and returns the
  error, so calls can be chained.

Its `status_code` is always 500. `response_body()` returns a dict with these
entries:

- Always: `error`, `code` and `timestamp`.
- `cause`, when there is one.
- `context`, when it is not empty.

Constructors stamp the current UTC time:

- `new_error`
- `err_validation`
- `err_not_found`
- `err_already_exists`
- `err_invalid_input`
- `err_timeout`, which takes a `timedelta`: `err_timeout("query",
  timedelta(seconds=5))` gives "query timed out after 5s".
- `err_cancelled`
- `err_internal`

The codes are module constants: `CODE_INTERNAL`, `CODE_VALIDATION`,
`CODE_NOT_FOUND`, `CODE_ALREADY_EXISTS`, `CODE_INVALID_INPUT`, `CODE_TIMEOUT`,
`CODE_CANCELLED`, `CODE_UNAVAILABLE`, `CODE_PERMISSION_DENIED`,
`CODE_UNAUTHORIZED` and `CODE_CONFLICT`.

`HTTPError` carries a status `code` and its `response_body()` holds `error`,
`code` and, if there is a cause, `details`. Build one with `new_http_error`,
`bad_request`, `unauthorized`, `forbidden`, `not_found` or
`internal_error(err)`.

### Matching along the chain

- `is_error(err, target)` walks `err` and everything it wraps. This includes
  the members of groups made by `join`. It returns True if any of them is
  `target` or matches it. A `StructuredError` matches another with the same
  non-empty code. An `HTTPError` matches another with the same status code.
- `is_validation`, `is_not_found`, `is_already_exists`, `is_timeout` and
  `is_cancelled` compare against the sentinels `ERR_VALIDATION_SENTINEL`,
  `ERR_NOT_FOUND_SENTINEL` and so on.
- `find_error(err, kind)` returns the first error in the chain that is an
  instance of `kind`, or None.
- `unwrap(err)` returns the directly wrapped error.
- `join(*errors)` combines them into a `BaseExceptionGroup` and drops any
  None. It returns None when nothing is left.
- `get_http_status_code(err)` returns the status of the first `HTTPError` in
  the chain, or 500.

```python
from svcutils.errors import (
    err_not_found, err_internal, bad_request,
    is_not_found, get_http_status_code,
)

try:
    raise err_not_found("user").with_context("user_id", "123")
except Exception as exc:
    assert is_not_found(exc)
    exc.response_body()["code"]   # "NOT_FOUND"

wrapped = err_internal("operation failed", bad_request("invalid input"))
get_http_status_code(wrapped)      # 400
```

`Severity` and `ValidationIssue` describe single validation problems.
`ErrorHandler` is a protocol for objects with `handle_error(err)`.

## What the package does not do

`Container`, `Scope` and the service protocols are contracts only. The
package has no container that registers factories, resolves services, starts
or stops them, or runs health checks. You supply that implementation. The
package also has no request binding, HTTP server or command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```