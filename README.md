# ginroute

A compact radix-tree router for HTTP paths. Routes are inserted into a
prefix tree and matched in a single walk, with support for:

- named parameters (`/user/:name`), one per path segment
- catch-all parameters at the end of a path (`/static/*filepath`)
- trailing-slash redirect recommendations (`/dir` vs `/dir/`)
- case-insensitive lookup that returns the registered spelling of a path
- optional percent/plus unescaping of parameter values

Conflicting or malformed routes are rejected with `RouteError` when they
are added.

## Installation

```
pip install .
```

For the test suite:

```
pip install .[test]
pytest
```

## Routing

`ginroute.tree.Node` is the root of a routing tree. Handlers can be any
value; the tree only stores and returns them.

```python
from ginroute.tree import Node, RouteError

root = Node()
root.add_route("/", ["index"])
root.add_route("/user/:name", ["show_user"])
root.add_route("/src/*filepath", ["serve_file"])

match = root.get_value("/user/gopher", None, False)
match.handlers                 # ['show_user']
match.params.by_name("name")   # 'gopher'

match = root.get_value("/src/css/site.css", None, False)
match.params.get("filepath")   # '/css/site.css'

# No handler, but a route with one more/less trailing slash exists
root.add_route("/docs/", ["docs"])
root.get_value("/docs", None, False).tsr   # True

# Parameter unescaping
root.get_value("/user/slash%2Fgopher", None, True).params.by_name("name")
# 'slash/gopher'
```

`get_value(path, params, unescape)` returns a `RouteMatch` holding
`handlers` (or `None`), the collected `Params`, and the `tsr` flag. Any
`params` passed in come first in the result. With `unescape` set, values
are percent- and plus-decoded; a value with a malformed escape is kept
as it is.

`Params` is a list of `Param(key, value)` entries in path order.
`Params.get(name)` returns the first matching value or `None`;
`Params.by_name(name)` returns it or `''`.

### Case-insensitive lookup

```python
root.find_case_insensitive_path("/USER/gopher", True)
# '/user/gopher'
root.find_case_insensitive_path("/nope", True)
# None
```

With the second argument set, a missing or extra trailing slash is fixed
as well.

### Conflicts

```python
root.add_route("/user/:id", ["other"])
# RouteError: ':id' in new path '/user/:id' conflicts with existing wildcard ':name' ...
```

Duplicate routes, empty wildcard names, several wildcards in one segment,
wildcards that would hide existing children, and catch-alls that are not
at the end of the path all raise `RouteError`.

`count_params(path)` counts the `:` and `*` characters of a path, capped
at 255.

### Per-method trees

`MethodTrees` is a list of `(method, root node)` pairs; `get(method)`
returns the root for that method or `None`.

## Helpers

`ginroute.utils` contains small helpers used around routing:

```python
from ginroute.utils import H, join_paths, parse_accept, resolve_address

join_paths("/api/", "/users/")   # '/api/users/'
parse_accept("text/html, application/xml;q=0.9, */*;q=0.8")
# ['text/html', 'application/xml', '*/*']
resolve_address()                # ':8080', or ':' + $PORT when set
resolve_address(":5150")         # ':5150'
H({"foo": "bar"}).to_xml()       # '<map><foo>bar</foo></map>'
```

Also available:

- `filter_flags(content)`: the text up to the first space or semicolon
- `choose_data(custom, wildcard)`: `custom` unless it is `None`, else
  `wildcard`; `ValueError` if both are `None`
- `last_char(text)`: the last character; `ValueError` on an empty string
- `name_of_function(func)`: the function's `module.qualname`
- `VERSION` and `BIND_KEY` constants

`resolve_address` with more than one argument, and `H.to_xml` with an
empty key, raise `ValueError`.

## What this package does not do

It only matches paths and offers the helpers above. There is no HTTP
server, no request or response objects, no middleware chain and no
handler dispatch: calling the handlers a lookup returns, and issuing the
redirects that `tsr` or the case-insensitive lookup suggest, is left to
the caller.