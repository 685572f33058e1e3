# quotaday

A tiny HTTP server that hands out quotations. It starts with six example
quotes. It serves one at random, or one by index, as JSON or HTML, and it
accepts new ones over POST.

## Installation

```sh
pip install .
```

## Running the server

```sh
quotaday               # listen on 0.0.0.0:80
quotaday --port 8080   # or -p 8080
quotaday version       # print the version and exit
```

`python -m quotaday.cli` runs the same command. The server uses the standard
library's `wsgiref` server with one thread per request. It logs each request
at INFO level and stops on Ctrl-C. If the port cannot be bound, the command
logs the error and exits with status 1.

`quotaday version` prints the version followed by `+` and the first seven
characters of the commit it was built from, for example `v0.0.0+`.

## HTTP API

Only the path `/quote` is served. Every other path returns `404 Not Found`.
Methods other than GET and POST return `405 Method Not Allowed`.

### `GET /quote`

Returns a random quotation. Add `?id=N` to get the quotation at index `N`,
counting from 0. An index out of range returns `400 Bad Request` with a
message such as `id 999 out of bounds`. An `id` that is not an integer also
returns `400 Bad Request`.

The format follows the `Accept` header. Each comma-separated value is checked
in order and must match exactly:

- `application/json` or `*/*`: returns `{"Quote": "...", "Author": "..."}`.
  This is also the format used when the request has no `Accept` header.
- `text/html`: returns a small HTML page showing the quote and its author,
  with both HTML-escaped.

If none of the listed types can be served, the reply is `406 Not Acceptable`.

```sh
curl -H 'Accept: application/json' 'http://localhost:8080/quote?id=0'
```

### `POST /quote`

Adds a quotation. The body is a JSON object with `Quote` and `Author`. Keys
are matched case-insensitively, and a missing field is stored as an empty
string.

```sh
curl -X POST -d '{"Quote": "Hello", "Author": "Tester"}' http://localhost:8080/quote
```

- `201 Created`, with the stored quotation as JSON in the body, on success.
- `400 Bad Request` with `could not read request body` if the body is not a
  JSON object or a field is not a string.
- `507 Insufficient Storage` with `QuoteBook is full` once the book holds 21
  quotations.

## Using it from Python

```python
from quotaday.quote import Quotation, QuoteBook, QuoteBookError

book = QuoteBook()
book.fill_example()
book.add_quote(Quotation("Hello", "Tester"))
print(len(book))
print(book.get_quote(0).to_dict())
print(book.random_quotation())

try:
    book.get_quote(99)
except QuoteBookError as exc:
    print(exc)  # id 99 out of bounds
```

`QuoteBook` is safe to use from several threads at once.

`Quotation.write_json(stream)` and `Quotation.write_html(stream)` write to any
text stream. `Quotation.from_dict(data)` builds a quotation from decoded JSON.

`quotaday.api.Server` is a WSGI application, so any WSGI server can host it:

```python
from wsgiref.simple_server import make_server
from quotaday.api import Server

make_server("127.0.0.1", 8080, Server()).serve_forever()
```

The handlers can also be called without a WSGI server, through
`quotaday.api.Request` and `quotaday.api.Response`:

```python
from quotaday.api import Request, Server

response = Server().handle(
    Request("GET", "/quote?id=0", [("Accept", "application/json")])
)
print(response.status, response.body)
```

## What it does not do

Quotations are kept in memory only. Quotes added over POST are lost when the
server stops, and every new `Server` starts again from the example set.
Quotations cannot be edited or removed through the API. There is no
authentication and no TLS.

## Tests

```sh
pip install '.[test]'
pytest
```