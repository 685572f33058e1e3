"""Quotations and a bounded, thread-safe collection of them."""

from __future__ import annotations

import html
import json
import random
import threading
from dataclasses import dataclass
from typing import Any, TextIO

MAX_QUOTES = 20

_HTML_TEMPLATE = """
<!DOCTYPE html>
<html>
<body>

<q style=font-size:200%;font-family:cursive>{quote}</q>
<p><i>{author}</i></p>

</body>
</html>"""

_EXAMPLES = (
    ("Start before you are ready. Don't prepare, begin.", "Mel Robbins"),
    ("Eat the frog first.", "Brian Tracy"),
    ("Imperfect action beats perfect inaction.", "Harry S. Truman"),
    ("Succeed or survive (but try).", "Mel Robbins"),
    (
        "Be responsible for telling people the truth, "
        "not managing people's reactions to it.",
        "Mel Robbins",
    ),
    ("Today's favor is tomorrow's expectation.", "Mel Robbins"),
)


@dataclass(frozen=True)
class Quotation:
    """A single quote and its author."""

    quote: str = ""
    author: str = ""

    def to_dict(self) -> dict[str, str]:
        """Return the wire representation of the quotation."""
        return {"Quote": self.quote, "Author": self.author}

    @classmethod
    def from_dict(cls, data: Any) -> Quotation:
        """Build a quotation from a decoded JSON object; keys match case-insensitively."""
        if not isinstance(data, dict):
            raise ValueError("quotation must be a JSON object")
        fields = {str(k).lower(): v for k, v in data.items()}
        values = {}
        for name in ("quote", "author"):
            value = fields.get(name)
            if value is not None and not isinstance(value, str):
                raise ValueError(f"field {name} must be a string")
            values[name] = value or ""
        return cls(**values)

    def write_html(self, stream: TextIO) -> None:
        """Write the quotation as a small HTML page."""
        stream.write(
            _HTML_TEMPLATE.format(
                quote=html.escape(self.quote), author=html.escape(self.author)
            )
        )

    def write_json(self, stream: TextIO) -> None:
        """Write the quotation as one line of JSON."""
        stream.write(json.dumps(self.to_dict(), ensure_ascii=False) + "\n")


class QuoteBookError(Exception):
    """Raised when a quote book cannot satisfy a request."""


class QuoteBook:
    """A thread-safe, bounded collection of quotations."""

    def __init__(self) -> None:
        self._quotes: list[Quotation] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._quotes)

    def random_quotation(self) -> Quotation:
        """Return a quotation chosen at random."""
        with self._lock:
            if not self._quotes:
                raise QuoteBookError("empty QuoteBook")
            return random.choice(self._quotes)

    def fill_example(self) -> None:
        """Replace the contents with a set of example quotations."""
        with self._lock:
            self._quotes = [Quotation(q, a) for q, a in _EXAMPLES]

    def add_quote(self, quotation: Quotation) -> None:
        """Append a quotation, unless the book is already full."""
        with self._lock:
            if len(self._quotes) > MAX_QUOTES:
                raise QuoteBookError("QuoteBook is full")
            self._quotes.append(quotation)

    def get_quote(self, num: int) -> Quotation:
        """Return the quotation at position ``num``."""
        with self._lock:
            if not self._quotes:
                raise QuoteBookError("empty QuoteBook")
            if not 0 <= num < len(self._quotes):
                raise QuoteBookError(f"id {num} out of bounds")
            return self._quotes[num]