"""A minimal CGI program that adds the two numbers in its query string."""

from __future__ import annotations

import os
import sys

from labnet.textutil import atoi


def parse_query(query: str | None) -> tuple[int, int]:
    """Read the two ``&``-separated numbers of a query string.

    A missing query gives ``(0, 0)``; a query without ``&`` raises
    ``ValueError``.
    """
    if query is None:
        return 0, 0
    first, sep, second = query.partition("&")
    if not sep:
        raise ValueError(f"query string has no '&': {query!r}")
    return atoi(first), atoi(second)


def make_response(query: str | None) -> str:
    """Build the CGI output: headers followed by the HTML body."""
    n1, n2 = parse_query(query)
    content = (
        "Welcome to add.com: "
        "THE Internet addition portal.\r\n<p>"
        f"The answer is: {n1} + {n2} = {n1 + n2}\r\n<p>"
        "Thanks for visiting!\r\n"
    )
    return (
        "Connection: close\r\n"
        f"Content-length: {len(content.encode('latin-1'))}\r\n"
        "Content-type: text/html\r\n\r\n"
        f"{content}"
    )


def main(argv: list[str] | None = None) -> int:
    """Write the response for ``QUERY_STRING`` to standard output."""
    sys.stdout.write(make_response(os.environ.get("QUERY_STRING")))
    sys.stdout.flush()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())