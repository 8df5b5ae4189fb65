# labnet

Building blocks for networking and process-control tools:

- **An LRU cache of response bodies** (`labnet.cache.LRUCache`), safe to share
  between threads.
- **Buffered, restart-safe I/O** over sockets, binary files and file
  descriptors (`labnet.rio`).
- **An adder CGI program.** It adds the two numbers given in `QUERY_STRING`.
- **A tiny shell with job control.** It runs foreground and background jobs
  and has the built-in commands `jobs`, `bg`, `fg` and `quit`.
- **Helper programs for exercising the shell.**

## Installation

```
pip install .
```

Add `.[test]` to install the test dependencies as well.

## Commands

### Adder

```
labnet-adder
```

It reads `QUERY_STRING` (for example `15000&213`) and writes the
`Connection`, `Content-length` and `Content-type` headers followed by an HTML
body with the sum. With no `QUERY_STRING` it adds 0 and 0; a query without
`&` is an error.

### Shell

```
labnet-tsh [-hvp]
```

| Option | Effect |
| ------ | ------ |
| `-h` | print help and exit |
| `-v` | print a line for every job added |
| `-p` | do not print the `tsh> ` prompt |

Programs are given by path, e.g. `/bin/ls -l`. End a command with `&` to run
it in the background. Use `bg %1` or `fg 1234` to resume a job by its job ID
or its PID, and `jobs` to list the job table. Ctrl-C and Ctrl-Z are passed on
to the foreground job.

### Test programs

```
labnet-myspin <n>
labnet-myint <n>
labnet-mysplit <n>
labnet-mystop <n>
```

| Program | Behaviour |
| ------- | --------- |
| `labnet-myspin` | sleeps for `n` seconds |
| `labnet-myint` | sleeps, then sends itself SIGINT |
| `labnet-mysplit` | forks a child that sleeps, then waits for it |
| `labnet-mystop` | sleeps, then sends SIGTSTP to its process group |

## Library use

### Cache

```python
from labnet.cache import LRUCache

cache = LRUCache(1049000)
cache.put("localhost", 8000, "/home.html", b"HTTP/1.0 200 OK\r\n\r\n...")
data = cache.get("localhost", 8000, "/home.html")  # bytes, or None if absent
```

Entries are keyed by host, port and path. When a new entry would exceed the
capacity, the least recently used entries are dropped; an entry larger than
the whole capacity raises `ValueError`. A successful `get` makes the entry the
most recently used.

### Robust I/O

```python
from labnet.rio import RobustReader, write_all

reader = RobustReader(sock)      # a socket, binary file or file descriptor
request_line = reader.readline() # one line, newline included; b"" at end
body = reader.readn(512)         # up to 512 bytes
write_all(sock, b"HTTP/1.0 200 OK\r\n")
```

Iterating over a `RobustReader` yields its lines until the input ends.

### Other helpers

- `labnet.textutil.atoi` parses a leading decimal integer and gives 0 when
  there is none.
- `labnet.jobs.JobList` is the shell's job table: `add`, `delete`, `by_pid`,
  `by_jid`, `fg_pid`, `pid_to_jid` and `listing`.
- `labnet.shell.parseline` splits a command line into arguments and a
  background flag.

## What is not included

The package has no HTTP proxy server and no web server: there is no command
that listens on a port, and nothing here opens client or listening sockets.
`LRUCache` and the I/O helpers can serve as parts of such a server, but the
server itself is not provided.