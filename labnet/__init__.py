"""LRU response cache, robust socket I/O, an adder CGI program and a job-control shell."""

__version__ = "0.1.0"