"""awslatency: rank AWS regions by round-trip latency from this host."""

__version__ = "1.3.0"
