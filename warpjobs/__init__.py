"""Job scheduling controller with accounts, job updates, cancellation and eviction over an in-memory runtime."""

__version__ = "0.1.0"