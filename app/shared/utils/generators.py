"""Identifier generators for scheduler rows and scheduler runs."""

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Primary key for executions, notifications and the other scheduler tables."""
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(f"Expected str from cuid_generator, got {type(result).__name__}")
    return result


def generate_run_id(source: str) -> str:
    """Request ID for a tick started outside HTTP, e.g. 'cli-<cuid>'.

    Stays within the X-Request-ID alphabet so log lines from the CLI and the
    endpoint can be grepped the same way.
    """
    return f"{source}-{generate_cuid()}"
