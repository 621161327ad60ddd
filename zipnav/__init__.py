"""Public package surface for zipnav.

Exports ``main`` for programmatic CLI invocation.
The archive tree model lives in ``zipnav.archive``; the shared navigation
contract and filesystem backend live in ``zipnav.nodes``.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)

__all__ = ["main"]
