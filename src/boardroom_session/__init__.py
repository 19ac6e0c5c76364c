"""Boardroom session engine package."""

from __future__ import annotations

from typing import Optional, Sequence

__all__ = ["run_cli"]


def run_cli(argv: Optional[Sequence[str]] = None) -> None:
    """Proxy to :mod:`boardroom_session.cli.run_cli` for convenience."""

    from .cli import run_cli as _run_cli_impl

    _run_cli_impl(argv)
