"""Compute "edit this page" links for documentation sources."""

from __future__ import annotations

from typing import Final

__all__ = [
    "DEFAULT_EDIT_URL_BASE",
    "GENERATED_PREFIX",
    "edit_url",
]

DEFAULT_EDIT_URL_BASE: Final[str] = "https://github.com/pantsbuild/pants/edit/main/docs/"
# Reference pages are generated from help output and have no editable source.
GENERATED_PREFIX: Final[str] = "reference/"


def edit_url(doc_path: str, base: str = DEFAULT_EDIT_URL_BASE) -> str | None:
    """Return the edit link for ``doc_path``, or ``None`` for generated pages.

    >>> edit_url("docs/introduction/welcome.mdx", "https://example.com/edit/")
    'https://example.com/edit/docs/introduction/welcome.mdx'
    >>> edit_url("reference/goals/test.mdx") is None
    True
    """
    if doc_path.startswith(GENERATED_PREFIX):
        return None
    return f"{base}{doc_path}"
