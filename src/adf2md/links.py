#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/adf2md/links.py
"""Link resolution collaborator.

Converters never decide on their own what a link points to. They hand the
raw ``href`` and node attributes to a resolver, which returns the text and
URL to emit. Hosts that know more about the link targets (page titles,
relative paths between exported files) pass their own resolver to
:func:`adf2md.api.convert_document`; the default one below only joins
relative targets onto the configured base URL.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol
from urllib.parse import urljoin, urlsplit

logger = logging.getLogger(__name__)

_UNESCAPED_CLOSE_PAREN = re.compile(r"(?<!\\)\)")


@dataclass(frozen=True)
class ResolvedLink:
    """Text and target of a resolved link.

    Parameters
    ----------
    text : str
        Display text to use when the node supplies none
    url : str
        Link destination
    metadata : Mapping, default = empty
        Extra facts discovered while resolving (e.g. the original href)

    """

    text: str
    url: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


class LinkResolver(Protocol):
    """Callable turning a raw link target into a :class:`ResolvedLink`."""

    def __call__(self, href: str, attributes: Mapping[str, Any], base_url: str) -> ResolvedLink: ...


def resolve_link(href: str, attributes: Mapping[str, Any], base_url: str) -> ResolvedLink:
    """Resolve relative targets against ``base_url``.

    Absolute URLs, ``mailto:`` style targets and in-page anchors are
    returned unchanged. The display text falls back from the ``title``
    attribute to the ``text`` attribute to the URL itself.
    """
    url = href.strip()
    metadata: dict[str, Any] = {}
    if url and base_url and not urlsplit(url).scheme and not url.startswith("#"):
        resolved = urljoin(base_url, url)
        logger.debug("Resolved relative link %r against %r -> %r", url, base_url, resolved)
        metadata["source_href"] = url
        url = resolved

    text = attributes.get("title") or attributes.get("text") or url
    return ResolvedLink(text=str(text), url=url, metadata=metadata)


def escape_link_destination(url: str) -> str:
    """Make a URL safe to place inside ``[text](...)``.

    Closing parentheses that are not already escaped get a backslash and
    spaces are percent-encoded.
    """
    return _UNESCAPED_CLOSE_PAREN.sub(r"\\)", url.strip()).replace(" ", "%20")


def format_link(text: str, url: str) -> str:
    """Build an inline link."""
    return f"[{text}]({escape_link_destination(url)})"


__all__ = ["ResolvedLink", "LinkResolver", "resolve_link", "escape_link_destination", "format_link"]
