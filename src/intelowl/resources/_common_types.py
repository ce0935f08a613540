"""Shared types and normalization helpers for resources.

This module contains:
- TLP levels and normalization (used by analyses and playbooks)
- Observable classifications and detection (used by analyses)
- Name sequence normalization (analyzer/connector/tag lists)
"""

from __future__ import annotations

import ipaddress
import logging
import re
from typing import Literal, Sequence, get_args

from ..utils import unique_in_order

_logger = logging.getLogger(__name__)


# --- TLP --- #
TLP = Literal["CLEAR", "GREEN", "AMBER", "RED"]
TLPS: tuple[TLP, ...] = get_args(TLP)


def _normalize_tlp(value: object) -> TLP:
    """Normalize a TLP level to its upper-case name.

    ``WHITE`` is accepted as the pre-2.0 name of ``CLEAR``.

    Raises
    ------
    ValueError
        If the value is not a known TLP level.
    """
    if not isinstance(value, str):
        raise ValueError(f"Invalid TLP: {value!r}")
    normalized = value.strip().upper()
    if normalized.startswith("TLP:"):
        normalized = normalized[4:]
    if normalized == "WHITE":
        return "CLEAR"
    if normalized in TLPS:
        return normalized
    raise ValueError(f"Invalid TLP: {value!r}")


# --- Observable Classification --- #
ObservableClassification = Literal["ip", "url", "domain", "hash", "generic"]
OBSERVABLE_CLASSIFICATIONS: tuple[ObservableClassification, ...] = get_args(ObservableClassification)

_HASH_RE = re.compile(r"^(?:[0-9a-f]{32}|[0-9a-f]{40}|[0-9a-f]{64}|[0-9a-f]{128})$", re.IGNORECASE)
_URL_RE = re.compile(r"^[a-z][a-z0-9+.-]*://\S+$", re.IGNORECASE)
_DOMAIN_RE = re.compile(
    r"^(?=.{1,253}$)(?:[a-z0-9_](?:[a-z0-9_-]{0,61}[a-z0-9])?\.)+[a-z][a-z0-9-]{0,61}[a-z0-9]\.?$",
    re.IGNORECASE,
)


def _detect_classification(observable: str) -> ObservableClassification:
    """Guess the classification of an observable value.

    Falls back to ``"generic"`` for anything that is not an IP address, URL,
    domain name or MD5/SHA1/SHA256/SHA512 digest.
    """
    value = observable.strip()
    try:
        ipaddress.ip_address(value)
        return "ip"
    except ValueError:
        pass
    if _HASH_RE.match(value):
        return "hash"
    if _URL_RE.match(value):
        return "url"
    if _DOMAIN_RE.match(value):
        return "domain"
    return "generic"


def _normalize_classification(value: object) -> ObservableClassification:
    if isinstance(value, str) and value.strip().lower() in OBSERVABLE_CLASSIFICATIONS:
        return value.strip().lower()
    raise ValueError(f"Invalid observable classification: {value!r}")


# --- Name Sequence Normalization --- #
def _normalize_name_sequence(names: str | Sequence[str] | None) -> list[str]:
    """Normalize a single name or sequence of names to a deduplicated list.

    Blank and non-string entries are dropped with a warning; ``None`` yields
    an empty list.
    """
    if names is None:
        return []
    if isinstance(names, str):
        names = [names]
    elif not isinstance(names, Sequence):
        raise ValueError(f"Expected a name or sequence of names, got {type(names).__name__}")

    valid: list[str] = []
    for name in names:
        if isinstance(name, str) and name.strip():
            valid.append(name.strip())
        else:
            _logger.warning("Dropping invalid name: %r", name)
    return unique_in_order(valid)
