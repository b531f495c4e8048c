# app_builder/core/spec_normalizer.py
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from app_builder.core.errors import InvalidSpecificationError
from app_builder.models import DEFAULT_APP_NAME, DEFAULT_DESCRIPTION, NormalizedSpecification


def _clean_text(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _first_text(raw: Mapping, *keys: str) -> Optional[str]:
    for key in keys:
        text = _clean_text(raw.get(key))
        if text:
            return text
    return None


def _clean_features(value: Any) -> Tuple[str, ...]:
    # multi-line text comes from the form's textarea, one feature per line
    if isinstance(value, str):
        entries: List[Any] = value.splitlines()
    elif isinstance(value, (list, tuple)):
        entries = list(value)
    else:
        return ()
    return tuple(text for text in (_clean_text(e) for e in entries) if text)


def normalize_specification(raw: Any) -> NormalizedSpecification:
    """
    Turn a loosely-structured specification into a fully defaulted record.

    Accepts `appName`, `description` (or `appDescription`) and `features`
    (or `appFeatures`, either a list or newline-delimited text). Only a
    key/value mapping is accepted; anything else raises InvalidSpecificationError.
    """
    if not isinstance(raw, Mapping):
        raise InvalidSpecificationError()

    features_raw = raw.get("features")
    if features_raw is None:
        features_raw = raw.get("appFeatures")

    return NormalizedSpecification(
        app_name=_first_text(raw, "appName") or DEFAULT_APP_NAME,
        description=_first_text(raw, "description", "appDescription") or DEFAULT_DESCRIPTION,
        features=_clean_features(features_raw),
    )
