"""Logic for computing stable hashes of configuration objects."""

import hashlib
import json
from typing import Any

# Sections that change what a parse produces; rendering options do not.
PARSE_SECTIONS = ("languages", "syntax", "lint")


def compute_config_hash(config: dict[str, Any]) -> str:
    """Compute a stable hash of the parse-relevant configuration.

    Uses canonical JSON serialization (sorted keys).
    """
    relevant = {k: config.get(k) for k in PARSE_SECTIONS}
    config_json = json.dumps(relevant, sort_keys=True, ensure_ascii=True)
    return hashlib.sha256(config_json.encode("utf-8")).hexdigest()
