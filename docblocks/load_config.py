"""Logic for loading and merging configuration files."""

import copy
from pathlib import Path
from typing import Any

import yaml

from docblocks.deep_merge import deep_merge

DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "languages": {
        ".php": "php",
    },
    "syntax": {
        "php": {
            "code_start": "<?",
            "code_start_full": "<?php",
            "code_end": "?>",
            "line_comment": "//",
            "block_comment_start": "/*",
            "block_comment_end": "*/",
            "doc_comment_start": "/**",
            "quotes": ['"', "'"],
            "escape": "\\",
            # Order matters only for display; matching is longest first.
            "declarations": {
                "public function": "public_method",
                "private function": "private_method",
                "protected function": "protected_method",
                "function": "function",
                "class": "class",
                "namespace": "namespace",
            },
            "statement_separators": ["{", "}", ";"],
            "no_space_before": ["(", ")", ","],
            "args_start": "(",
            "args_end": ")",
            "doc_line_marker": "*",
            "tag_prefix": "@",
            "param_pattern": r"\$[A-Za-z_\x7f-\xff][A-Za-z0-9_\x7f-\xff]*",
        },
    },
    "lint": {
        "enabled": True,
        "summary_exempt_names": ["__construct"],
        "summary_exempt_kinds": ["namespace", "class"],
    },
    "render": {
        "link_param": "decl",
        "link_target": "doclink",
        "namespace_separator": "\\",
        "labels": {
            "functions": "Functions",
            "class": "Class",
            "view_details": "View details",
            "uses": "Uses",
            "parameters": "Parameters",
            "returns": "Returns",
            "version": "Version",
            "author": "Author",
            "since": "Since",
            "back": "Back to overview",
            "contents": "Contents",
            "errors": "Problems found",
        },
    },
}


def load_config(path: str | None = None) -> dict[str, Any]:
    """Load configuration from a YAML file and merge it with defaults."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    if path:
        p = Path(path)
        if p.exists():
            user_config = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
            config = deep_merge(config, user_config)
    return config
