"""Shared fixtures for the documentation extraction tests."""

from pathlib import Path

import pytest

SAMPLE_PHP = r"""<?php
/**
 * Helpers for strings.
 *
 * @author Jane Doe
 * @author John Roe
 * @version 1.2
 * @uses vendor/lib Shared helpers
 */

namespace App\Text;

/**
 * Formats text.
 */
class Formatter extends Base {

    /**
     * Pads a value.
     *
     * @param string $value Text to pad.
     * @param int $width Target width.
     * @return string The padded text.
     */
    public function pad($value, $width = 10) {
        // "quoted" comment with { braces }
        return str_pad($value, $width, " ");
    }

    private function helper() {}
}
"""


@pytest.fixture
def sample_php() -> str:
    """Return a small PHP source with file, class and method documentation."""
    return SAMPLE_PHP


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """Write the sample PHP source to a temporary file."""
    path = tmp_path / "sample.php"
    path.write_text(SAMPLE_PHP, encoding="utf-8")
    return path
