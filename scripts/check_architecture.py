#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/property_mapper"


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # Only the CLI talks to typer.
    for path in PACKAGE.rglob("*.py"):
        if path.parent.name == "cli":
            continue
        _assert_no_imports(path, ["import typer", "from typer"])

    # Matching runs on ports and adapters, never on the API or CLI layers.
    for path in (PACKAGE / "matching").glob("*.py"):
        _assert_no_imports(
            path,
            [
                "from property_mapper.api",
                "from property_mapper.cli",
                "from property_mapper.store",
                "from property_mapper.application.use_cases",
            ],
        )

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(path, ["from property_mapper.cli", "from property_mapper.api"])

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
