"""Top-level package for FormCraft.

Provides subpackages:
- formcraft.core – immutable entity models, schemas and serialization
- formcraft.stores – persisted library and header/footer stores
- formcraft.assembly – questionnaire assembly (in-memory)
- formcraft.query – search, filter and pagination helpers
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "0.3.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    try:
        return pkg_version("formcraft")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
