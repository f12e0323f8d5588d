"""Top-level package for the Marks Toolkit.

Provides subpackages:
- marks_toolkit.core – data models, store document schema, serialization
- marks_toolkit.ingest – raw score conversion and bulk ingestion
- marks_toolkit.stats – class statistics for one test
- marks_toolkit.store – mark record persistence (in-memory and JSON file)
- marks_toolkit.report – single-page class statement and student report card
- marks_toolkit.cli – command line entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    # In a source checkout, read directly from pyproject.toml
    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"

    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.3.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    # Fallback to importlib.metadata for installed package
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    try:
        return pkg_version("marks_toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__all__: list[str] = ["__version__"]
