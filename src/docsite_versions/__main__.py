"""Allow ``python -m docsite_versions``."""

from docsite_versions.cli import app

app(prog_name="docsite-versions")
