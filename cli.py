# cli.py

"""
Run SiteSage from a source checkout without installing it.

Example:
    python cli.py ask "How do I get started?"
"""
from site_sage.cli import cli

if __name__ == "__main__":
    cli()
