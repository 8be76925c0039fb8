"""Allow ``python -m pmon``."""

from pmon.cli.main import app

if __name__ == "__main__":
    app()
