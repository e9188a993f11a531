"""Module entrypoint for `python -m branchpick`."""

try:
    from .cli import run
except ImportError:
    # Running the file directly leaves no parent package for the relative import.
    from branchpick.cli import run


if __name__ == "__main__":
    raise SystemExit(run())
