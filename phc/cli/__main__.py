"""Module entry point for `python -m phc.cli`."""

if __name__ == "__main__":  # pragma: no cover (invocation driven)
    from phc.cli import cli

    cli()
