"""Entry point for ``python -m carbon_relay``."""

from carbon_relay.cli.relay import cli


if __name__ == "__main__":
    cli()
