"""Entry point for the ``cardscan`` console script and ``python -m cardscan``."""

from .cli import app


def main():
    """Run the card scanner CLI under its installed command name."""
    app(prog_name="cardscan")


if __name__ == "__main__":
    main()
