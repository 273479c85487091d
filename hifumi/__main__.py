"""Run the bot: ``python -m hifumi``."""

from hifumi.clients import disc


def main() -> None:
    disc.run()


if __name__ == "__main__":
    main()
