# cmdlab.py
from pathlib import Path

from dotenv import load_dotenv

from cmdcore.cli import configure_logging, run

# project root is where cmdlab.py lives; real environment variables win
load_dotenv(Path(__file__).resolve().parent / ".env", override=False)


def main() -> None:
    configure_logging()
    run()


if __name__ == "__main__":
    main()
