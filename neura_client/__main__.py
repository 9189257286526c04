"""Run the Neura terminal chat client."""

from neura_client.cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
