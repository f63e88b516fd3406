"""Allow `python -m rmate`."""

from rmate.client.main import main

if __name__ == "__main__":
    main()
