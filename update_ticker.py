"""Update ticker.json with the latest commodity prices."""

from commodity_ticker.pipeline import main


if __name__ == "__main__":
    main()
