"""Command-line launcher for running geo_image_index from a source checkout."""

from geo_image_index.main import main

if __name__ == "__main__":
    main()
