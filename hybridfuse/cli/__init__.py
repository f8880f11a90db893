"""hybridfuse command line interface."""
