"""Command-line interface (``dpql``)."""
