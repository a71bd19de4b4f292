"""Command-line front end for the Art-Net bridge."""
