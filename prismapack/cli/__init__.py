"""prismapack command line interface."""
