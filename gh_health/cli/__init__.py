"""Command line interface for github-repo-health."""
