"""paramguard command line interface."""
