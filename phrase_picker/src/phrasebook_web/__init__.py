"""Web UI and command line front ends for the phrase catalog."""
