"""nodewatch - live monitoring client and dashboard for DMX/RDM network nodes."""

__version__ = "0.1.0"
