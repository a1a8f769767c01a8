"""COVID-19 US case and death report pipeline."""

__version__ = "0.0.1"
