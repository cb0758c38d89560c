"""LoRaWAN identifiers, payload fields, join frames, MICs and payload encryption."""

__version__ = "0.1.0"