"""Network dimensioning engine for GSM, UMTS, hertzian and optical links."""

__version__ = "1.0.0"
