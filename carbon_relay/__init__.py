"""Carbon relay: match paywalled headlines to freely accessible sources."""

__version__ = "0.1.0"
