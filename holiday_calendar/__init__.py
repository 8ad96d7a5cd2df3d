"""Holiday calendar feed: upstream holidays enriched with supplementary observances."""

__version__ = "1.0.0"
