"""PDF layout engine: measurement, drawing helpers, composers and assets."""
