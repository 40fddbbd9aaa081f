"""Configuration and error types shared across font-loader."""
