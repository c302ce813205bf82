"""Data models for suite declarations, synthetic manifests and results."""
