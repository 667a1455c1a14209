"""Climate aggregation, trend estimation and anomaly analysis."""
