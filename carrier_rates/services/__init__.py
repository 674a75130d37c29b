# Services layer: carrier clients and rate aggregation
