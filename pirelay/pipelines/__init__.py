"""Request-time pipelines: normalization, PI email matching and result enrichment."""
