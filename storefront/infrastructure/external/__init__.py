"""External services: object storage and the shipping-rate provider."""
