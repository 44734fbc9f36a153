"""Domain layer: catalog model, pricing, reconciliation and anomaly scanning."""
