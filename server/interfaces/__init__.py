"""HTTP interface layer: routers and response schemas."""
