"""User mapping resolution: catalog, discovery, default selection and registry."""
