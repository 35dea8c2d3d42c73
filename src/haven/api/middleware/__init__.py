"""HTTP middleware package."""
