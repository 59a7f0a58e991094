"""HTTP routes for the away rule service."""
